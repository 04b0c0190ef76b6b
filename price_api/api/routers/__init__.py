# This file marks the routers package for API route modules.
# Endpoint modules are grouped by resource: prices, bundles, and operational health.
