# This file marks the services package for API data-access modules.
# Service modules own the SQL and row mapping so routers never touch raw queries.
