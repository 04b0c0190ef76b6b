"""
Treatment price API package.
The HTTP layer lives in `price_api.api`; shared helpers such as logging setup live in `price_api.common`.
"""
