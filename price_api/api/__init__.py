# This file marks the API package holding the app factory, routers, services, and schemas.
