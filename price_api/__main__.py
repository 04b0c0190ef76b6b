from price_api.api.server import main

main()
