PROJECT_NAME = "Storefront API"
API_PREFIX = "/api"
