class AppStatusCode:
    """Application level status codes carried in every JsonOutResult."""

    # Generic failures
    OPERATION_FAILED = "200"
    INVALID_INPUT = "201"
    RESOURCE_NOT_FOUND = "203"
    UPSTREAM_SERVICE_FAILED = "204"
    STORE_UNAVAILABLE = "205"

    # Authentication
    AUTHENTICATION_TOKEN_INVALID = "300"
    AUTHENTICATION_TOKEN_EXPIRED = "301"
    AUTHENTICATION_TOKEN_MISSING = "302"
    AUTHENTICATION_CREDENTIALS_INVALID = "303"
    AUTHENTICATION_USER_INVALID = "304"

    # Users / catalog
    USER_USERNAME_IS_UNIQUE = "400"
    CATEGORY_NOT_FOUND = "401"
    PRODUCT_NOT_FOUND = "402"
    STOCK_NOT_FOUND = "403"
