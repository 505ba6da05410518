"""Configuration keys, environment variable names and listing limits."""

# Credentials
COSN_CREDENTIALS_PROVIDER = "fs.cosn.credentials.provider"
COSN_SECRET_ID_KEY = "fs.cosn.userinfo.secretId"
COSN_SECRET_KEY_KEY = "fs.cosn.userinfo.secretKey"
COSN_SESSION_TOKEN_KEY = "fs.cosn.userinfo.sessionToken"  # noqa: S105

COSN_SECRET_ID_ENV = "COSN_SECRET_ID"
COSN_SECRET_KEY_ENV = "COSN_SECRET_KEY"
COSN_SESSION_TOKEN_ENV = "COSN_SESSION_TOKEN"  # noqa: S105

SECRETS_MANAGER_SECRET_NAME_KEY = "fs.cosn.credentials.secrets_manager.secret_name"
SECRETS_MANAGER_REGION_KEY = "fs.cosn.credentials.secrets_manager.region"
SECRETS_MANAGER_ENDPOINT_URL_KEY = "fs.cosn.credentials.secrets_manager.endpoint_url"

# Storage endpoint
COSN_ENDPOINT_URL_KEY = "fs.cosn.endpoint_url"
COSN_REGION_KEY = "fs.cosn.region"
DEFAULT_REGION = "eu-west-2"

# The maximum number of files listed in a single COS list request.
COS_MAX_LISTING_LENGTH = 999
