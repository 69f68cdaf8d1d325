import os

from dotenv import load_dotenv

from enums.runtime_environment import RuntimeEnvironment

# Load .env but don't override existing environment variables
# This allows test scripts to set RUNTIME_ENVIRONMENT=TEST before import
load_dotenv(".env", override=False)

# Parse RUNTIME_ENVIRONMENT with clear error message on misconfiguration
try:
    _runtime_env_str = os.environ.get("RUNTIME_ENVIRONMENT")
    if not _runtime_env_str:
        raise ValueError("RUNTIME_ENVIRONMENT environment variable is not set")
    RUNTIME_ENVIRONMENT = RuntimeEnvironment(_runtime_env_str)
except ValueError as e:
    valid_values = [env.value for env in RuntimeEnvironment]
    import sys
    print(f"\n ERROR: Invalid RUNTIME_ENVIRONMENT configuration\n", file=sys.stderr)
    print(f"Reason: {e}", file=sys.stderr)
    print(f"Valid values: {', '.join(valid_values)}", file=sys.stderr)
    print(f"Current value: {os.environ.get('RUNTIME_ENVIRONMENT', '(not set)')}", file=sys.stderr)
    print(f"\nAdd to .env: RUNTIME_ENVIRONMENT={valid_values[0]}\n", file=sys.stderr)
    sys.exit(1)

WEBAPP_HOST = os.environ.get("WEBAPP_HOST", "0.0.0.0")
WEBAPP_PORT = int(os.environ.get("WEBAPP_PORT")) if os.environ.get("WEBAPP_PORT") else 8000

# Florist One vendor API
# Both values unset = mock mode (carts simulated in cookies, no vendor calls)
FLORISTONE_AFFILIATE_ID = os.environ.get("FLORISTONE_AFFILIATE_ID", "")
FLORISTONE_API_TOKEN = os.environ.get("FLORISTONE_API_TOKEN", "")
FLORISTONE_FLOWERSHOP_URL = os.environ.get("FLORISTONE_FLOWERSHOP_URL", "https://www.floristone.com/api/rest/flowershop")
FLORISTONE_CART_URL = os.environ.get("FLORISTONE_CART_URL", "https://www.floristone.com/api/rest/shoppingcart")

# Vendor call policy
VENDOR_REQUEST_TIMEOUT_SECONDS = float(os.environ.get("VENDOR_REQUEST_TIMEOUT_SECONDS", "30"))
VENDOR_MAX_RETRIES = int(os.environ.get("VENDOR_MAX_RETRIES", "2"))  # Idempotent reads only
VENDOR_RETRY_DELAY_SECONDS = float(os.environ.get("VENDOR_RETRY_DELAY_SECONDS", "1.0"))

# Pricing
MOCK_DELIVERY_FEE = float(os.environ.get("MOCK_DELIVERY_FEE", "14.99"))
MOCK_TAX_RATE = float(os.environ.get("MOCK_TAX_RATE", "0.115"))
ORDER_DELIVERY_FEE = float(os.environ.get("ORDER_DELIVERY_FEE", "14.99"))

# Rate Limiting Configuration
GET_TOTAL_RATE_LIMIT_MAX_REQUESTS = int(os.environ.get("GET_TOTAL_RATE_LIMIT_MAX_REQUESTS", "30"))
GET_TOTAL_RATE_LIMIT_WINDOW_MS = int(os.environ.get("GET_TOTAL_RATE_LIMIT_WINDOW_MS", "60000"))

# Cache Configuration
CACHE_BACKEND = os.environ.get("CACHE_BACKEND", "memory")  # memory, redis
REDIS_HOST = os.environ.get("REDIS_HOST")
REDIS_PASSWORD = os.environ.get("REDIS_PASSWORD")
DELIVERY_DATES_CACHE_TTL_SECONDS = int(os.environ.get("DELIVERY_DATES_CACHE_TTL_SECONDS", str(20 * 60)))

# CORS (comma-separated origins, empty = middleware disabled)
CORS_ALLOWED_ORIGINS = os.environ.get("CORS_ALLOWED_ORIGINS", "").split(",") if os.environ.get("CORS_ALLOWED_ORIGINS") else []

# Logging Configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_MASK_SECRETS = os.environ.get("LOG_MASK_SECRETS", "true") == "true"  # Mask sensitive data in logs

# Log Retention: Environment-specific defaults
if RUNTIME_ENVIRONMENT == RuntimeEnvironment.DEV:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "30"))
else:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "5"))
