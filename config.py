import os
import sys

from dotenv import load_dotenv

from enums.runtime_environment import RuntimeEnvironment

# Load .env but don't override existing environment variables
# This allows test scripts to set RUNTIME_ENVIRONMENT=TEST before import
load_dotenv(".env", override=False)


def _exit_with_config_error(name: str, reason: Exception, expected: str) -> None:
    print(f"\n ERROR: Invalid {name} configuration\n", file=sys.stderr)
    print(f"Reason: {reason}", file=sys.stderr)
    print(f"Expected: {expected}", file=sys.stderr)
    print(f"Current value: {os.environ.get(name, '(not set)')}\n", file=sys.stderr)
    sys.exit(1)


def _float_env(name: str, default: str) -> float:
    try:
        value = float(os.environ.get(name, default))
        if value < 0:
            raise ValueError(f"{name} must not be negative (got: {value})")
        return value
    except ValueError as e:
        _exit_with_config_error(name, e, "Non-negative number (e.g., 50, 1999, 1.5)")


# Parse RUNTIME_ENVIRONMENT with clear error message on misconfiguration
try:
    RUNTIME_ENVIRONMENT = RuntimeEnvironment(os.environ.get("RUNTIME_ENVIRONMENT", "DEV"))
except ValueError as e:
    valid_values = [env.value for env in RuntimeEnvironment]
    _exit_with_config_error("RUNTIME_ENVIRONMENT", e, f"One of: {', '.join(valid_values)}")

# Web server
WEBAPP_HOST = os.environ.get("WEBAPP_HOST", "0.0.0.0")
try:
    WEBAPP_PORT = int(os.environ.get("WEBAPP_PORT", "5000"))
except ValueError as e:
    _exit_with_config_error("WEBAPP_PORT", e, "Integer port number (e.g., 5000)")
SECURITY_HEADERS_ENABLED = os.environ.get("SECURITY_HEADERS_ENABLED", "true") == "true"
HSTS_ENABLED = os.environ.get("HSTS_ENABLED", "false") == "true"  # Only behind HTTPS
CORS_ALLOWED_ORIGINS = os.environ.get("CORS_ALLOWED_ORIGINS", "").split(",") if os.environ.get("CORS_ALLOWED_ORIGINS") else []

# Database
DB_NAME = os.environ.get("DB_NAME", "storefront.db")
DB_URL = os.environ.get("DB_URL", f"sqlite+aiosqlite:///data/{DB_NAME}")

# Admin API authentication (shared secret sent as X-Admin-Token header)
# Empty token disables every admin endpoint
ADMIN_API_TOKEN = os.environ.get("ADMIN_API_TOKEN", "")

# Checkout / Shipping Configuration
CURRENCY_SYMBOL = os.environ.get("CURRENCY_SYMBOL", "₹")
LOCAL_SHIPPING_REGION = os.environ.get("LOCAL_SHIPPING_REGION", "Gujarat")
LOCAL_RATE_PER_KG = _float_env("LOCAL_RATE_PER_KG", "50")
DEFAULT_RATE_PER_KG = _float_env("DEFAULT_RATE_PER_KG", "80")
FREE_SHIPPING_THRESHOLD = _float_env("FREE_SHIPPING_THRESHOLD", "1999")
HEAVY_WEIGHT_THRESHOLD_KG = _float_env("HEAVY_WEIGHT_THRESHOLD_KG", "1")

# Fulfillment handoff (WhatsApp deep link host)
WHATSAPP_HOST = os.environ.get("WHATSAPP_HOST", "wa.me")

# Cart persistence file used by CartStore.load() when no path is given
CART_STORAGE_PATH = os.environ.get("CART_STORAGE_PATH", "data/cart.json")

# Logging Configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_MASK_SECRETS = os.environ.get("LOG_MASK_SECRETS", "true") == "true"  # Mask sensitive data in logs

# Log Retention: Dev keeps two weeks for debugging, Prod keeps 5 days
if RUNTIME_ENVIRONMENT == RuntimeEnvironment.DEV:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "14"))
else:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "5"))
