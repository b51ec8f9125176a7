"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = Path(
    os.environ.get("DB_PATH", PROJECT_ROOT / "data" / "db" / "invite-composer.db")
)

# =============================================================================
# HUBSPOT CREDENTIALS (from environment)
# =============================================================================

HUBSPOT_ACCESS_TOKEN = os.environ.get("HUBSPOT_ACCESS_TOKEN", "")
HUBSPOT_BASE_URL = os.environ.get("HUBSPOT_BASE_URL", "https://api.hubapi.com")

# =============================================================================
# DIRECTORY CONFIGURATION
# =============================================================================

SEARCH_RESULT_LIMIT = 50
LIST_PAGE_LIMIT = 100

SEARCH_TYPES = {"name", "email", "phone", "company"}

CONTACT_PROPERTIES = [
    "firstname", "lastname", "email", "phone",
    "address", "city", "state", "zip", "company",
]
COMPANY_PROPERTIES = ["name", "address", "city", "state", "zip", "country"]

# =============================================================================
# CONTACT RESOLVER (client side)
# =============================================================================

GATEWAY_BASE_URL = os.environ.get("GATEWAY_BASE_URL", "http://localhost:8000")
SEARCH_DEBOUNCE_SECONDS = 0.5
MIN_QUERY_LENGTH = 2

# Always-invited participant appended to the attendee list when included
EXTRA_PARTICIPANT_EMAIL = os.environ.get("EXTRA_PARTICIPANT_EMAIL", "")

# =============================================================================
# TEMPLATE CONFIGURATION
# =============================================================================

RECURRENCE_FREQUENCIES = {"daily", "weekly", "monthly"}
WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
INVITE_TIMEZONE_LABEL = "PST"

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}
