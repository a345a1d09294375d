"""
Shared configuration for the CMS tools.

Site ids, collection slugs and rate settings live here; API tokens come from
the environment (optionally populated from a .env file).
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# =============================================================================
# CONFIGURATION
# =============================================================================

PACKAGE_DIR = Path(__file__).parent
PROJECT_ROOT = PACKAGE_DIR.parent

API_BASE = "https://api.webflow.com/v2"
REQUEST_TIMEOUT_SECONDS = 60
ITEMS_PAGE_SIZE = 100

# Environment variable names
OLD_TOKEN_ENV = "WEBFLOW_API_OLD"
NEW_TOKEN_ENV = "WEBFLOW_API_NEW"

DEFAULT_OLD_SITE_ID = "6795e1366df80683586ce64e"
DEFAULT_NEW_SITE_ID = "688b84e1d55545ae80e8ab02"

# Projects collection differs in slug between the two sites
OLD_PROJECTS_SLUG = "project"
NEW_PROJECTS_SLUG = "projects"

# Stripped before recreating OLD items on the NEW site:
#   slug       - let Webflow generate a new unique slug
#   item-style - option ids differ between the two sites
REBUILD_STRIP_FIELDS = ("slug", "item-style")

LOCATION_FIELD = "location"
LOCATION_SUFFIX = ", Germany"

CONFIRM_DELAY_SECONDS = 5
DEFAULT_RATE_PER_SECOND = 5.0
SAMPLE_ITEM_LIMIT = 3


# =============================================================================
# CREDENTIAL LOADING
# =============================================================================


def load_env():
    """Load environment variables from .env file. Returns the path used, or None."""
    env_paths = [
        Path.cwd() / ".env",
        PROJECT_ROOT / ".env",
        Path.home() / "webflow-cms-ops" / ".env",
    ]
    for env_path in env_paths:
        if env_path.exists():
            load_dotenv(env_path)
            return env_path
    return None


def old_site_id() -> str:
    return os.getenv("WEBFLOW_OLD_SITE_ID", DEFAULT_OLD_SITE_ID)


def new_site_id() -> str:
    return os.getenv("WEBFLOW_NEW_SITE_ID", DEFAULT_NEW_SITE_ID)


def old_token():
    return os.getenv(OLD_TOKEN_ENV)


def new_token():
    return os.getenv(NEW_TOKEN_ENV)


def rate_per_second() -> float:
    """Mutating-request rate. Falls back to the default on a malformed value."""
    raw = os.getenv("WEBFLOW_RATE_PER_SECOND")
    if not raw:
        return DEFAULT_RATE_PER_SECOND
    try:
        rate = float(raw)
    except ValueError:
        return DEFAULT_RATE_PER_SECOND
    return rate if rate > 0 else DEFAULT_RATE_PER_SECOND


def runs_dir() -> Path:
    return Path(os.getenv("WEBFLOW_RESULTS_DIR", PROJECT_ROOT / "runs"))


def mask_token(token) -> str:
    """First 10 characters of a token for display, or NOT FOUND."""
    if not token:
        return "NOT FOUND"
    return f"{token[:10]}..."
