"""Default values shared across the package."""

# Stripe API version pinned for every client built in one process
DEFAULT_API_VERSION = "2025-03-31.basil"

# Stripe rejects list/search page sizes above 100
MAX_PAGE_SIZE = 100

DEFAULT_MAX_RESULTS = 100
DEFAULT_FETCH_ALL_PAGE_SIZE = 20
DEFAULT_LIMIT = 10
