"""Internal constants shared across the library."""

CATALOG_BASE_URL = "https://app.ticketmaster.com/discovery/v2"
EVENTS_ENDPOINT = "/events.json"
IP_GEOLOCATION_URL = "https://ipapi.co/json/"
USER_AGENT = "pyeventmap (+https://github.com/pyeventmap/pyeventmap)"

# ------------------------------------------------------------------
# Catalog query defaults
# ------------------------------------------------------------------

DEFAULT_RADIUS = 20
DEFAULT_UNIT = "km"
DEFAULT_CLASSIFICATION = "Music"
DEFAULT_SORT = "date,asc"
VALID_UNITS: frozenset[str] = frozenset({"km", "miles"})

# ------------------------------------------------------------------
# Geolocation
# ------------------------------------------------------------------

# Central London.
FALLBACK_LATITUDE = 51.5074
FALLBACK_LONGITUDE = -0.1278

GEOLOCATION_TIMEOUT_MS = 10_000
UNSUPPORTED_REASON = "unsupported"

# ------------------------------------------------------------------
# Map view
# ------------------------------------------------------------------

DEFAULT_MAP_ZOOM = 13
USER_MARKER_KEY = "__user__"
USER_MARKER_LABEL = "You are here."
DEGRADED_BANNER = "Could not fetch your precise location. Showing approximate location."
LOADING_EVENTS_BANNER = "Loading nearby events..."
