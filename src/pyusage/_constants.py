"""Internal constants shared across the library."""

ANALYTICS_URL = "https://www.google-analytics.com/collect"
PROTOCOL_VERSION = "1"
CONTENT_TYPE = "application/x-www-form-urlencoded"

# Keys the analytics session keeps in the property store.
CLIENT_ID_KEY = "clientId"
ENABLED_KEY = "enabled"
FIRST_RUN_KEY = "firstRun"

#: Measurement Protocol limit for exception descriptions.
MAX_EXCEPTION_LENGTH = 150
