"""Core constants shared across layers."""

# Change descriptions written by the version writer
INITIAL_VERSION_DESCRIPTION = "initial version"
VERSION_UPDATE_DESCRIPTION = "update to version {version}"

# Comment author fallback when the acting user has no display name
ANONYMOUS_AUTHOR = "Anonymous"

# Analytics cache key parts
CACHE_PREFIX_ANALYTICS = "analytics"
CACHE_KEY_SEP = ":"

# Matomo label format for an event: "<category> > @<action>"
MATOMO_LABEL_FORMAT = "{category} > @{action}"

# Default lookback for analytics queries (days before today)
ANALYTICS_DEFAULT_LOOKBACK_DAYS = 31

# HTTP status codes that trigger an outbound retry
RETRYABLE_STATUS_CODES = frozenset({429, 502, 503, 504})
