"""Cache key builders. Single place for key format (DRY)."""

from trackplan.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_ANALYTICS


def analytics_key(key: str) -> str:
    """Namespaced Redis key for an analytics cache entry."""
    return f"{CACHE_PREFIX_ANALYTICS}{CACHE_KEY_SEP}{key}"


def analytics_pattern() -> str:
    """SCAN match pattern covering every analytics entry."""
    return f"{CACHE_PREFIX_ANALYTICS}{CACHE_KEY_SEP}*"
