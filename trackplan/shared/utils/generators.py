"""ID and value generators (CUID2 primary keys, request ids)."""

import secrets

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_request_id() -> str:
    """Short random hex id for requests that arrive without X-Request-ID."""
    return secrets.token_hex(16)
