"""Platform → analytics site id mapping ("web:1,ios:2,android:3")."""

from trackplan.domain.enums import Platform
from trackplan.domain.exceptions import ValidationException


def parse_site_mapping(raw: str | None) -> dict[Platform, int]:
    """Parse a comma-separated platform:site_id list.

    Raises:
        ValidationException: on unknown platforms or non-integer site ids.
    """
    mapping: dict[Platform, int] = {}
    if not raw:
        return mapping
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        platform_raw, sep, site_raw = part.partition(":")
        if not sep:
            raise ValidationException(
                f"Invalid site mapping entry '{part}' (expected platform:site_id)",
                field="matomo_site_ids",
            )
        try:
            platform = Platform(platform_raw.strip().lower())
            site_id = int(site_raw.strip())
        except ValueError as e:
            raise ValidationException(
                f"Invalid site mapping entry '{part}': {e}", field="matomo_site_ids"
            ) from e
        mapping[platform] = site_id
    return mapping
