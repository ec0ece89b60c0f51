"""Platform → analytics site id mapping tests."""

import pytest

from trackplan.application.services.site_mapping import parse_site_mapping
from trackplan.domain.enums import Platform
from trackplan.domain.exceptions import ValidationException


def test_parse_default_mapping() -> None:
    assert parse_site_mapping("web:1,ios:2,android:3") == {
        Platform.WEB: 1,
        Platform.IOS: 2,
        Platform.ANDROID: 3,
    }


def test_parse_tolerates_spaces_case_and_empty_parts() -> None:
    assert parse_site_mapping(" Web : 7 ,, ios:8 ") == {Platform.WEB: 7, Platform.IOS: 8}


@pytest.mark.parametrize("raw", [None, ""])
def test_parse_empty(raw) -> None:
    assert parse_site_mapping(raw) == {}


@pytest.mark.parametrize("raw", ["web", "desktop:1", "web:abc"])
def test_parse_rejects_malformed_entries(raw: str) -> None:
    with pytest.raises(ValidationException) as exc_info:
        parse_site_mapping(raw)
    assert exc_info.value.details == {"field": "matomo_site_ids"}
