from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from services.validators import (
    ValidationError,
    check_passwords,
    iso_to_local,
    local_to_iso_utc,
    normalize_number,
    parse_decimal,
    parse_int,
    parse_tags,
    require,
    validate_appointment,
    validate_period,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("R$ 1.234,50", "1234.50"),
        ("1,234.50", "1234.50"),
        ("150,5", "150.5"),
        ("  99 ", "99"),
        ("200.", "200"),
        (None, None),
        (10, "10"),
    ],
)
def test_normalize_number(value, expected):
    assert normalize_number(value) == expected


def test_parse_decimal_reports_field():
    assert parse_decimal("1.500,00", "price") == Decimal("1500.00")
    with pytest.raises(ValidationError) as info:
        parse_decimal("", "price")
    assert (info.value.code, info.value.field) == ("required", "price")
    with pytest.raises(ValidationError) as info:
        parse_decimal("1-2", "price")
    assert info.value.code == "invalid_number"
    assert parse_decimal(" ", "price", required=False) is None


def test_parse_int():
    assert parse_int(" 42 ", "age") == 42
    assert parse_int("", "age") is None
    with pytest.raises(ValidationError) as info:
        parse_int("4.5", "priority", required=True)
    assert info.value.code == "invalid_integer"


def test_parse_tags_dedupes_and_trims():
    assert parse_tags(" botox, laser,,botox ") == ["botox", "laser"]
    assert parse_tags(None) == []


def test_require_and_passwords():
    assert require("  Ana ", "name") == "Ana"
    with pytest.raises(ValidationError):
        require("   ", "name")
    assert check_passwords("s3cret", "s3cret") == "s3cret"
    with pytest.raises(ValidationError) as info:
        check_passwords("s3cret", "other")
    assert info.value.code == "password_mismatch"


def test_local_to_iso_utc_converts_aware_values():
    moment = datetime(2024, 5, 10, 9, 30, tzinfo=timezone(timedelta(hours=-3)))
    assert local_to_iso_utc(moment) == "2024-05-10T12:30:00.000Z"
    assert local_to_iso_utc(None) is None


def test_iso_roundtrip_through_local_time():
    local = datetime(2024, 1, 2, 15, 45)
    assert iso_to_local(local_to_iso_utc(local)) == local
    assert iso_to_local("") is None


def test_validate_period():
    start = datetime(2024, 1, 1, 10)
    with pytest.raises(ValidationError) as info:
        validate_period(start, start)
    assert info.value.code == "end_before_start"
    with pytest.raises(ValidationError) as info:
        validate_period(None, start)
    assert info.value.field == "start"
    assert validate_period(start, start + timedelta(hours=1))


def test_online_appointment_requires_link():
    start = datetime(2024, 1, 1, 10)
    end = start + timedelta(hours=1)
    with pytest.raises(ValidationError) as info:
        validate_appointment("ONLINE", "  ", start, end)
    assert info.value.code == "meeting_link_required"
    assert validate_appointment("ONLINE", " https://meet/x ", start, end) == "https://meet/x"
    assert validate_appointment("IN_PERSON", "", start, end) is None
