import pytest

from circle_bot.directory.errors import InvalidFormat
from circle_bot.directory.models import MUTABLE_FIELDS, parse_snowflake

from fakes import make_circle


def test_sub_channels_are_stored_as_tuple():
    circle = make_circle(sub_channels=["1", "2"])

    assert circle.sub_channels == ("1", "2")
    assert circle in {circle}


def test_update_cannot_touch_identity_creation_time_or_sub_channels():
    assert not {"id", "created_on", "sub_channels"} & MUTABLE_FIELDS
    assert "name" in MUTABLE_FIELDS


@pytest.mark.parametrize("value, expected", [("123", 123), (" 42 ", 42), (7, 7)])
def test_parse_snowflake_accepts_digits(value, expected):
    assert parse_snowflake(value, "channel") == expected


@pytest.mark.parametrize("value", ["", "abc", "12a", "-5", "²"])
def test_parse_snowflake_rejects_non_numeric(value):
    with pytest.raises(InvalidFormat):
        parse_snowflake(value, "channel")
