import pytest

from circle_bot.directory.emoji import is_emoji, validate_emoji
from circle_bot.directory.errors import ValidationFailure


@pytest.mark.parametrize(
    "value",
    [
        "♟\ufe0f",
        "\U0001F3B2",  # game die
        "\U0001F44D\U0001F3FD",  # thumbs up, medium skin tone
        "\U0001F469\u200d\U0001F4BB",  # woman technologist
        "\U0001F1EF\U0001F1F5",  # flag: Japan
        "1\ufe0f\u20e3",  # keycap one
        " \U0001F3B2 ",
    ],
)
def test_single_pictographs_are_accepted(value):
    assert is_emoji(value)


@pytest.mark.parametrize(
    "value",
    ["", "a", "chess", "<:chess:123456789012345678>", "\U0001F3B2\U0001F3B2x", "1"],
)
def test_non_emoji_are_rejected(value):
    assert not is_emoji(value)


def test_validate_emoji_strips_and_returns():
    assert validate_emoji(" \U0001F3B2 ") == "\U0001F3B2"


def test_validate_emoji_raises_validation_failure():
    with pytest.raises(ValidationFailure) as excinfo:
        validate_emoji("not an emoji")
    assert str(excinfo.value) == "Invalid emoji"
