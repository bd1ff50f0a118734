import json
from urllib.parse import unquote

import pytest

from circle_bot.directory import protocol
from circle_bot.directory.errors import InvalidFormat
from circle_bot.directory.protocol import Action, ButtonId

from fakes import make_circle


@pytest.mark.parametrize(
    "action, circle_id",
    [
        ("join", "r1"),
        ("about", "826695146250567681"),
        ("archive", "x"),
        ("join", "a-b_c.d~e"),
    ],
)
def test_decode_inverts_encode(action, circle_id):
    assert protocol.decode(protocol.encode(action, circle_id)) == (action, circle_id)


def test_join_id_decodes_to_action_and_circle():
    button = protocol.decode("circle/join/r1")

    assert button == ButtonId("join", "r1")
    assert button.kind is Action.JOIN


def test_encode_accepts_enum_members():
    assert protocol.encode(Action.ABOUT, "42") == "circle/about/42"


@pytest.mark.parametrize(
    "raw",
    [
        "badformat",
        "",
        "circle/join",
        "circle//r1",
        "circle/join/",
        "circles/join/r1",
        "role/join/r1",
        "circle/join/r1/extra",
        "xcircle/join/r1",
    ],
)
def test_decode_rejects_malformed_ids(raw):
    with pytest.raises(InvalidFormat):
        protocol.decode(raw)


def test_invalid_format_is_a_value_error():
    with pytest.raises(ValueError):
        protocol.decode("badformat")


def test_unknown_actions_decode_but_are_unrecognized():
    button = protocol.decode("circle/archive/r1")

    assert button.action == "archive"
    assert button.kind is Action.UNRECOGNIZED


@pytest.mark.parametrize(
    "action, circle_id",
    [("join", "a/b"), ("jo/in", "r1"), ("", "r1"), ("join", ""), ("join", "ré")],
)
def test_encode_rejects_bad_segments(action, circle_id):
    with pytest.raises(InvalidFormat):
        protocol.encode(action, circle_id)


def test_encode_enforces_discord_length_limit():
    prefix_len = len("circle/join/")
    fits = "9" * (protocol.MAX_CUSTOM_ID_BYTES - prefix_len)

    assert len(protocol.encode("join", fits)) == protocol.MAX_CUSTOM_ID_BYTES
    with pytest.raises(InvalidFormat):
        protocol.encode("join", fits + "9")


def test_is_circle_id_prefix_check():
    assert protocol.is_circle_id("circle/join/1")
    assert not protocol.is_circle_id("verify/accept")
    assert not protocol.is_circle_id(None)


def test_card_payload_layout():
    circle = make_circle("123", name="Chess Club", emoji="♟\ufe0f", channel="456")

    link = protocol.encode_card_payload(circle)

    prefix = "[\u200b](http://fake.fake?data="
    assert link.startswith(prefix)
    assert link.endswith(")")
    encoded = link[len(prefix):-1]

    # Everything outside the unreserved set is percent-encoded, including spaces and braces.
    assert " " not in encoded and "+" not in encoded
    assert encoded.startswith("%7B%22name%22%3A%22Chess%20Club%22")

    decoded = unquote(encoded)
    assert decoded == '{"name":"Chess Club","circle":"123","reactions":{"♟\ufe0f":"123"},"channel":"456"}'
    assert json.loads(decoded)["channel"] == "456"


def test_card_payload_requires_numeric_channel():
    with pytest.raises(InvalidFormat):
        protocol.encode_card_payload(make_circle("123", channel="general"))
