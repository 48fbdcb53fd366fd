import string
from datetime import datetime

import pytest

from simpchat.messages import (
    ChatLine,
    Color,
    build_auth_packet,
    format_packet,
    hash_password,
    parse_input,
)
from simpchat.protocol import Packet, PacketKind, ProtocolError, encode_packet

NOW = datetime(2024, 1, 2, 3, 4, 5)


def test_timestamp_format():
    line = ChatLine("hi", Color.WHITE, NOW)
    assert line.timestamp() == "03:04:05"


def test_formatted_line_colors_have_expected_rgb():
    join_line = format_packet(Packet(PacketKind.JOIN, ("alice",)), NOW)
    message_line = format_packet(Packet(PacketKind.MESSAGE, ("hi", "alice", "general")), NOW)
    assert join_line.color.rgb == (255, 255, 0)
    assert message_line.color.rgb == (255, 255, 255)


def test_hash_password_is_sha512_hex():
    password = "password"
    digest = hash_password(password)
    assert len(digest) == 128
    assert set(digest) <= set(string.hexdigits.lower())


def test_hash_password_deterministic_and_distinct():
    password = "password"
    other = "secret"
    assert hash_password(password) == hash_password(password)
    assert hash_password(password) != hash_password(other)


def test_build_auth_packet_fields():
    password = "password"
    packet = build_auth_packet("alice", password)
    assert packet.kind is PacketKind.AUTH
    assert packet.args == ("alice", hash_password(password))


def test_build_auth_packet_wire_bytes():
    password = "password"
    wire = encode_packet(build_auth_packet("alice", password))
    assert wire.startswith(b"a\x01alice\x01")
    assert wire.endswith(hash_password(password).encode("ascii"))


@pytest.mark.parametrize(
    "text, expected",
    [
        ("/dm bob hello there", Packet(PacketKind.CLIENT_DM, ("bob", "hello there"))),
        ("/dm bob", Packet(PacketKind.CLIENT_DM, ("bob", ""))),
        ("/dm", Packet(PacketKind.PING)),
        ("/dmx", Packet(PacketKind.CLIENT_DM, ("", ""))),
        ("/join general", Packet(PacketKind.SERVER_COMMAND, ("/join general",))),
        ("/", Packet(PacketKind.SERVER_COMMAND, ("/",))),
        ("hello, world!", Packet(PacketKind.CLIENT_MESSAGE, ("hello, world!",))),
    ],
)
def test_parse_input(text, expected):
    assert parse_input(text) == expected


def test_parse_input_wire_for_dm():
    assert encode_packet(parse_input("/dm bob hi")) == b"b\x01bob\x01hi"


def test_format_message():
    packet = Packet(PacketKind.MESSAGE, ("hi", "alice", "general"))
    line = format_packet(packet, NOW)
    assert line == ChatLine("[#general] <alice>: hi", Color.WHITE, NOW)


@pytest.mark.parametrize(
    "packet, text, color",
    [
        (Packet(PacketKind.JOIN, ("alice",)), "alice joined the server", Color.YELLOW),
        (Packet(PacketKind.LEAVE, ("alice",)), "alice left the server", Color.YELLOW),
        (Packet(PacketKind.CLIENT_RESPONSE, ("ok",)), "ok", Color.GRAY),
        (Packet(PacketKind.SERVER_DM, ("note",)), "[Server] note", Color.LIGHT_GREEN),
        (Packet(PacketKind.BROADCAST, ("news",)), "[Server] news", Color.LIGHT_GREEN),
        (
            Packet(PacketKind.CHANNEL_JOIN, ("alice", "lobby")),
            "alice joined #lobby",
            Color.YELLOW,
        ),
        (
            Packet(PacketKind.CHANNEL_LEAVE, ("alice", "lobby")),
            "alice left #lobby",
            Color.YELLOW,
        ),
    ],
)
def test_format_packet_lines(packet, text, color):
    line = format_packet(packet, NOW)
    assert line.text == text
    assert line.color is color
    assert line.time == NOW


def test_format_list_gives_no_line():
    assert format_packet(Packet(PacketKind.LIST, ("alice,bob",)), NOW) is None


@pytest.mark.parametrize(
    "packet",
    [
        Packet(PacketKind.PING),
        Packet(PacketKind.ILLEGAL),
        Packet(PacketKind.GRACEFUL_DISCONNECT),
        Packet(PacketKind.SERVER_COMMAND, ("/join x",)),
        Packet(PacketKind.CLIENT_DM, ("bob", "hi")),
    ],
)
def test_format_unexpected_packets_raise(packet):
    with pytest.raises(ProtocolError):
        format_packet(packet, NOW)