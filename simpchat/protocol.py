"""Wire format of the chat protocol: packet kinds, encoding and decoding.

A packet is a one-character type code followed by its string fields, each
preceded by the ``\\x01`` separator byte, all encoded as UTF-8.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

MSG_SIZE = 16384
"""Largest number of bytes read from the socket in one go."""

SEPARATOR = b"\x01"


class ProtocolError(ValueError):
    """Raised when bytes cannot be turned into a packet, or a packet into bytes."""


class PacketKind(Enum):
    """Every kind of packet the protocol knows."""

    MESSAGE = "message"
    CLIENT_MESSAGE = "client_message"
    CLIENT_DM = "client_dm"
    JOIN = "join"
    LEAVE = "leave"
    SERVER_COMMAND = "server_command"
    CLIENT_RESPONSE = "client_response"
    SERVER_DM = "server_dm"
    BROADCAST = "broadcast"
    AUTH = "auth"
    PING = "ping"
    CHANNEL_JOIN = "channel_join"
    CHANNEL_LEAVE = "channel_leave"
    LIST = "list"
    GRACEFUL_DISCONNECT = "graceful_disconnect"
    ILLEGAL = "illegal"

    @property
    def arity(self) -> int:
        """Number of string fields a packet of this kind carries."""
        return _ARITY[self]


_ARITY: dict[PacketKind, int] = {
    PacketKind.MESSAGE: 3,
    PacketKind.CLIENT_MESSAGE: 1,
    PacketKind.CLIENT_DM: 2,
    PacketKind.JOIN: 1,
    PacketKind.LEAVE: 1,
    PacketKind.SERVER_COMMAND: 1,
    PacketKind.CLIENT_RESPONSE: 1,
    PacketKind.SERVER_DM: 1,
    PacketKind.BROADCAST: 1,
    PacketKind.AUTH: 2,
    PacketKind.PING: 0,
    PacketKind.CHANNEL_JOIN: 2,
    PacketKind.CHANNEL_LEAVE: 2,
    PacketKind.LIST: 1,
    PacketKind.GRACEFUL_DISCONNECT: 0,
    PacketKind.ILLEGAL: 0,
}

# Codes used when sending. A client message shares the code of a message.
_ENCODE_CODES: dict[PacketKind, str] = {
    PacketKind.MESSAGE: "0",
    PacketKind.CLIENT_MESSAGE: "0",
    PacketKind.JOIN: "1",
    PacketKind.LEAVE: "2",
    PacketKind.SERVER_COMMAND: "5",
    PacketKind.CLIENT_RESPONSE: "6",
    PacketKind.GRACEFUL_DISCONNECT: "7",
    PacketKind.SERVER_DM: "8",
    PacketKind.BROADCAST: "9",
    PacketKind.AUTH: "a",
    PacketKind.CLIENT_DM: "b",
    PacketKind.PING: "c",
    PacketKind.CHANNEL_JOIN: "d",
    PacketKind.CHANNEL_LEAVE: "e",
    PacketKind.LIST: "f",
}

# Codes understood when receiving.
_DECODE_KINDS: dict[str, PacketKind] = {
    "0": PacketKind.MESSAGE,
    "1": PacketKind.JOIN,
    "2": PacketKind.LEAVE,
    "5": PacketKind.SERVER_COMMAND,
    "6": PacketKind.CLIENT_RESPONSE,
    "7": PacketKind.GRACEFUL_DISCONNECT,
    "8": PacketKind.SERVER_DM,
    "9": PacketKind.BROADCAST,
    "a": PacketKind.AUTH,
    "b": PacketKind.CLIENT_DM,
    "c": PacketKind.PING,
    "d": PacketKind.CHANNEL_JOIN,
    "e": PacketKind.CHANNEL_LEAVE,
    "f": PacketKind.LIST,
}


@dataclass(frozen=True)
class Packet:
    """A packet: its kind and exactly as many string fields as the kind takes."""

    kind: PacketKind
    args: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        args = tuple(self.args)
        if len(args) != self.kind.arity:
            raise ValueError(
                f"{self.kind.name} takes {self.kind.arity} field(s), got {len(args)}"
            )
        if not all(isinstance(arg, str) for arg in args):
            raise TypeError("packet fields must be strings")
        object.__setattr__(self, "args", args)


def split_bytes(data: bytes, separator: bytes) -> list[bytes]:
    """Split ``data`` on ``separator``.

    The pieces after each separator are returned in order, preceded by the
    first byte of ``data`` alone, which is where the type code lives.
    """
    if not separator:
        raise ValueError("separator must not be empty")
    if not data:
        raise ProtocolError("cannot split empty data")

    width = len(separator)
    matches = [
        (start, start + width)
        for start in range(len(data) - width + 1)
        if data[start : start + width] == separator
    ]

    current = data
    tail: list[bytes] = []
    for start, end in reversed(matches):
        if end > len(current):
            raise ProtocolError("overlapping separators in data")
        tail.append(current[end:])
        current = current[:start]

    tail.reverse()
    return [data[:1], *tail]


def encode_packet(packet: Packet) -> bytes:
    """Turn a packet into its wire bytes."""
    if packet.kind is PacketKind.ILLEGAL:
        raise ProtocolError("an illegal packet cannot be sent")
    code = _ENCODE_CODES[packet.kind]
    text = code + "".join("\x01" + arg for arg in packet.args)
    return text.encode("utf-8")


def decode_packet(buf: bytes) -> Packet:
    """Turn wire bytes into a packet; an unknown type code gives an ILLEGAL packet."""
    try:
        fields = [piece.decode("utf-8") for piece in split_bytes(buf, SEPARATOR)]
    except UnicodeDecodeError as exc:
        raise ProtocolError(f"packet is not valid UTF-8: {exc}") from exc

    kind = _DECODE_KINDS.get(fields[0])
    if kind is None:
        return Packet(PacketKind.ILLEGAL)

    values = fields[1:]
    if len(values) < kind.arity:
        raise ProtocolError(
            f"{kind.name} packet needs {kind.arity} field(s), got {len(values)}"
        )
    return Packet(kind, tuple(values[: kind.arity]))