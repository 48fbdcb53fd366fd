"""What the chat client shows and sends.

This module turns received packets into chat lines, typed input into packets,
and a password into the digest sent when logging in.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from simpchat.protocol import Packet, PacketKind, ProtocolError

DM_PREFIX = "/dm"
COMMAND_PREFIX = "/"


class Color(Enum):
    """Colours chat lines are shown in, as RGB triples."""

    WHITE = (255, 255, 255)
    YELLOW = (255, 255, 0)
    GRAY = (160, 160, 160)
    LIGHT_GREEN = (144, 238, 144)

    @property
    def rgb(self) -> tuple[int, int, int]:
        return self.value


@dataclass(frozen=True)
class ChatLine:
    """One line of the chat log: its text, colour and time of arrival."""

    text: str
    color: Color
    time: datetime

    def timestamp(self) -> str:
        """The arrival time as ``HH:MM:SS``."""
        return self.time.strftime("%H:%M:%S")


def hash_password(password: str) -> str:
    """SHA-512 digest of the UTF-8 password, as lowercase hex."""
    return hashlib.sha512(password.encode("utf-8")).hexdigest()


def build_auth_packet(username: str, password: str) -> Packet:
    """The login packet: the user name and the digest of the password."""
    return Packet(PacketKind.AUTH, (username, hash_password(password)))


def parse_input(text: str) -> Packet:
    """Turn a line typed by the user into the packet to send.

    ``/dm <user> <message>`` becomes a direct message (a bare ``/dm`` a ping),
    any other line starting with ``/`` a server command, and everything else
    a plain chat message.
    """
    if text.startswith(DM_PREFIX):
        if len(text) < len(DM_PREFIX) + 1:
            return Packet(PacketKind.PING)
        command = text[len(DM_PREFIX) + 1 :]
        user, _, content = command.partition(" ")
        return Packet(PacketKind.CLIENT_DM, (user, content))
    if text.startswith(COMMAND_PREFIX):
        return Packet(PacketKind.SERVER_COMMAND, (text,))
    return Packet(PacketKind.CLIENT_MESSAGE, (text,))


def format_packet(packet: Packet, now: datetime) -> ChatLine | None:
    """The chat line a received packet shows as.

    A user list packet shows no line and gives ``None``. Packets a server
    never sends to a client raise :class:`ProtocolError`.
    """
    kind = packet.kind
    args = packet.args

    if kind is PacketKind.MESSAGE:
        content, username, channel = args
        return ChatLine(f"[#{channel}] <{username}>: {content}", Color.WHITE, now)
    if kind is PacketKind.JOIN:
        return ChatLine(f"{args[0]} joined the server", Color.YELLOW, now)
    if kind is PacketKind.LEAVE:
        return ChatLine(f"{args[0]} left the server", Color.YELLOW, now)
    if kind is PacketKind.CLIENT_RESPONSE:
        return ChatLine(args[0], Color.GRAY, now)
    if kind in (PacketKind.SERVER_DM, PacketKind.BROADCAST):
        return ChatLine(f"[Server] {args[0]}", Color.LIGHT_GREEN, now)
    if kind is PacketKind.CHANNEL_JOIN:
        name, channel = args
        return ChatLine(f"{name} joined #{channel}", Color.YELLOW, now)
    if kind is PacketKind.CHANNEL_LEAVE:
        name, channel = args
        return ChatLine(f"{name} left #{channel}", Color.YELLOW, now)
    if kind is PacketKind.LIST:
        return None
    if kind is PacketKind.CLIENT_DM:
        raise ProtocolError("direct message packets cannot be shown by the client")
    raise ProtocolError(f"received illegal packet: {kind.name}")