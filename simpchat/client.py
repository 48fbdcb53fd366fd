"""Chat client state and a session that talks to the server over a stream.

The session is transport-agnostic. It writes through any object with
``sendall`` and ``close``. Encryption and decryption are callables that map
bytes to bytes, so any cipher set up by a key exchange can be plugged in.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from simpchat.messages import ChatLine, build_auth_packet, format_packet, parse_input
from simpchat.protocol import Packet, PacketKind, decode_packet, encode_packet

DISCONNECTED_MESSAGE = "You were disconnected"
NO_ERROR_MESSAGE = "No error has occured"
CHANNELS = ("general", "lobby", "random")


class DisconnectedError(ConnectionError):
    """Raised when the connection to the server is gone."""


class _Stream(Protocol):
    def sendall(self, data: bytes) -> object: ...

    def close(self) -> object: ...


class ChatState:
    """Everything the client shows: chat lines, users online and connection status."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.messages: list[ChatLine] = []
        self.users: list[str] = []
        self.connected = False
        self.error: str = NO_ERROR_MESSAGE

    def apply(self, packet: Packet, now: datetime) -> ChatLine | None:
        """Record a received packet and return the line it adds, if any.

        A user list packet replaces the list of users instead of adding a line.
        """
        if packet.kind is PacketKind.LIST:
            members = packet.args[0].split(",")
            with self._lock:
                self.users = members
            return None
        line = format_packet(packet, now)
        if line is not None:
            with self._lock:
                self.messages.append(line)
        return line

    def clear_messages(self) -> None:
        """Empty the chat log."""
        with self._lock:
            self.messages.clear()

    def disconnect(self) -> None:
        """Mark the connection as lost, record why and empty the chat log."""
        with self._lock:
            self.connected = False
            self.error = DISCONNECTED_MESSAGE
            self.messages.clear()

    def join_channel_command(self, channel: str) -> str:
        """The command line that asks the server to move into ``channel``."""
        return f"/join {channel}"


class ChatSession:
    """A logged-in conversation with the server over an encrypted stream."""

    def __init__(
        self,
        stream: _Stream,
        encrypt: Callable[[bytes], bytes],
        decrypt: Callable[[bytes], bytes],
        state: ChatState,
    ) -> None:
        self.stream = stream
        self.encrypt = encrypt
        self.decrypt = decrypt
        self.state = state
        self.closed = False

    def _write(self, packet: Packet) -> None:
        if self.closed:
            raise DisconnectedError("session is closed")
        self.stream.sendall(self.encrypt(encode_packet(packet)))

    def authenticate(self, username: str, password: str) -> None:
        """Send the login packet and mark the state as connected."""
        self._write(build_auth_packet(username, password))
        self.state.connected = True

    def send(self, text: str) -> Packet | None:
        """Send a typed line; blank lines are ignored. Returns the packet sent."""
        if not text.strip():
            return None
        packet = parse_input(text)
        self._write(packet)
        return packet

    def receive(self, data: bytes, now: datetime) -> ChatLine | None:
        """Handle one chunk read from the server.

        Empty data (end of stream) or data that cannot be decrypted ends the
        session and raises :class:`DisconnectedError`.
        """
        if self.closed:
            raise DisconnectedError("session is closed")
        if not data:
            self._lose_connection()
            raise DisconnectedError("server closed the connection")
        try:
            plain = self.decrypt(data)
        except Exception as exc:
            self._lose_connection()
            raise DisconnectedError("received data could not be decrypted") from exc
        return self.state.apply(decode_packet(plain), now)

    def _lose_connection(self) -> None:
        self.close()
        self.state.disconnect()

    def close(self) -> None:
        """Close the stream; further sends and receives raise."""
        if self.closed:
            return
        self.closed = True
        self.stream.close()