# simpchat

`simpchat` is the client side of the SIMP3 chat protocol: the packet wire
format, turning received packets into chat lines, turning typed input into
packets, and a session object that writes to and reads from a server
connection.

It has no third-party dependencies.

## The wire format — `simpchat.protocol`

A packet is a one-character type code followed by its string fields, each
preceded by the byte `\x01`, all encoded as UTF-8.

```python
from simpchat.protocol import Packet, PacketKind, decode_packet, encode_packet

packet = decode_packet(b"1\x01alice")          # someone joined the server
assert packet == Packet(PacketKind.JOIN, ("alice",))
assert encode_packet(packet) == b"1\x01alice"
```

- `PacketKind` lists every kind of packet; `PacketKind.<KIND>.arity` is the
  number of string fields it carries.
- `Packet(kind, args)` is an immutable packet. Giving the wrong number of
  fields raises `ValueError`, and fields that are not strings raise
  `TypeError`.
- `encode_packet(packet)` returns the wire bytes. Encoding a
  `PacketKind.ILLEGAL` packet raises `ProtocolError`.
- `decode_packet(buf)` returns a packet. An unknown type code gives a
  `PacketKind.ILLEGAL` packet; empty data, data that is not valid UTF-8, or
  a packet with too few fields raises `ProtocolError`. Extra fields are
  ignored.
- `split_bytes(data, separator)` is the splitter the decoder is built on:
  the first byte of `data`, followed by the pieces after each separator.
- `MSG_SIZE` (16384) is the largest chunk a client reads at a time.

## Messages and user input — `simpchat.messages`

- `parse_input(text)` turns a typed line into the packet to send:
  `/dm <user> <text>` becomes a `CLIENT_DM` packet (a bare `/dm` becomes a
  `PING`), any other line starting with `/` is sent whole as a
  `SERVER_COMMAND`, and everything else is a `CLIENT_MESSAGE`.
- `format_packet(packet, now)` turns a received packet into a `ChatLine`
  holding its `text`, `color` and `time`, for example
  `[#general] <alice>: hi` in white or `bob joined the server` in yellow.
  A `LIST` packet gives `None`; direct messages and packets a server never
  sends to a client raise `ProtocolError`.
- `ChatLine.timestamp()` gives the arrival time as `HH:MM:SS`.
- `Color` holds the line colours (`WHITE`, `YELLOW`, `GRAY`,
  `LIGHT_GREEN`); `.rgb` gives the RGB triple.
- `hash_password(password)` is the lowercase hex SHA-512 digest of the
  password, and `build_auth_packet(username, password)` wraps the user
  name and that digest in an `AUTH` packet.

```python
from simpchat.messages import build_auth_packet, parse_input

password = "password"
auth = build_auth_packet("alice", password)
outgoing = parse_input("/dm bob see you later")   # CLIENT_DM ("bob", "see you later")
```

## Sessions — `simpchat.client`

`ChatState` holds what a chat window shows: `messages` (a list of
`ChatLine`), `users`, `connected` and `error`.

- `apply(packet, now)` folds a received packet in: a `LIST` packet
  replaces `users` with its comma-separated names, other packets append
  their chat line, which is also returned.
- `clear_messages()` empties the log.
- `disconnect()` sets `connected` to false, sets `error` to
  `"You were disconnected"` and empties the log.
- `join_channel_command(channel)` returns `"/join <channel>"`.

`ChatSession(stream, encrypt, decrypt, state)` ties a connection to a
`ChatState`. `stream` is any object with `sendall` and `close`, such as a
socket; `encrypt` and `decrypt` map bytes to bytes.

- `authenticate(username, password)` sends the `AUTH` packet and marks the
  state as connected.
- `send(text)` parses and sends a typed line and returns the packet; a
  blank line sends nothing and returns `None`.
- `receive(data, now)` decrypts and decodes one chunk read from the server
  and applies it to the state. Empty data (end of stream) or data that
  cannot be decrypted closes the session, calls `state.disconnect()` and
  raises `DisconnectedError`.
- `close()` closes the stream; after that `send` and `receive` raise
  `DisconnectedError`.

```python
import socket
from datetime import datetime

from simpchat.client import ChatSession, ChatState

client_end, server_end = socket.socketpair()

def passthrough(data: bytes) -> bytes:   # stands in for a real cipher
    return data

state = ChatState()
session = ChatSession(client_end, passthrough, passthrough, state)

password = "password"
session.authenticate("alice", password)
session.send("hello, world!")
session.send(state.join_channel_command("general"))

session.receive(b"1\x01bob", datetime.now())
print(state.messages[-1].text)           # bob joined the server

session.close()
server_end.close()
```

## What this package does not do

- It opens no connections and runs no read loop: you connect the stream,
  read from it and pass each chunk to `ChatSession.receive`.
- It does no key exchange and ships no cipher; `encrypt` and `decrypt`
  must be supplied.
- It has no chat window and no command to start a client.