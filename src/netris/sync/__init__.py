"""Snapshot exchange between two boards.

- encode / decode: Text payloads for cell lists
- remap: Translation between board coordinate spaces
- LoopbackTransport / UdpTransport: Best-effort message delivery
- MirrorSession: Ties a local game to a mirrored remote board
"""

from .codec import encode, decode
from .remap import remap
from .transport import (
    MSG_TYPE_CHUNK,
    MSG_TYPE_PIECE,
    Transport,
    LoopbackTransport,
    UdpTransport,
    frame_message,
    parse_message,
)
from .session import MirrorSession

__all__ = [
    "encode",
    "decode",
    "remap",
    "MSG_TYPE_CHUNK",
    "MSG_TYPE_PIECE",
    "Transport",
    "LoopbackTransport",
    "UdpTransport",
    "frame_message",
    "parse_message",
    "MirrorSession",
]
