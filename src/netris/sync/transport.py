from __future__ import annotations

import socket
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, List, Optional, Tuple


MSG_TYPE_CHUNK = "CHUNK"
MSG_TYPE_PIECE = "PIECE"

# A full 10x20 chunk encodes to well under this.
MAX_MESSAGE = 8192

Message = Tuple[str, str]
Address = Tuple[str, int]


def frame_message(kind: str, payload: str) -> bytes:
    return f"{kind}\n{payload}".encode("utf-8")


def parse_message(data: bytes) -> Optional[Message]:
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return None
    kind, sep, payload = text.partition("\n")
    if not sep or not kind:
        return None
    return kind, payload


class Transport(ABC):
    """Best-effort, non-blocking delivery of (kind, payload) messages."""

    last_error: Optional[str] = None

    @abstractmethod
    def send(self, kind: str, payload: str) -> None:
        ...

    @abstractmethod
    def poll(self) -> List[Message]:
        ...

    @property
    def status(self) -> str:
        return "Network OK" if self.last_error is None else self.last_error

    def close(self) -> None:
        pass


class LoopbackTransport(Transport):
    """In-process endpoint; `pair()` links two of them back to back."""

    def __init__(self) -> None:
        self.inbox: Deque[Message] = deque()
        self.peer: Optional["LoopbackTransport"] = None

    @classmethod
    def pair(cls) -> Tuple["LoopbackTransport", "LoopbackTransport"]:
        a, b = cls(), cls()
        a.peer, b.peer = b, a
        return a, b

    def send(self, kind: str, payload: str) -> None:
        if self.peer is not None:
            self.peer.inbox.append((kind, payload))

    def poll(self) -> List[Message]:
        messages = list(self.inbox)
        self.inbox.clear()
        return messages


class UdpTransport(Transport):
    """One datagram per message over a non-blocking UDP socket.

    Without a `peer` address the endpoint acts as host and replies to
    whoever sent the most recent datagram.
    """

    def __init__(self, bind: Address = ("0.0.0.0", 7777), peer: Optional[Address] = None) -> None:
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.sock.bind(bind)
        self.sock.setblocking(False)
        self.peer = peer
        self._learn_peer = peer is None
        self.last_error = None

    def send(self, kind: str, payload: str) -> None:
        if self.peer is None:
            return
        data = frame_message(kind, payload)
        if len(data) > MAX_MESSAGE:
            self.last_error = f"{kind} message too large ({len(data)} bytes)"
            return
        try:
            self.sock.sendto(data, self.peer)
        except OSError as exc:
            self.last_error = str(exc)
        else:
            self.last_error = None

    def poll(self) -> List[Message]:
        messages: List[Message] = []
        while True:
            try:
                data, addr = self.sock.recvfrom(MAX_MESSAGE)
            except BlockingIOError:
                break
            except OSError as exc:
                self.last_error = str(exc)
                break
            if self._learn_peer:
                self.peer = addr
            message = parse_message(data)
            if message is not None:
                messages.append(message)
        return messages

    def close(self) -> None:
        self.sock.close()
