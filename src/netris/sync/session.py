from __future__ import annotations

from typing import List, Optional

from netris.game.core import Action, NetrisGame
from netris.game.grid import Bounds, Cell
from .codec import decode, encode
from .remap import remap
from .transport import MSG_TYPE_CHUNK, MSG_TYPE_PIECE, Transport


class MirrorSession:
    """Local board plus a display-only mirror of the peer's board.

    Every fixed tick the local snapshots go out in full, and whatever the
    peer sent replaces the mirror wholesale. Nothing here waits on the peer:
    dropped or reordered snapshots just mean the mirror lags a tick.
    """

    def __init__(self, game: NetrisGame, transport: Transport, remote_bounds: Bounds,
                 peer_bounds: Optional[Bounds] = None) -> None:
        self.game = game
        self.transport = transport
        self.remote_bounds = remote_bounds
        # Both peers normally run the same layout, so the peer's home board
        # matches ours unless told otherwise.
        self.peer_bounds = peer_bounds or game.bounds
        self.remote_piece: List[Cell] = []
        self.remote_chunk: List[Cell] = []
        self.dirty = True

    def receive(self, kind: str, payload: str) -> None:
        cells = remap(decode(payload), self.peer_bounds, self.remote_bounds)
        if kind == MSG_TYPE_PIECE:
            self.remote_piece = cells
        elif kind == MSG_TYPE_CHUNK:
            self.remote_chunk = cells
        else:
            return
        self.dirty = True

    def publish(self) -> None:
        piece, chunk = self.game.snapshot()
        self.transport.send(MSG_TYPE_CHUNK, encode(chunk))
        self.transport.send(MSG_TYPE_PIECE, encode(piece))

    def pump(self) -> int:
        messages = self.transport.poll()
        for kind, payload in messages:
            self.receive(kind, payload)
        return len(messages)

    def fixed_update(self) -> Optional[int]:
        """One network/gravity tick: receive, advance the local board, broadcast."""
        self.pump()
        before = self.game.snapshot()
        row = self.game.fixed_update()
        if self.game.snapshot() != before:
            self.dirty = True
        self.publish()
        return row

    def handle_input(self, action: Action) -> None:
        self.game.step(action)
        self.dirty = True

    @property
    def status(self) -> str:
        if self.game.game_over:
            return "NO VALID MOVE"
        return self.transport.status
