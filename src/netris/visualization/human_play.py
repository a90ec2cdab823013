from __future__ import annotations

import argparse
from typing import Dict, Optional, Tuple

import pygame

from netris.game import Action, Bounds, GameConfig, NetrisGame, detect_bounds, mask_from_rows, occupancy_grid
from netris.sync import LoopbackTransport, MirrorSession, Transport, UdpTransport
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_DOWN: Action.DROP,
}

FIXED_TICK_MS = 20  # 50 Hz network/gravity tick


def _parse_address(text: str) -> Tuple[str, int]:
    host, _, port = text.rpartition(":")
    return host or "127.0.0.1", int(port)


def _load_bounds(path: Optional[str], width: int, height: int) -> Bounds:
    if path is None:
        return Bounds.from_size(width, height)
    with open(path, "r", encoding="utf-8") as fh:
        return detect_bounds(mask_from_rows(fh.read().splitlines()))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Two-board Netris over UDP")
    p.add_argument("--listen", type=int, default=7777, help="local UDP port")
    p.add_argument("--peer", type=str, default=None,
                   help="host:port of the other player; omit to host and wait")
    p.add_argument("--offline", action="store_true", help="play alone without networking")
    p.add_argument("--width", type=int, default=10)
    p.add_argument("--height", type=int, default=20)
    p.add_argument("--remote-width", type=int, default=10)
    p.add_argument("--remote-height", type=int, default=20)
    p.add_argument("--layout", type=str, default=None, help="text layout of the local board")
    p.add_argument("--remote-layout", type=str, default=None, help="text layout of the remote board")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--gravity", type=int, default=10, help="fixed ticks per gravity step")
    return p


def build_session(args: argparse.Namespace) -> MirrorSession:
    local_bounds = _load_bounds(args.layout, args.width, args.height)
    remote_bounds = _load_bounds(args.remote_layout, args.remote_width, args.remote_height)
    config = GameConfig(random_seed=args.seed, gravity_interval=args.gravity)
    game = NetrisGame(config, bounds=local_bounds)
    transport: Transport
    if args.offline:
        transport = LoopbackTransport()
    else:
        peer = _parse_address(args.peer) if args.peer else None
        transport = UdpTransport(bind=("0.0.0.0", args.listen), peer=peer)
    print(f"MY BOARD SIZE = {local_bounds.width} x {local_bounds.height} "
          f"({local_bounds.min_x},{local_bounds.min_y}) -> ({local_bounds.max_x},{local_bounds.max_y})")
    print(f"REMOTE BOARD SIZE = {remote_bounds.width} x {remote_bounds.height} "
          f"({remote_bounds.min_x},{remote_bounds.min_y}) -> ({remote_bounds.max_x},{remote_bounds.max_y})")
    return MirrorSession(game, transport, remote_bounds)


def run() -> None:
    args = build_parser().parse_args()
    session = build_session(args)
    game = session.game
    pygame.init()
    try:
        clock = pygame.time.Clock()
        renderer = Renderer()
        local_shape = (game.bounds.height, game.bounds.width)
        remote_shape = (session.remote_bounds.height, session.remote_bounds.width)
        screen = pygame.display.set_mode(renderer.window_size(local_shape, remote_shape))
        pygame.display.set_caption("Netris")
        font = pygame.font.SysFont(None, 24)

        last_tick = pygame.time.get_ticks()

        running = True
        while running:
            # Input handling: one action per key-down edge
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r and game.game_over:
                        game.reset()
                        session.dirty = True
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            session.handle_input(action)

            # Fixed tick
            now = pygame.time.get_ticks()
            while now - last_tick >= FIXED_TICK_MS:
                session.fixed_update()
                last_tick += FIXED_TICK_MS

            if session.dirty:
                remote = occupancy_grid(session.remote_bounds, session.remote_piece, session.remote_chunk)
                status = session.status
                if game.game_over:
                    status += " - press R to restart, ESC to quit"
                renderer.draw(screen, game.get_state(), remote, status, font)
                session.dirty = False

            clock.tick(60)
    finally:
        session.transport.close()
        pygame.quit()
    print(f"Rows cleared: {game.rows_cleared_total}")


if __name__ == "__main__":  # pragma: no cover
    run()
