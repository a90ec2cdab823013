"""Tests for movement, rotation and the per-board game loop."""

import random

from netris.game import (
    Action,
    Bounds,
    GameConfig,
    NetrisGame,
    Outcome,
    PieceShape,
    clear_row,
    drop,
    find_full_row,
    rotate,
    shift,
)
from netris.game.pieces import place_shape

BOUNDS = Bounds(0, 0, 9, 19)
T_AT_10 = ((4, 10), (5, 10), (4, 11), (3, 10))


def test_shift_zero_is_identity():
    chunk = ((0, 0), (1, 0))
    piece, new_chunk, outcome = shift(0, 0, BOUNDS, T_AT_10, chunk)
    assert piece == T_AT_10
    assert new_chunk == chunk
    assert outcome == Outcome.MOVED


def test_shift_translates_all_cells():
    piece, chunk, outcome = shift(1, -1, BOUNDS, T_AT_10, ())
    assert piece == ((5, 9), (6, 9), (5, 10), (4, 9))
    assert chunk == ()
    assert outcome == Outcome.MOVED


def test_shift_into_wall_is_noop():
    """Sideways blocked moves leave the state untouched."""
    piece = ((1, 5), (2, 5), (1, 6), (0, 5))
    chunk = ((5, 5),)
    result = shift(-1, 0, BOUNDS, piece, chunk)
    assert result.piece == piece
    assert result.chunk is chunk
    assert result.outcome == Outcome.BLOCKED


def test_shift_into_chunk_sideways_is_noop():
    result = shift(1, 0, BOUNDS, T_AT_10, ((6, 10),))
    assert result.piece == T_AT_10
    assert result.outcome == Outcome.BLOCKED


def test_shift_upward_blocked_does_not_lock():
    piece = place_shape(PieceShape.I, BOUNDS)
    result = shift(0, 1, BOUNDS, piece, ())
    assert result.piece == piece
    assert result.chunk == ()
    assert result.outcome == Outcome.BLOCKED


def test_blocked_downward_shift_locks_and_spawns():
    piece = ((4, 0), (5, 0), (4, 1), (3, 0))
    result = shift(0, -1, BOUNDS, piece, (), random.Random(0))
    assert result.outcome == Outcome.LOCKED
    assert set(result.chunk) == set(piece)
    assert len(result.piece) == 4
    assert max(y for _, y in result.piece) == BOUNDS.max_y, "replacement spawns on the top row"


def test_absent_piece_is_noop():
    chunk = ((1, 1),)
    assert shift(0, -1, BOUNDS, None, chunk) == (None, chunk, Outcome.BLOCKED)
    assert drop(BOUNDS, None, chunk) == (None, chunk, Outcome.BLOCKED)
    assert rotate(BOUNDS, None, chunk) is None


def test_lock_with_no_room_for_next_piece_is_game_over():
    """Any shape spawned on a two-row board overlaps a just-locked T."""
    bounds = Bounds(0, 0, 9, 1)
    piece = place_shape(PieceShape.T, bounds)
    for seed in range(10):
        result = shift(0, -1, bounds, piece, (), random.Random(seed))
        assert result.outcome == Outcome.GAME_OVER
        assert set(result.chunk) == set(piece)


def test_drop_falls_to_floor_and_locks():
    piece = place_shape(PieceShape.T, BOUNDS)
    result = drop(BOUNDS, piece, (), random.Random(3))
    assert result.outcome == Outcome.LOCKED
    assert set(result.chunk) == {(4, 0), (5, 0), (4, 1), (3, 0)}


def test_drop_lands_on_chunk():
    chunk = ((4, 5),)
    piece = place_shape(PieceShape.I, BOUNDS)
    result = drop(BOUNDS, piece, chunk, random.Random(3))
    assert set(result.chunk) == {(4, 5), (4, 6), (3, 6), (2, 6), (5, 6)}


def test_rotate_about_first_cell():
    rotated = rotate(BOUNDS, T_AT_10, ())
    assert rotated == ((4, 10), (4, 9), (5, 10), (4, 11))


def test_four_rotations_restore_piece():
    for shape in PieceShape:
        piece = tuple((x, y - 8) for x, y in place_shape(shape, BOUNDS))
        turned = piece
        for _ in range(4):
            turned = rotate(BOUNDS, turned, ())
        assert turned == piece, f"{shape.name} did not come back after four turns"


def test_rotate_out_of_bounds_is_rejected_whole():
    piece = place_shape(PieceShape.I, BOUNDS)
    assert rotate(BOUNDS, piece, ()) == piece


def test_rotate_into_chunk_is_rejected_whole():
    """A single colliding cell rejects the whole turn."""
    rotated = rotate(BOUNDS, T_AT_10, ((4, 9),))
    assert rotated == T_AT_10


def test_row_completed_by_lock_is_found_and_cleared():
    chunk = tuple((x, 5) for x in range(9)) + ((9, 4), (0, 6))
    piece = ((9, 5), (9, 6), (9, 7), (9, 8))
    result = shift(0, -1, BOUNDS, piece, chunk, random.Random(0))
    assert result.outcome == Outcome.LOCKED
    assert find_full_row(result.chunk, BOUNDS) == 5
    cleared = clear_row(result.chunk, 5)
    assert all(y != 5 or x in (0, 9) for x, y in cleared)
    assert (0, 5) in cleared, "cell above the cleared row moved down"
    assert (0, 6) not in cleared
    assert (9, 4) in cleared, "cell below the cleared row stays put"
    assert (9, 5) in cleared and (9, 7) in cleared and (9, 8) not in cleared


def test_game_reset_state():
    game = NetrisGame(GameConfig(random_seed=1))
    assert game.chunk == ()
    assert len(game.piece) == 4
    assert not game.game_over
    assert game.get_state().shape == (20, 10)


def test_game_gravity_interval():
    game = NetrisGame(GameConfig(random_seed=2, gravity_interval=3))
    start = min(y for _, y in game.piece)
    game.fixed_update()
    assert min(y for _, y in game.piece) == start - 1, "gravity runs on the first tick"
    game.fixed_update()
    game.fixed_update()
    assert min(y for _, y in game.piece) == start - 1
    game.fixed_update()
    assert min(y for _, y in game.piece) == start - 2


def test_game_clears_one_row_per_gravity_tick():
    game = NetrisGame(GameConfig(random_seed=4, gravity_interval=1))
    game.chunk = tuple((x, y) for y in (0, 1) for x in range(10))
    assert game.fixed_update() == 0
    assert game.rows_cleared_total == 1
    assert len(game.chunk) == 10
    assert game.fixed_update() == 0
    assert game.rows_cleared_total == 2
    assert game.chunk == ()


def test_game_steps_map_to_moves():
    game = NetrisGame(GameConfig(random_seed=5))
    piece = game.piece
    assert game.step(Action.LEFT) == Outcome.MOVED
    assert game.piece == tuple((x - 1, y) for x, y in piece)
    assert game.step(Action.RIGHT) == Outcome.MOVED
    assert game.piece == piece
    assert game.step(Action.NONE) == Outcome.BLOCKED
    assert game.step(Action.DROP) == Outcome.LOCKED
    assert len(game.chunk) == 4


def test_game_over_is_terminal_until_reset():
    game = NetrisGame(GameConfig(width=10, height=2, random_seed=0))
    for _ in range(10):
        game.hard_drop()
        if game.game_over:
            break
    assert game.game_over
    snapshot = game.snapshot()
    assert game.step(Action.LEFT) == Outcome.GAME_OVER
    assert game.fixed_update() is None
    assert game.snapshot() == snapshot
    game.reset()
    assert not game.game_over
    assert game.last_outcome != Outcome.GAME_OVER, "a new game starts without the previous outcome"
    assert game.chunk == ()
