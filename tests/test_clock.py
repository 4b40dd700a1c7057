from __future__ import annotations

import threading

import pytest

from tetris_rl.game import Command, GameConfig, GameDriver, GravityClock, TetrisGame, TetrominoType

from conftest import FixedRandom


class RecordingSink:
    def __init__(self) -> None:
        self.views = []

    def render(self, view) -> None:
        self.views.append(view)


def _driver(interval_ms: int = 500):
    game = TetrisGame(GameConfig(), rng=FixedRandom(TetrominoType.O))
    sink = RecordingSink()
    return GameDriver(game, GravityClock(interval_ms), sinks=[sink]), sink


def test_clock_counts_whole_intervals():
    clock = GravityClock(500)
    assert clock.advance(499) == 0
    assert clock.advance(1) == 1
    assert clock.advance(1500) == 3
    assert clock.advance(0) == 0
    assert clock.advance(-20) == 0


def test_clock_reset_drops_partial_interval():
    clock = GravityClock(100)
    clock.advance(90)
    clock.reset()
    assert clock.advance(90) == 0


def test_clock_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        GravityClock(0)


def test_update_applies_queued_commands_in_order():
    driver, sink = _driver()
    driver.submit(Command.MOVE_LEFT)
    driver.submit("MoveLeft")
    driver.submit(Command.MOVE_RIGHT)
    assert driver.update(0) == 3
    assert driver.game.current_piece.x == 3
    assert [v.piece_x for v in sink.views] == [3, 2, 3]


def test_unknown_commands_are_not_published():
    driver, sink = _driver()
    driver.submit("fly")
    assert driver.update(0) == 0
    assert sink.views == []


def test_gravity_follows_elapsed_time():
    driver, sink = _driver(interval_ms=500)
    driver.update(250)
    assert driver.game.current_piece.y == 0
    driver.update(750)
    assert driver.game.current_piece.y == 2
    assert len(sink.views) == 2


def test_gravity_stops_after_game_over():
    driver, sink = _driver(interval_ms=10)
    driver.game.grid.grid[1, 4] = 1
    driver.update(10 * 40)
    assert driver.game.game_over
    published = len(sink.views)
    assert driver.update(10 * 40) == 0
    assert len(sink.views) == published


def test_commands_from_many_threads_are_serialized():
    driver, _ = _driver()

    def feed():
        for _ in range(25):
            driver.submit(Command.ROTATE)

    threads = [threading.Thread(target=feed) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert driver.update(0) == 100
