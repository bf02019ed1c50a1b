from __future__ import annotations

import random

import pytest

from kurve.geometry import distance
from kurve.player import Arena, Player, TrailPoint


def test_first_move_seeds_trail_at_current_position(make_player) -> None:
    player = make_player(x=200, y=300, heading=0)
    player.move(100)
    assert player.position == pytest.approx((200, 307))
    assert player.trail == [TrailPoint(player.x, player.y, False)]


def test_zero_delta_moves_leave_state_unchanged(make_player) -> None:
    player = make_player(x=200, y=300, heading=33)
    player.steer_left = True
    player.move(0)
    before = (player.x, player.y, player.heading, list(player.trail), player.run_length)
    for _ in range(10):
        player.move(0)
    assert (player.x, player.y, player.heading, list(player.trail), player.run_length) == before


def test_steering_turns_by_rate_times_delta(make_player) -> None:
    player = make_player(heading=10)
    player.steer_left = True
    player.move(100)
    assert player.heading == pytest.approx(25)

    player.steer_left = False
    player.steer_right = True
    player.move(200)
    assert player.heading == pytest.approx(-5)

    player.steer_left = True
    player.move(50)
    assert player.heading == pytest.approx(-5)


def test_heading_ninety_moves_along_x(make_player) -> None:
    player = make_player(x=100, y=100, heading=90)
    player.move(100)
    assert player.x == pytest.approx(107)
    assert player.y == pytest.approx(100)


def test_trail_points_are_more_than_spacing_apart(make_player) -> None:
    player = make_player(x=100, y=100, heading=90)
    for _ in range(200):
        player.move(10)
    points = [(point.x, point.y) for point in player.trail]
    assert len(points) > 10
    assert all(distance(a, b) > 10 for a, b in zip(points, points[1:]))


def test_no_gap_until_run_is_long_enough(make_player) -> None:
    player = make_player(x=100, y=100, heading=90)
    while len(player.trail) < 6:
        player.move(20)
    assert not any(point.gap for point in player.trail)
    assert player.run_length == 6


def test_gap_resets_run_length(make_player) -> None:
    player = make_player()
    player.rng = random.Random(0)
    for _ in range(1000):
        player.trail.clear()
        player.run_length = 6
        player.move(0)
        if player.trail[0].gap:
            assert player.run_length == 1
            return
    pytest.fail("no gap emitted in 1000 eligible emissions")


def test_gap_rate_converges_to_one_in_six(make_player) -> None:
    player = make_player()
    trials = 12000
    gaps = 0
    for _ in range(trials):
        player.trail.clear()
        player.run_length = 6
        player.move(0)
        gaps += player.trail[0].gap
    assert gaps / trials == pytest.approx(1 / 6, abs=0.02)


def test_collide_with_detects_crossing_last_step(make_player) -> None:
    player = make_player()
    other = make_player(player_id=1)
    player.trail = [TrailPoint(50, 0), TrailPoint(50, 20)]
    other.trail = [TrailPoint(40, 10), TrailPoint(60, 10)]
    assert player.collide_with(other)


def test_collide_with_skips_gap_segments(make_player) -> None:
    player = make_player()
    other = make_player(player_id=1)
    player.trail = [TrailPoint(50, 0), TrailPoint(50, 20)]
    other.trail = [TrailPoint(40, 10), TrailPoint(60, 10, gap=True)]
    assert not player.collide_with(other)


def test_collide_with_needs_two_points_each(make_player) -> None:
    player = make_player()
    other = make_player(player_id=1)
    player.trail = [TrailPoint(50, 20)]
    other.trail = [TrailPoint(40, 10), TrailPoint(60, 10)]
    assert not player.collide_with(other)

    player.trail = [TrailPoint(50, 0), TrailPoint(50, 20)]
    other.trail = [TrailPoint(40, 10)]
    assert not player.collide_with(other)


def test_suicide_outside_playable_area(make_player, arena: Arena) -> None:
    player = make_player(x=arena.playable_width, y=arena.height)
    assert not player.suicide()

    player.x = arena.playable_width + 0.5
    assert player.suicide()

    player.x, player.y = 10, -0.1
    assert player.suicide()


def test_suicide_on_crossing_own_trail(make_player) -> None:
    player = make_player(x=20, y=0)
    player.trail = [
        TrailPoint(10, 10),
        TrailPoint(30, 10),
        TrailPoint(30, 30),
        TrailPoint(20, 30),
        TrailPoint(20, 0),
    ]
    assert player.suicide()

    player.trail[1] = TrailPoint(30, 10, gap=True)
    assert not player.suicide()


def test_suicide_ignores_two_newest_segments(make_player) -> None:
    player = make_player(x=20, y=20)
    player.trail = [TrailPoint(10, 10), TrailPoint(20, 10), TrailPoint(20, 20)]
    assert not player.suicide()


def test_reset_respawns_inside_playable_area(arena: Arena) -> None:
    player = Player(0, "P1", (1, 2, 3), 1, 2, arena, random.Random(7))
    player.score = 4
    player.enabled = True
    for _ in range(500):
        player.trail.append(TrailPoint(1, 1))
        player.run_length = 3
        player.alive = False
        player.steer_left = player.steer_right = True
        player.reset()
        assert 0 <= player.x <= arena.playable_width
        assert 0 <= player.y <= arena.height
        assert 0 <= player.heading < 360
        assert player.trail == []
        assert player.run_length == 0
        assert player.alive
        assert not player.steer_left and not player.steer_right
    assert player.score == 4
    assert player.enabled


def test_reset_is_reproducible_with_seeded_rng(arena: Arena) -> None:
    first = Player(0, "P1", (1, 2, 3), 1, 2, arena, random.Random(99))
    second = Player(0, "P1", (1, 2, 3), 1, 2, arena, random.Random(99))
    first.reset()
    second.reset()
    assert (first.x, first.y, first.heading) == (second.x, second.y, second.heading)
