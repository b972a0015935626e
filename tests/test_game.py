import random

import pytest

from frogger.errors import ConfigurationError
from frogger.game import Game
from frogger.models import (
    DifficultyProfile,
    GridDimensions,
    LaneKind,
    Move,
    Obstacle,
    ObstacleKind,
    Phase,
)
from frogger.spawner import next_obstacle_id


def _put(game, lane, kind, x, width=2, velocity=1.0):
    o = Obstacle(next_obstacle_id(), lane, kind, float(x), width, velocity)
    game.state.obstacles.append(o)
    return o


def _walk(game, *moves):
    for m in moves:
        game.move(m)


def test_new_game_is_idle(make_game):
    game = make_game()
    snap = game.snapshot()
    assert snap.phase is Phase.IDLE
    assert snap.lives == 3
    assert snap.score == 0
    assert snap.message == "Press Start to play!"
    assert snap.player_x == 380
    assert snap.player_row == 12
    assert snap.player_y == 480
    assert game.start_label() == "Start Game"


def test_moves_and_ticks_are_ignored_until_started(make_game):
    game = make_game()
    game.move(Move.UP)
    game.queue_move(Move.UP)
    game.tick(1.0)
    assert game.state.player.row == 12
    assert game.state.score == 0
    assert not game.state.obstacles


def test_twelve_hops_onto_a_pad_scores_170(grid, rng):
    game = Game(grid, None, "medium", rng=rng, cfg={})
    assert game.state.lives == 3
    game.start()
    _walk(game, *[Move.UP] * 12)
    assert game.state.player.row == 0
    assert game.state.score == 120

    game.tick(0.0)
    assert game.state.claimed_pads == {10}
    assert game.state.score == 170
    assert game.state.message == "Goal reached!"
    assert game.state.phase is Phase.RUNNING
    assert game.state.player.row == 12


def test_backing_off_never_costs_or_repeats_points(make_game):
    game = make_game()
    game.start()
    _walk(game, Move.UP, Move.UP, Move.DOWN, Move.DOWN, Move.UP, Move.UP)
    assert game.state.score == 20
    assert game.state.player.max_row_reached == 10
    game.move(Move.UP)
    assert game.state.score == 30


def test_moves_are_clamped_to_the_grid(make_game, grid):
    game = make_game()
    game.start()
    game.move(Move.DOWN)
    assert game.state.player.row == 12
    _walk(game, *[Move.RIGHT] * 30)
    assert game.state.player.x == grid.max_x
    _walk(game, *[Move.LEFT] * 30)
    assert game.state.player.x == 0


def test_any_move_dismounts(make_game):
    game = make_game()
    game.start()
    game.state.player.riding_obstacle_id = 123
    game.move(Move.LEFT)
    assert game.state.player.riding_obstacle_id is None


def test_hit_by_car_costs_a_life_and_returns_to_start(make_game):
    game = make_game()
    game.start()
    game.move(Move.UP)
    lane = game.lanes.lane_at(11)
    assert lane.kind is LaneKind.ROAD
    _put(game, 11, ObstacleKind.CAR, game.state.player.x - 20)

    game.tick(0.0)
    s = game.state
    assert s.lives == 2
    assert s.message == "Oh no! Hit by a car! Lives left: 2"
    assert s.phase is Phase.RUNNING
    assert (s.player.x, s.player.row) == (380, 12)
    assert s.player.max_row_reached == 12


def test_empty_river_drowns(make_game):
    game = make_game()
    game.start()
    _walk(game, *[Move.UP] * 7)
    assert game.lanes.lane_at(game.state.player.row).kind is LaneKind.RIVER
    game.tick(0.0)
    assert game.state.lives == 2
    assert game.state.message.startswith("Oh no! Fell in the water!")


def test_riding_then_drifting_off_the_log(make_game):
    game = make_game()
    game.start()
    p = game.state.player
    p.x, p.row = 760.0, 2
    log = _put(game, 2, ObstacleKind.LOG, 700.0, width=3, velocity=1.0)

    game.tick(0.5)
    assert log.x == pytest.approx(720.0)
    assert game.state.player.riding_obstacle_id == log.id
    assert game.state.lives == 3

    # the player is pinned at the right edge while the log keeps going
    game.tick(1.75)
    assert log.x == pytest.approx(790.0)
    assert game.state.lives == 2
    assert game.state.message.startswith("Oh no! Fell off the log!")
    assert game.state.player.riding_obstacle_id is None


def test_rider_is_carried_by_the_log(make_game):
    game = make_game()
    game.start()
    p = game.state.player
    p.x, p.row = 400.0, 1
    log = _put(game, 1, ObstacleKind.LOG, 380.0, width=4, velocity=-1.0)

    game.tick(0.0)
    assert game.state.player.riding_obstacle_id == log.id
    game.tick(0.5)
    assert game.state.player.x == pytest.approx(380.0)
    assert log.x == pytest.approx(360.0)
    assert game.state.player.riding_obstacle_id == log.id


def test_losing_the_last_life_ends_the_game(make_game):
    one_life = DifficultyProfile("one", 1.0, 1.0, 0.7, 1, 1e9)
    game = make_game(one_life)
    game.start()
    game.move(Move.UP)
    car = _put(game, 11, ObstacleKind.CAR, game.state.player.x)
    game.tick(0.0)

    s = game.state
    assert s.lives == 0
    assert s.phase is Phase.GAME_OVER
    assert s.message == "GAME OVER! Final Score: 10"
    assert game.start_label() == "Play Again"

    before = (s.score, s.player.x, s.player.row, car.x)
    game.move(Move.UP)
    game.queue_move(Move.LEFT)
    game.tick(2.0)
    assert (s.score, s.player.x, s.player.row, car.x) == before


def test_missing_a_pad_costs_a_life(make_game, small_lanes):
    game = make_game(lanes=small_lanes)
    game.start()
    assert game.state.player.x == 20
    _walk(game, Move.UP, Move.UP, Move.UP)
    game.tick(0.0)
    assert game.state.lives == 2
    assert game.state.claimed_pads == set()
    assert game.state.message == "Oh no! Missed the lily pad! Lives left: 2"


def test_claimed_pads_survive_a_lost_life(make_game, small_lanes):
    game = make_game(lanes=small_lanes)
    game.start()
    _walk(game, Move.LEFT, Move.UP, Move.UP, Move.UP)
    game.tick(0.0)
    assert game.state.claimed_pads == {1}

    _walk(game, Move.UP, Move.UP, Move.UP)
    game.tick(0.0)
    assert game.state.lives == 2
    assert game.state.claimed_pads == {1}

    # standing on a pad that is already taken is harmless and scores nothing
    _walk(game, Move.LEFT, Move.UP, Move.UP, Move.UP)
    score = game.state.score
    game.tick(0.0)
    game.tick(0.0)
    assert game.state.score == score
    assert game.state.player.row == 0
    assert game.state.lives == 2

    game.reset()
    assert game.state.claimed_pads == set()


def _complete_level(game):
    _walk(game, Move.LEFT, Move.UP, Move.UP, Move.UP)
    game.tick(0.0)
    assert game.state.phase is Phase.RUNNING
    _walk(game, Move.RIGHT, Move.UP, Move.UP, Move.UP)
    game.tick(0.0)


def test_claiming_every_pad_completes_the_level(make_game, small_lanes):
    game = make_game(lanes=small_lanes)
    game.start()
    _complete_level(game)

    s = game.state
    assert s.claimed_pads == {1, 3}
    assert s.phase is Phase.LEVEL_COMPLETE
    # 6 row advances, 2 pads, 3 lives left
    assert s.score == 60 + 100 + 300
    assert s.message == "LEVEL COMPLETE! Score: 460"
    assert game.start_label() == "Next Level"
    assert game.auto_restart.pending


def test_level_restarts_after_the_delay(make_game, small_lanes):
    game = make_game(lanes=small_lanes)
    game.start()
    _complete_level(game)

    game.tick(1.0)
    assert game.state.phase is Phase.LEVEL_COMPLETE
    game.tick(0.6)
    assert game.state.phase is Phase.RUNNING
    assert game.state.score == 0
    assert game.state.claimed_pads == set()
    assert not game.auto_restart.pending


def test_reset_cancels_the_pending_restart(make_game, small_lanes):
    game = make_game(lanes=small_lanes)
    game.start()
    _complete_level(game)
    game.reset()
    game.tick(5.0)
    assert game.state.phase is Phase.IDLE
    assert not game.auto_restart.pending


def test_start_restarts_from_any_phase(make_game):
    game = make_game()
    game.start()
    game.move(Move.UP)
    _put(game, 11, ObstacleKind.CAR, 0.0)
    game.start()
    s = game.state
    assert s.phase is Phase.RUNNING
    assert s.score == 0
    assert s.lives == 3
    assert s.obstacles == []
    assert game.start_label() == "Restart Game"


def test_queued_moves_apply_at_the_next_tick(make_game):
    game = make_game()
    game.start()
    game.queue_move(Move.UP)
    assert game.state.player.row == 12
    game.tick(0.0)
    assert game.state.player.row == 11
    assert game.state.score == 10


def test_move_during_a_tick_waits_for_the_next_one(make_game, monkeypatch):
    game = make_game()
    game.start()
    original = game._simulate

    def simulate_with_input(dt):
        game.move(Move.UP)
        assert game.state.player.row == 12
        original(dt)

    monkeypatch.setattr(game, "_simulate", simulate_with_input)
    game.tick(0.0)
    assert game.state.player.row == 12
    monkeypatch.setattr(game, "_simulate", original)
    game.tick(0.0)
    assert game.state.player.row == 11


def test_spawning_fills_road_and_river_lanes(grid, rng):
    game = Game(grid, None, "medium", rng=rng, cfg={})
    game.start()
    game.tick(1.0)
    spawning = {lane.index for lane in game.lanes.spawning_lanes()}
    s = game.state
    assert {o.lane for o in s.obstacles} == spawning
    assert len({o.id for o in s.obstacles}) == len(s.obstacles)
    assert set(s.spawn_timers) == spawning
    assert all(v == 0 for v in s.spawn_timers.values())
    for o in s.obstacles:
        lane = game.lanes.lane_at(o.lane)
        assert (o.kind is ObstacleKind.CAR) == (lane.kind is LaneKind.ROAD)
        assert o.direction == lane.direction


def test_player_stays_in_bounds(grid):
    game = Game(grid, None, "hard", rng=random.Random(7), cfg={})
    driver = random.Random(99)
    game.start()
    for _ in range(3000):
        if game.state.phase is not Phase.RUNNING:
            game.start()
        if driver.random() < 0.2:
            game.move(driver.choice(list(Move)))
        game.tick(1 / 60)
        snap = game.snapshot()
        assert 0 <= snap.player_x <= grid.play_width - grid.cell_size
        assert 0 <= snap.player_y <= grid.play_height - grid.cell_size


def test_snapshot_is_detached(make_game):
    game = make_game()
    game.start()
    o = _put(game, 7, ObstacleKind.CAR, 10.0)
    snap = game.snapshot()
    o.x = 500.0
    assert snap.obstacles[0].x == 10.0
    assert snap.obstacles[0].id == o.id
    assert snap.goal_pads == frozenset({2, 6, 10, 14, 18})
    assert snap.difficulty == "frozen"


def test_set_difficulty_resets_with_new_lives(make_game):
    game = make_game()
    game.start()
    game.move(Move.UP)
    game.set_difficulty("easy")
    assert game.state.phase is Phase.IDLE
    assert game.state.lives == 5
    assert game.state.score == 0
    assert game.state.difficulty.name == "easy"


def test_unknown_difficulty_is_rejected(make_game):
    with pytest.raises(ConfigurationError):
        make_game("impossible")


def test_lane_table_must_match_grid(make_game, small_lanes):
    with pytest.raises(ConfigurationError):
        make_game(lanes=small_lanes, game_grid=GridDimensions(cols=6, rows=4, cell_size=10))
