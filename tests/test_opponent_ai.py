import random

import pytest

from opponent_ai import (
    AI_SPEED_MULTIPLIER, BASE_AI_SPEED, ComputerOpponent, Difficulty, MASTER_AI_SPEED,
    tracking_offset,
)
from pong_game import HEIGHT, PADDLE_HEIGHT, Vector2D


@pytest.mark.parametrize("difficulty, rally, expected", [
    (Difficulty.AMATEUR, 0, 50),
    (Difficulty.AMATEUR, 9, 50),
    (Difficulty.AMATEUR, 10, 50),
    (Difficulty.AMATEUR, 15, 40),
    (Difficulty.AMATEUR, 35, 0),
    (Difficulty.AMATEUR, 60, 0),
    (Difficulty.INTERMEDIATE, 5, 25),
    (Difficulty.INTERMEDIATE, 20, 5),
    (Difficulty.INTERMEDIATE, 30, 0),
    (Difficulty.MASTER, 0, 0),
    (Difficulty.MASTER, 40, 0),
])
def test_tracking_offset(difficulty, rally, expected):
    assert tracking_offset(difficulty, rally) == expected


def test_target_is_centered_on_ball_with_symmetric_jitter(fixed_rng):
    ai = ComputerOpponent(fixed_rng)
    assert ai.target_y(Difficulty.AMATEUR, 300, PADDLE_HEIGHT, 0) == 250

    fixed_rng.value = 0.0
    assert ai.target_y(Difficulty.AMATEUR, 300, PADDLE_HEIGHT, 0) == 225
    fixed_rng.value = 1.0
    assert ai.target_y(Difficulty.INTERMEDIATE, 300, PADDLE_HEIGHT, 0) == 262.5


@pytest.mark.parametrize("difficulty", [Difficulty.AMATEUR, Difficulty.INTERMEDIATE])
def test_tiered_step_size(game, fixed_rng, difficulty):
    game.set_difficulty(difficulty)
    ai = ComputerOpponent(fixed_rng)
    game.paddle2.y = 200
    game.ball.position = Vector2D(500, 450)

    ai.act(game)
    assert game.paddle2.y == pytest.approx(200 + BASE_AI_SPEED * AI_SPEED_MULTIPLIER[difficulty])

    game.ball.position = Vector2D(500, 10)
    ai.act(game)
    assert game.paddle2.y == pytest.approx(200)


def test_paddle_holds_when_center_is_on_target(game, fixed_rng):
    game.set_difficulty(Difficulty.INTERMEDIATE)
    ai = ComputerOpponent(fixed_rng)
    game.paddle2.y = 200
    # target = ball_y - 50 with no jitter, compared to center = 250
    game.ball.position = Vector2D(500, 300)
    ai.act(game)
    assert game.paddle2.y == 200


def test_master_moves_ten_toward_ball_without_jitter(game):
    game.set_difficulty(Difficulty.MASTER)
    ai = ComputerOpponent(random.Random(0))
    game.paddle2.y = 0
    game.ball.position = Vector2D(500, 400)

    distance = abs(game.ball.position.y - game.paddle2.center_y)
    while distance >= MASTER_AI_SPEED:
        ai.act(game)
        new_distance = abs(game.ball.position.y - game.paddle2.center_y)
        assert new_distance == distance - MASTER_AI_SPEED
        distance = new_distance
    assert game.paddle2.center_y == 400


def test_master_stays_when_level_with_ball(game):
    game.set_difficulty(Difficulty.MASTER)
    game.paddle2.y = 150
    game.ball.position = Vector2D(500, 200)
    ComputerOpponent().act(game)
    assert game.paddle2.y == 150


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_ai_never_leaves_arena(game, difficulty):
    game.set_difficulty(difficulty)
    ai = ComputerOpponent(random.Random(3))
    for ball_y in (-40, 0, HEIGHT / 2, HEIGHT, HEIGHT + 40):
        game.ball.position = Vector2D(500, ball_y)
        for _ in range(200):
            ai.act(game)
            assert 0 <= game.paddle2.y <= HEIGHT - PADDLE_HEIGHT


def test_pinned_difficulty_drives_left_paddle(game):
    game.set_difficulty(Difficulty.AMATEUR)
    ai = ComputerOpponent(random.Random(0), difficulty=Difficulty.MASTER)
    game.paddle1.y = 0
    right_before = game.paddle2.y
    game.ball.position = Vector2D(500, 400)

    ai.act(game, is_player1=True)
    assert game.paddle1.y == MASTER_AI_SPEED
    assert game.paddle2.y == right_before


def test_master_tracks_served_ball_until_intercept(game):
    game.set_difficulty(Difficulty.MASTER)
    game.start()
    game.paddle2.y = 0
    game.ball.position = Vector2D(500, 250)
    game.ball.velocity = Vector2D(5, 5)

    distance = abs(game.ball.position.y - game.paddle2.center_y)
    for _ in range(100):
        game.tick()
        new_distance = abs(game.ball.position.y - game.paddle2.center_y)
        assert new_distance <= distance
        distance = new_distance
        if distance <= MASTER_AI_SPEED or game.paddle2.y in (0, HEIGHT - PADDLE_HEIGHT):
            break
    assert distance <= MASTER_AI_SPEED
