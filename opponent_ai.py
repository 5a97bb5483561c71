import random
from enum import Enum


class Difficulty(Enum):
    AMATEUR = "amateur"
    INTERMEDIATE = "intermediate"
    MASTER = "master"


# Largest aim error in pixels before a rally gets long
MAX_TRACKING_OFFSET = {
    Difficulty.AMATEUR: 50,
    Difficulty.INTERMEDIATE: 25,
    Difficulty.MASTER: 0,
}

AI_SPEED_MULTIPLIER = {
    Difficulty.AMATEUR: 0.7,
    Difficulty.INTERMEDIATE: 1.0,
}

BASE_AI_SPEED = 6
MASTER_AI_SPEED = 10
FOCUS_RALLY = 10
OFFSET_DECAY_PER_HIT = 2


def tracking_offset(difficulty: Difficulty, rally_count: int) -> float:
    """Aim error for the current rally; shrinks after the tenth hit"""
    offset = MAX_TRACKING_OFFSET[difficulty]
    if rally_count < FOCUS_RALLY:
        return offset
    return max(0, offset - (rally_count - FOCUS_RALLY) * OFFSET_DECAY_PER_HIT)


class ComputerOpponent:
    """Ball-tracking paddle controller for the three difficulty tiers"""
    def __init__(self, rng: random.Random = None, difficulty: Difficulty = None):
        self.rng = rng or random.Random()
        # None means follow the game's latched difficulty
        self.difficulty = difficulty

    def target_y(self, difficulty: Difficulty, ball_y: float, paddle_height: float,
                 rally_count: int) -> float:
        """Jittered aim point around the ball for amateur and intermediate"""
        offset = tracking_offset(difficulty, rally_count)
        return ball_y - paddle_height / 2 + self.rng.random() * offset - offset / 2

    def act(self, game, is_player1: bool = False):
        """Move one paddle of the game one step toward the ball"""
        paddle = game.paddle1 if is_player1 else game.paddle2
        difficulty = self.difficulty or game.difficulty
        ball_y = game.ball.position.y

        if difficulty == Difficulty.MASTER:
            if ball_y > paddle.center_y:
                paddle.move(MASTER_AI_SPEED)
            elif ball_y < paddle.center_y:
                paddle.move(-MASTER_AI_SPEED)
            return

        target = self.target_y(difficulty, ball_y, paddle.height, game.rally_count)
        speed = BASE_AI_SPEED * AI_SPEED_MULTIPLIER[difficulty]
        # Compared against the paddle center, so the paddle rides half a paddle high
        if paddle.center_y < target:
            paddle.move(speed)
        elif paddle.center_y > target:
            paddle.move(-speed)
