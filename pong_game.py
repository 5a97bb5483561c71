import logging
import math
import random
from collections import namedtuple
from enum import Enum
from typing import Callable, Optional

import pygame

from opponent_ai import ComputerOpponent, Difficulty

# Initialize Pygame
pygame.init()

# Constants
WIDTH = 1000
HEIGHT = 500
FPS = 60

# Colors
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
GRAY = (128, 128, 128)
YELLOW = (255, 255, 0)

# Game Objects
PADDLE_WIDTH = 10
PADDLE_HEIGHT = 100
BALL_SIZE = 10

# Game Physics
PADDLE_STEP = 8
SERVE_SPEED = 5
BOUNCE_FACTOR = 1.1
WIN_SCORE = 10

# Input tokens
KEY_UP = "up"
KEY_DOWN = "down"
KEY_W = "w"
KEY_S = "s"

KEY_BINDINGS = {
    pygame.K_UP: KEY_UP,
    pygame.K_DOWN: KEY_DOWN,
    pygame.K_w: KEY_W,
    pygame.K_s: KEY_S,
}

logger = logging.getLogger("PongGame")

InputSnapshot = namedtuple("InputSnapshot", ["up", "down", "w", "s"])
RenderSnapshot = namedtuple(
    "RenderSnapshot",
    ["paddle1_y", "paddle2_y", "ball_x", "ball_y", "score1", "score2"],
)


class MatchState(Enum):
    IDLE = 0
    RUNNING = 1


class Vector2D:
    def __init__(self, x: float = 0, y: float = 0):
        self.x = x
        self.y = y

    def __add__(self, other):
        return Vector2D(self.x + other.x, self.y + other.y)

    def __mul__(self, scalar):
        return Vector2D(self.x * scalar, self.y * scalar)

    def magnitude(self):
        return math.sqrt(self.x**2 + self.y**2)

    def to_tuple(self):
        return (self.x, self.y)


class InputState:
    """Held/released flags for the four game keys"""
    def __init__(self):
        self._pressed = {KEY_UP: False, KEY_DOWN: False, KEY_W: False, KEY_S: False}

    def set_key(self, key: str, pressed: bool) -> bool:
        """Record a key transition. Returns False for keys the game does not use."""
        if key not in self._pressed:
            return False
        self._pressed[key] = pressed
        return True

    def release_all(self):
        for key in self._pressed:
            self._pressed[key] = False

    def snapshot(self) -> InputSnapshot:
        return InputSnapshot(
            self._pressed[KEY_UP],
            self._pressed[KEY_DOWN],
            self._pressed[KEY_W],
            self._pressed[KEY_S],
        )


class Paddle:
    def __init__(self, x: float):
        self.x = x
        self.width = PADDLE_WIDTH
        self.height = PADDLE_HEIGHT
        self.y = 0.0
        self.center()

    @property
    def max_y(self):
        return HEIGHT - self.height

    @property
    def center_y(self):
        return self.y + self.height / 2

    def center(self):
        self.y = HEIGHT / 2 - self.height / 2

    def move(self, dy: float):
        """Move paddle vertically, clamped to the arena"""
        self.y = max(0, min(self.max_y, self.y + dy))

    def draw(self, screen):
        pygame.draw.rect(screen, WHITE, (self.x, int(self.y), self.width, self.height))


class Ball:
    def __init__(self):
        # Position is the top-left corner of the ball's bounding square
        self.position = Vector2D(WIDTH / 2, HEIGHT / 2)
        self.velocity = Vector2D(SERVE_SPEED, SERVE_SPEED)
        self.size = BALL_SIZE

    def serve(self, rng: random.Random):
        """Put the ball back at the center with a random diagonal velocity"""
        self.position = Vector2D(WIDTH / 2, HEIGHT / 2)
        self.velocity = Vector2D(
            SERVE_SPEED * (1 if rng.random() < 0.5 else -1),
            SERVE_SPEED * (1 if rng.random() < 0.5 else -1),
        )

    def update(self):
        self.position = self.position + self.velocity

    def bounce_off_paddle(self):
        self.velocity = Vector2D(-self.velocity.x, self.velocity.y) * BOUNCE_FACTOR

    def draw(self, screen):
        radius = self.size / 2
        center = (int(self.position.x + radius), int(self.position.y + radius))
        pygame.draw.circle(screen, WHITE, center, int(radius))


class PongGame:
    def __init__(self, headless: bool = False, rng: Optional[random.Random] = None,
                 on_game_over: Optional[Callable[[str], None]] = None):
        pygame.init()
        self.headless = headless
        if headless:
            self.screen = pygame.Surface((WIDTH, HEIGHT))
        else:
            self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
            pygame.display.set_caption("Pong")
        self.clock = pygame.time.Clock()
        self.rng = rng or random.Random()
        self.window_open = True

        # Game objects
        self.paddle1 = Paddle(0)
        self.paddle2 = Paddle(WIDTH - PADDLE_WIDTH)
        self.ball = Ball()
        self.input = InputState()
        self.opponent = ComputerOpponent(self.rng)

        # Match state
        self.score1 = 0
        self.score2 = 0
        self.rally_count = 0
        self.running = False
        self.vs_computer = True
        self.difficulty = Difficulty.AMATEUR
        self.game_over_message = None
        self.on_game_over = on_game_over or self._show_game_over

        # Font for UI
        self.font = pygame.font.Font(None, 28)
        self.big_font = pygame.font.Font(None, 64)

        self.reset_ball()

    @property
    def state(self) -> MatchState:
        return MatchState.RUNNING if self.running else MatchState.IDLE

    @property
    def opponent_label(self) -> str:
        if not self.vs_computer:
            return "Player 2"
        return f"{self.difficulty.value.capitalize()} Computer"

    def set_difficulty(self, level):
        """Latch a new difficulty tier; accepts a Difficulty or its string value"""
        self.difficulty = Difficulty(level)
        logger.info(f"Difficulty set to {self.difficulty.value}")

    # ----- Match control -----
    def start(self, vs_computer: bool = True):
        self.vs_computer = vs_computer
        self.score1 = 0
        self.score2 = 0
        self.reset_ball()
        self.running = True
        self.game_over_message = None
        logger.info(f"Match started: Human vs {self.opponent_label}")

    def stop(self):
        """Halt the simulation; the host tears the window down afterwards"""
        self.running = False
        logger.info("Match stopped")

    def reset_ball(self):
        self.ball.serve(self.rng)
        self.rally_count = 0

    def reset_game(self):
        """Reset entire game"""
        self.score1 = 0
        self.score2 = 0
        self.reset_ball()
        self.paddle1.center()
        self.paddle2.center()
        self.running = False

    def check_match_end(self):
        if self.score1 < WIN_SCORE and self.score2 < WIN_SCORE:
            return
        # Only the first tick over the threshold ends the match
        if not self.running:
            return
        self.running = False
        winner = "Human" if self.score1 >= WIN_SCORE else self.opponent_label
        logger.info(f"Game over: {winner} wins {self.score1}-{self.score2}")
        self.on_game_over(winner)
        self.reset_game()

    # ----- Simulation -----
    def move_paddles(self, keys: InputSnapshot):
        # Both flags held apply both steps, which cancel out
        if keys.up:
            self.paddle1.move(-PADDLE_STEP)
        if keys.down:
            self.paddle1.move(PADDLE_STEP)

        if not self.vs_computer:
            if keys.w:
                self.paddle2.move(-PADDLE_STEP)
            if keys.s:
                self.paddle2.move(PADDLE_STEP)

    def move_ball(self):
        ball = self.ball
        ball.update()
        x, y = ball.position.to_tuple()

        # The ball may sit past a wall for one tick before it comes back
        if y <= 0 or y >= HEIGHT - ball.size:
            ball.velocity.y *= -1

        if x <= PADDLE_WIDTH and self.paddle1.y < y < self.paddle1.y + PADDLE_HEIGHT:
            ball.bounce_off_paddle()
            self.rally_count += 1

        if (x >= WIDTH - PADDLE_WIDTH - ball.size
                and self.paddle2.y < y < self.paddle2.y + PADDLE_HEIGHT):
            ball.bounce_off_paddle()
            self.rally_count += 1

        if ball.position.x < 0:
            self.score2 += 1
            logger.debug(f"Point to {self.opponent_label} after {self.rally_count} hits")
            self.reset_ball()

        if ball.position.x > WIDTH:
            self.score1 += 1
            logger.debug(f"Point to Human after {self.rally_count} hits")
            self.reset_ball()

    def tick(self, keys: Optional[InputSnapshot] = None):
        """Advance the game by one frame"""
        if self.running:
            self.move_paddles(keys if keys is not None else self.input.snapshot())
            if self.vs_computer:
                self.opponent.act(self)
            self.move_ball()
            self.render()

        self.check_match_end()

    def snapshot(self) -> RenderSnapshot:
        return RenderSnapshot(
            self.paddle1.y, self.paddle2.y,
            self.ball.position.x, self.ball.position.y,
            self.score1, self.score2,
        )

    # ----- Render -----
    def render(self):
        """Draw paddles, ball and scores"""
        if self.screen is None:
            return
        self.screen.fill(BLACK)
        self.paddle1.draw(self.screen)
        self.paddle2.draw(self.screen)
        self.ball.draw(self.screen)

        snap = self.snapshot()
        human_text = self.font.render(f"Human: {snap.score1}", True, WHITE)
        self.screen.blit(human_text, (20, 20))
        opponent_text = self.font.render(f"{self.opponent_label}: {snap.score2}", True, WHITE)
        self.screen.blit(opponent_text, (WIDTH - opponent_text.get_width() - 20, 20))

    def draw_idle_overlay(self):
        if self.game_over_message:
            message = self.big_font.render(self.game_over_message, True, YELLOW)
            self.screen.blit(message, message.get_rect(center=(WIDTH // 2, HEIGHT // 2 - 30)))

        hint = self.font.render(
            f"{self.opponent_label} | 1/2/3 = Difficulty   Space = Start   Esc = Stop",
            True, GRAY)
        self.screen.blit(hint, hint.get_rect(center=(WIDTH // 2, HEIGHT // 2 + 20)))

    def _show_game_over(self, winner: str):
        self.game_over_message = f"Game Over! {winner} wins!"

    # ----- Host loop -----
    def handle_events(self, vs_computer: bool = True):
        """Handle pygame events"""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.stop()
                self.window_open = False
            elif event.type == pygame.WINDOWFOCUSLOST:
                self.input.release_all()
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.stop()
                    self.window_open = False
                elif event.key in (pygame.K_SPACE, pygame.K_RETURN) and not self.running:
                    self.start(vs_computer)
                elif event.key == pygame.K_1:
                    self.set_difficulty(Difficulty.AMATEUR)
                elif event.key == pygame.K_2:
                    self.set_difficulty(Difficulty.INTERMEDIATE)
                elif event.key == pygame.K_3:
                    self.set_difficulty(Difficulty.MASTER)
                elif event.key in KEY_BINDINGS:
                    self.input.set_key(KEY_BINDINGS[event.key], True)
            elif event.type == pygame.KEYUP:
                if event.key in KEY_BINDINGS:
                    self.input.set_key(KEY_BINDINGS[event.key], False)

    def run(self, vs_computer: bool = True):
        """Run the frame loop until the window is closed"""
        self.vs_computer = vs_computer
        self.render()
        while self.window_open:
            self.handle_events(vs_computer)
            self.tick()
            if not self.running:
                self.render()
                self.draw_idle_overlay()
            pygame.display.flip()
            self.clock.tick(FPS)

        pygame.quit()


if __name__ == "__main__":
    game = PongGame()
    game.run()
