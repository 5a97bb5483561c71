import logging
import os
import random
import sys
import time

import matplotlib
import numpy as np

from opponent_ai import ComputerOpponent, Difficulty

logger = logging.getLogger("PongEvaluation")


class PongEvaluationEnv:
    """Headless match between two computer opponents of given tiers"""
    def __init__(self, left: Difficulty, right: Difficulty, seed=None):
        # No window needed for evaluation
        os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
        from pong_game import PongGame

        self.rng = random.Random(seed)
        self.winner = None
        self.game = PongGame(headless=True, rng=self.rng, on_game_over=self._record_winner)
        # Skip drawing entirely
        self.game.screen = None
        self.game.set_difficulty(right)
        self.left_ai = ComputerOpponent(self.rng, difficulty=left)
        self.rally_lengths = []

    def _record_winner(self, label):
        self.winner = "left" if label == "Human" else "right"

    def reset(self):
        self.winner = None
        self.rally_lengths = []
        self.game.reset_game()
        self.game.start(vs_computer=True)

    def step(self):
        """Advance one frame. Returns True once the match is decided"""
        points_before = self.game.score1 + self.game.score2
        rally_before = self.game.rally_count

        self.left_ai.act(self.game, is_player1=True)
        self.game.tick()

        if self.winner is not None:
            self.rally_lengths.append(rally_before)
            return True
        if self.game.score1 + self.game.score2 != points_before:
            self.rally_lengths.append(rally_before)
        return False


def evaluate_matchups(matches=10, max_steps=20000, seed=None):
    """Play every ordered pairing of tiers and collect win and rally statistics"""
    print("Starting Pong difficulty evaluation...")
    print(f"Matches per pairing: {matches}")

    results = {}
    start_time = time.time()

    try:
        for left in Difficulty:
            for right in Difficulty:
                env = PongEvaluationEnv(left, right, seed=seed)
                wins_left = 0
                wins_right = 0
                unfinished = 0
                rallies = []
                match_lengths = []

                for match in range(matches):
                    env.reset()
                    steps = 0
                    done = False
                    while steps < max_steps and not done:
                        done = env.step()
                        steps += 1

                    if env.winner == "left":
                        wins_left += 1
                    elif env.winner == "right":
                        wins_right += 1
                    else:
                        unfinished += 1
                    rallies.extend(env.rally_lengths)
                    match_lengths.append(steps)

                results[(left, right)] = {
                    'wins_left': wins_left,
                    'wins_right': wins_right,
                    'unfinished': unfinished,
                    'rallies': rallies,
                    'match_lengths': match_lengths,
                }
                avg_rally = np.mean(rallies) if rallies else 0.0
                logger.info(f"{left.value} vs {right.value} done")
                print(f"{left.value:>12} vs {right.value:<12} | "
                      f"Wins: {wins_left}/{wins_right} | Unfinished: {unfinished} | "
                      f"Avg rally: {avg_rally:.1f} | "
                      f"Avg length: {np.mean(match_lengths):.0f} frames")

    except KeyboardInterrupt:
        print("\nEvaluation interrupted by Ctrl+C")
    finally:
        total_time = time.time() - start_time
        print(f"\nEvaluation finished in {total_time:.1f} seconds")

    return results


def smooth(data, window_size):
    if len(data) < window_size or window_size < 1:
        return list(data)
    smoothed = []
    for i in range(len(data)):
        start = max(0, i - window_size + 1)
        smoothed.append(np.mean(data[start:i+1]))
    return smoothed


def plot_evaluation_results(results, filename='pong_evaluation_results.png', show=False):
    """Plot the right-side win rate per pairing and rally lengths per right-side tier"""
    if not results:
        print("Not enough data to plot")
        return None

    if not show:
        matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    tiers = list(Difficulty)
    win_rates = np.zeros((len(tiers), len(tiers)))
    for (left, right), stats in results.items():
        decided = stats['wins_left'] + stats['wins_right']
        if decided:
            win_rates[tiers.index(left), tiers.index(right)] = stats['wins_right'] / decided

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))

    # Win rate matrix
    image = axes[0].imshow(win_rates, cmap='viridis', vmin=0, vmax=1)
    axes[0].set_xticks(range(len(tiers)))
    axes[0].set_xticklabels([t.value for t in tiers])
    axes[0].set_yticks(range(len(tiers)))
    axes[0].set_yticklabels([t.value for t in tiers])
    axes[0].set_xlabel('Right paddle')
    axes[0].set_ylabel('Left paddle')
    axes[0].set_title('Right Paddle Win Rate')
    fig.colorbar(image, ax=axes[0])

    # Rally lengths
    for right in tiers:
        rallies = []
        for (left, other), stats in results.items():
            if other == right:
                rallies.extend(stats['rallies'])
        if rallies:
            window_size = max(1, min(50, len(rallies) // 10))
            axes[1].plot(smooth(rallies, window_size), label=right.value, alpha=0.8)
    axes[1].set_title('Rally Length per Point')
    axes[1].set_xlabel('Point')
    axes[1].set_ylabel('Paddle hits')
    axes[1].legend()
    axes[1].grid(True)

    plt.tight_layout()
    plt.savefig(filename, dpi=200)
    if show:
        plt.show()
    plt.close(fig)
    return win_rates


if __name__ == "__main__":
    logging.basicConfig(format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                        level=logging.INFO)
    matches = int(sys.argv[1]) if len(sys.argv) > 1 else 10
    max_steps = int(sys.argv[2]) if len(sys.argv) > 2 else 20000
    results = evaluate_matchups(matches=matches, max_steps=max_steps)
    plot_evaluation_results(results)
