import logging
import os

from opponent_ai import Difficulty

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def configure_logging(level="INFO"):
    logging.basicConfig(format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT,
                        level=getattr(logging, level.upper(), logging.INFO))


def choose_difficulty():
    """Ask for a difficulty tier, defaulting to amateur"""
    tiers = list(Difficulty)
    for i, tier in enumerate(tiers, start=1):
        print(f"{i}. {tier.value.capitalize()}")
    choice = input("Difficulty (default 1): ").strip()
    if choice.isdigit() and 1 <= int(choice) <= len(tiers):
        return tiers[int(choice) - 1]
    return Difficulty.AMATEUR


def play_vs_computer(difficulty=Difficulty.AMATEUR):
    """Play against the computer"""
    from pong_game import PongGame

    game = PongGame()
    game.set_difficulty(difficulty)

    print("Controls:")
    print("Up/Down - Move paddle")
    print("Space - Start match")
    print("1/2/3 - Amateur/Intermediate/Master")
    print("ESC - Stop")

    game.run(vs_computer=True)


def play_two_players():
    """Two player mode"""
    from pong_game import PongGame

    game = PongGame()

    print("Controls:")
    print("Left paddle: Up/Down")
    print("Right paddle: W/S")
    print("Space - Start match")
    print("ESC - Stop")

    game.run(vs_computer=False)


def main():
    """Main menu"""
    configure_logging(os.environ.get("PONG_LOG_LEVEL", "INFO"))

    print("=== Pong ===")
    print("1. Play vs Computer")
    print("2. Two Player Mode")
    print("3. Evaluate Computer Tiers")
    print("4. Exit")

    while True:
        try:
            choice = input("\nEnter your choice (1-4): ").strip()

            if choice == "1":
                difficulty = choose_difficulty()
                print(f"Starting game vs {difficulty.value} computer...")
                play_vs_computer(difficulty)

            elif choice == "2":
                print("Starting two player game...")
                play_two_players()

            elif choice == "3":
                from evaluate_pong import evaluate_matchups, plot_evaluation_results

                matches = input("Matches per pairing (default 10): ").strip()
                matches = int(matches) if matches.isdigit() else 10

                results = evaluate_matchups(matches=matches)
                plot_evaluation_results(results)
                print("Results saved to pong_evaluation_results.png")

            elif choice == "4":
                print("Goodbye!")
                break

            else:
                print("Invalid choice. Please enter 1-4.")

        except KeyboardInterrupt:
            print("\nGoodbye!")
            break
        except Exception as e:
            print(f"Error: {e}")
            print("Please try again.")


if __name__ == "__main__":
    main()
