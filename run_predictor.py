#!/usr/bin/env python3
"""
Interactive menu for the facility congestion predictor.

Options:
1. Process attendance records from CSV
2. Train the random forest with a chosen number of trees
3. Predict congestion for a facility on a month/day
4. Evaluate the forest on the loaded records
5. Exit
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional
from src.config import Config
from src.session import PredictionSession

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)


MENU = """
Menu:
1. Process records
2. Train algorithm
3. Predict congestion at a facility
4. Evaluate algorithm
5. Exit"""


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments, defaulting to Config values."""
    parser = argparse.ArgumentParser(description="Facility congestion predictor")
    parser.add_argument(
        "--data-file",
        default=Config.ATTENDANCE_DATA_FILE,
        help="Attendance CSV file to process"
    )
    parser.add_argument(
        "--random-state",
        type=int,
        default=Config.random_state(),
        help="Seed for reproducible forests"
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        default=Config.max_workers(),
        help="Threads used to train trees"
    )
    args = parser.parse_args(argv)

    if args.random_state is not None and args.random_state < 0:
        parser.error("--random-state must be >= 0")
    if args.max_workers is not None and args.max_workers < 1:
        parser.error("--max-workers must be >= 1")

    return args


def read_int(prompt: str, input_fn: Callable[[str], str] = input) -> Optional[int]:
    """Prompt for an integer, returning None if the answer is not one."""
    answer = input_fn(prompt).strip()
    try:
        return int(answer)
    except ValueError:
        print(f"'{answer}' is not a number.")
        return None


def process_records(session: PredictionSession, data_file: str) -> None:
    if session.has_records:
        print("Records have already been processed.")
        return

    print("Processing records...")
    session.load_records(data_file)
    print(f"Records processed: {len(session.records)}")


def train_forest(session: PredictionSession, input_fn: Callable[[str], str] = input) -> None:
    if not session.has_records:
        print("You must process the records first.")
        return

    tree_count = read_int("Enter the number of trees to train: ", input_fn)
    if tree_count is None or tree_count < 1:
        print("The number of trees must be a positive integer.")
        return

    elapsed = session.train(tree_count)
    print(f"Algorithm trained with {tree_count} trees in {elapsed:.3f}s")


def predict_congestion(session: PredictionSession, input_fn: Callable[[str], str] = input) -> None:
    if not session.is_trained:
        print("You must train the algorithm first.")
        return

    facilities = session.facility_names()
    print("Available facilities:")
    for i, facility in enumerate(facilities, start=1):
        print(f"{i}. {facility}")

    index = read_int("Select the facility number: ", input_fn)
    if index is None or not 1 <= index <= len(facilities):
        print("Invalid number.")
        return
    facility = facilities[index - 1]

    month = read_int("Enter the month (1-12): ", input_fn)
    if month is None or not 1 <= month <= 12:
        print("Invalid month.")
        return

    day = read_int("Enter the day (1-31): ", input_fn)
    if day is None or not 1 <= day <= 31:
        print("Invalid day.")
        return

    if session.predict(facility, month, day):
        print(f"Facility {facility} will be congested.")
    else:
        print(f"Facility {facility} will not be congested.")


def evaluate_forest(session: PredictionSession) -> None:
    if not session.is_trained:
        print("You must train the algorithm first.")
        return

    metrics = session.evaluate()
    print(f"Accuracy on loaded records: {metrics['accuracy']:.3f} ({metrics['n_samples']} records)")


def run_menu(
    session: PredictionSession,
    data_file: str,
    input_fn: Callable[[str], str] = input
) -> None:
    """Run the menu loop until the user exits."""
    actions = {
        1: lambda: process_records(session, data_file),
        2: lambda: train_forest(session, input_fn),
        3: lambda: predict_congestion(session, input_fn),
        4: lambda: evaluate_forest(session),
    }

    while True:
        print(MENU)
        option = read_int("Choose an option: ", input_fn)

        if option == 5:
            print("Exiting...")
            return

        action = actions.get(option)
        if action is None:
            print("Invalid option, try again.")
            continue

        try:
            action()
        except Exception as e:
            logger.error(f"Menu option {option} failed: {e}", exc_info=True)


def main(argv: Optional[List[str]] = None):
    """Main execution function."""
    try:
        args = parse_args(argv)
        session = PredictionSession(
            random_state=args.random_state,
            max_workers=args.max_workers
        )
    except Exception as e:
        logger.error(f"Startup failed with error: {e}", exc_info=True)
        sys.exit(1)

    try:
        run_menu(session, args.data_file)
    except (EOFError, KeyboardInterrupt):
        print("\nExiting...")


if __name__ == "__main__":
    main()
