import argparse
import random

from scratch.Log import setupLogging
from scratch_ui.tk_interface import ScratchTkInterface


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Lucky Scratch: scratch cards to find the hidden prize.")
    parser.add_argument("--width", type=int, default=1000, help="Initial window width.")
    parser.add_argument("--height", type=int, default=700, help="Initial window height.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the card shuffle.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level.")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    setupLogging(args.log_level)
    ui = ScratchTkInterface(width=args.width, height=args.height, rng=random.Random(args.seed))
    ui.run()


if __name__ == "__main__":
    main()
