import argparse
import json
import logging

from holdem.models import TableConfig

from .simulator import run_session


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate Hold'em hands between baseline bots")
    parser.add_argument("--players", type=int, default=6)
    parser.add_argument("--hands", type=int, default=100)
    parser.add_argument("--starting-stack", type=int, default=10_000)
    parser.add_argument("--sb", type=int, default=10)
    parser.add_argument("--bb", type=int, default=20)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    config = TableConfig(
        seats=args.players,
        starting_stack=args.starting_stack,
        sb=args.sb,
        bb=args.bb,
    )
    summary = run_session(config, hands=args.hands, seed=args.seed)
    print(json.dumps(summary.to_dict(), indent=2))


if __name__ == "__main__":
    main()
