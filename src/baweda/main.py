"""Executable entrypoint for Baweda Escape."""

from __future__ import annotations

from pathlib import Path
import argparse
import logging

from .game import RunnerGame


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main(argv: list[str] | None = None) -> None:
    """Launch the game."""
    parser = argparse.ArgumentParser(prog="baweda", description="Endless runner: outrun the chaser.")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    parser.add_argument("--seed", type=int, default=None, help="seed for spawn randomness")
    args = parser.parse_args(argv)

    setup_logging(args.debug)
    logger = logging.getLogger(__name__)
    logger.info("Baweda Escape starting")

    root = Path(__file__).resolve().parents[2]
    RunnerGame(root=root, seed=args.seed).run()
    logger.info("Baweda Escape stopped")


if __name__ == "__main__":
    main()
