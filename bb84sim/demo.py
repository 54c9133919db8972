"""Command-line smoke run of the BB84 pipeline."""

import argparse
import logging

from .reporting import summarize
from .simulation import run_simulation


def run_demo(
    n: int = 800,
    sample_size: float = 20,
    block_size: int = 32,
    final_key_length: int = 128,
    eve: bool = False,
    secure: bool = False,
    seed=None,
) -> None:
    result = run_simulation(n, sample_size, block_size, final_key_length, eve, secure, seed=seed)
    print(summarize(result))


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Simulate a BB84 key exchange.")
    parser.add_argument("--n", type=int, default=800)
    parser.add_argument("--sample-size", type=float, default=20)
    parser.add_argument("--block-size", type=int, default=32)
    parser.add_argument("--final-key-length", type=int, default=128)
    parser.add_argument("--eve", action="store_true")
    parser.add_argument("--secure", action="store_true")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    run_demo(
        args.n,
        args.sample_size,
        args.block_size,
        args.final_key_length,
        args.eve,
        args.secure,
        args.seed,
    )


if __name__ == "__main__":
    main()
