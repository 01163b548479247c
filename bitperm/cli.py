"""Command line entry point: demo and selftest commands.

    python -m bitperm demo --bits 8 --set 5 --count 20
    python -m bitperm selftest --max-bits 16
"""

from __future__ import annotations

import argparse
import logging
import sys

from bitperm.api import format_permutations
from bitperm.core.config import Settings, load_config
from bitperm.core.errors import BitPermError
from bitperm.core.table import build_table
from bitperm.eval.selftest import run_self_test


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bitperm",
        description="Rank and unrank fixed-popcount bit patterns",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to bitperm.toml (auto-detected if omitted)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    demo = commands.add_parser("demo", help="Print the first bit permutations")
    demo.add_argument("--bits", type=int, default=None, help="Total bit width")
    demo.add_argument("--set", dest="set_bits", type=int, default=None, help="Number of set bits")
    demo.add_argument("--count", type=int, default=None, help="How many permutations to print")

    selftest = commands.add_parser("selftest", help="Cross-check every (n, k) space")
    selftest.add_argument(
        "--max-bits",
        type=int,
        default=None,
        help="Largest bit width to check (default from config, else 16)",
    )
    selftest.add_argument(
        "--batch",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Also check the vectorized rank_many/unrank_many (default from config)",
    )
    return parser


def _run_demo(args: argparse.Namespace, settings: Settings) -> int:
    bits = settings.demo.bits if args.bits is None else args.bits
    set_bits = settings.demo.set_bits if args.set_bits is None else args.set_bits
    count = settings.demo.count if args.count is None else args.count

    table = build_table(settings.max_bits)
    lines = format_permutations(bits, set_bits, count, table)
    print(
        f"The first {len(lines)} binary permutations of {set_bits} set bits "
        f"out of {bits} total bits are"
    )
    for line in lines:
        print(line)
    return 0


def _run_selftest(args: argparse.Namespace, settings: Settings) -> int:
    max_bits = settings.selftest.max_bits if args.max_bits is None else args.max_bits
    batch = settings.selftest.batch if args.batch is None else args.batch
    print(f"Testing all possible inputs for values up to {max_bits}-bits")
    report = run_self_test(max_bits, table=build_table(max_bits), batch=batch)
    if not report.passed:
        print(report.failure)
        return 1
    print(f"Test complete. {len(report.spaces)} spaces, {report.values_checked} values checked.")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_config(args.config)
        if args.command == "demo":
            return _run_demo(args, settings)
        return _run_selftest(args, settings)
    except (BitPermError, ValueError, FileNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
