"""
Command line lookup.

Races the configured providers for one postal code and prints the fastest
answer.

Usage:
    cep-lookup 29330000
    cep-lookup 29330-000 --deadline 2.5 --provider viacep
    cep-lookup 29330000 --json

Exit codes: 0 found, 1 every provider failed (or invalid input), 3 timed out.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Optional, TextIO

from dotenv import load_dotenv

from cep_lookup.adapters import ProviderAdapter, available_provider_ids, get_adapters
from cep_lookup.constants import EXIT_NO_WINNER, EXIT_OK, EXIT_TIMED_OUT
from cep_lookup.coordinator import RaceCoordinator
from cep_lookup.exceptions import UnknownProviderError
from cep_lookup.models import RaceResult
from cep_lookup.observability.logging import LOG_LEVELS, setup_logging
from cep_lookup.settings import LookupSettings, load_settings
from cep_lookup.transport import Transport


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None
    if parsed <= 0:
        raise argparse.ArgumentTypeError("must be greater than zero")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cep-lookup",
        description="Look up a Brazilian postal code (CEP) using the fastest provider.",
    )
    parser.add_argument("postal_code", help="Postal code, e.g. 29330000 or 29330-000")
    parser.add_argument(
        "--deadline",
        type=_positive_float,
        default=None,
        help="Seconds to wait for the whole race (default: CEP_LOOKUP_DEADLINE_SECONDS or 1.0)",
    )
    parser.add_argument(
        "--provider",
        action="append",
        choices=available_provider_ids(),
        dest="providers",
        help="Provider to race; repeat to select several (default: all configured)",
    )
    parser.add_argument("--json", action="store_true", help="Print the full race result as JSON")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: LOG_LEVEL or WARNING)",
    )
    return parser


def exit_code_for(result: RaceResult) -> int:
    if result.ok:
        return EXIT_OK
    if result.timed_out:
        return EXIT_TIMED_OUT
    return EXIT_NO_WINNER


def render_result(result: RaceResult, out: TextIO) -> None:
    if result.winner is not None:
        winner = result.winner
        address = winner.address
        print(f"Fastest provider: {winner.provider_id} ({winner.elapsed_ms} ms)", file=out)
        print("Address:", file=out)
        print(f"  Postal code: {address.postal_code}", file=out)
        print(f"  Region:      {address.region}", file=out)
        print(f"  City:        {address.city}", file=out)
        print(f"  District:    {address.district}", file=out)
        print(f"  Street:      {address.street}", file=out)
        return

    if result.timed_out:
        print(f"Error: no provider answered within the deadline ({result.elapsed_ms} ms).", file=out)
    elif result.dispatched == 0 and result.failures:
        print("Error: invalid lookup.", file=out)
    else:
        print("Error: every provider failed.", file=out)
    for failure in result.failures:
        print(f"  - {failure.provider_id}: {failure.error_kind}: {failure.message}", file=out)


async def run(
    args: argparse.Namespace,
    adapters: List[ProviderAdapter],
    settings: LookupSettings,
    transport: Optional[Transport] = None,
) -> RaceResult:
    coordinator = RaceCoordinator(transport, adapters, settings=settings)
    return await coordinator.resolve(args.postal_code, deadline=args.deadline)


def main(argv: Optional[List[str]] = None, transport: Optional[Transport] = None) -> int:
    load_dotenv(override=False)
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings = load_settings()
    try:
        adapters = get_adapters(args.providers, settings=settings)
    except UnknownProviderError as e:
        parser.error(f"{e.message} (check CEP_LOOKUP_PROVIDERS)")

    result = asyncio.run(run(args, adapters, settings, transport))

    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        render_result(result, sys.stdout)
    return exit_code_for(result)


if __name__ == "__main__":
    sys.exit(main())
