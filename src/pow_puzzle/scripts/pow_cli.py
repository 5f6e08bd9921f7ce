# src/pow_puzzle/scripts/pow_cli.py
"""
Command-line front end for solving and verifying challenges.

    pow-puzzle solve --difficulty 16 --payload hello
    pow-puzzle verify solution.json

`solve` prints the solution as JSON; `verify` reads that JSON back (from a
file or `-` for stdin) and exits non-zero if it is expired or invalid.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from collections.abc import Sequence
from datetime import timedelta

from pydantic import ValidationError

from pow_puzzle.core.cancellation import CancellationToken
from pow_puzzle.core.errors import PowError, TaskInterruption
from pow_puzzle.core.logging_config import setup_logging
from pow_puzzle.core.settings import settings
from pow_puzzle.models import ChallengeBuilder, SolveParams
from pow_puzzle.schemas.pow import SolutionOut
from pow_puzzle.value_types import (
    TTL,
    CreatedAt,
    Hash,
    LeadingZeroBitCount,
    Payload,
    Resource,
    TemplateHashDataLayout,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pow-puzzle", description=__doc__.splitlines()[1])
    parser.add_argument("--log-level", default=None, help="override LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    solve = subparsers.add_parser("solve", help="build a challenge and solve it")
    solve.add_argument(
        "--difficulty",
        type=int,
        default=settings.leading_zero_bit_count,
        help="required leading zero bits",
    )
    solve.add_argument("--payload", required=True)
    solve.add_argument("--layout", default=settings.hash_data_layout)
    solve.add_argument("--hash", dest="hash_name", default=settings.hash_algorithm)
    solve.add_argument("--resource", default=None)
    solve.add_argument(
        "--ttl",
        default=None,
        help=(
            "challenge lifetime such as 5m0s; defaults to POW_CHALLENGE_TTL_SECONDS. "
            "The challenge is stamped with the current time"
        ),
    )
    solve.add_argument("--max-attempts", type=int, default=settings.max_attempt_count)
    solve.add_argument("--timeout", type=float, default=None, help="seconds before giving up")
    solve.add_argument("--random-nonce", action="store_true", help="start from a random nonce")

    verify = subparsers.add_parser("verify", help="verify a solution JSON document")
    verify.add_argument("path", help="file holding the solution, or - for stdin")
    return parser


def run_solve(args: argparse.Namespace) -> int:
    builder = (
        ChallengeBuilder()
        .set_leading_zero_bit_count(LeadingZeroBitCount(args.difficulty))
        .set_payload(Payload(args.payload))
        .set_hash(Hash.from_name(args.hash_name))
        .set_hash_data_layout(TemplateHashDataLayout(args.layout))
    )
    if args.ttl is not None:
        ttl = TTL.parse(args.ttl)
    else:
        ttl = TTL(timedelta(seconds=settings.challenge_ttl_seconds))
    builder.set_created_at(CreatedAt.now()).set_ttl(ttl)
    if args.resource is not None:
        builder.set_resource(Resource.parse(args.resource))
    challenge = builder.build()

    params = dataclasses.replace(
        SolveParams.from_settings(settings, random_nonce=args.random_nonce),
        max_attempt_count=args.max_attempts,
    )
    token = CancellationToken.with_timeout(args.timeout) if args.timeout is not None else None

    try:
        solution = challenge.solve(token, params)
    except TaskInterruption as err:
        print(f"solving interrupted: {err}", file=sys.stderr)
        return EXIT_INTERRUPTED

    print(SolutionOut.from_solution(solution).model_dump_json(indent=2))
    return EXIT_OK


def run_verify(args: argparse.Namespace) -> int:
    if args.path == "-":
        raw = sys.stdin.read()
    else:
        try:
            with open(args.path, encoding="utf-8") as handle:
                raw = handle.read()
        except OSError as err:
            print(f"unable to read solution: {err}", file=sys.stderr)
            return EXIT_FAILURE

    try:
        solution = SolutionOut.model_validate_json(raw).to_solution()
    except ValidationError as err:
        print(f"malformed solution: {err}", file=sys.stderr)
        return EXIT_FAILURE

    if not solution.challenge.is_alive():
        print("challenge is outdated", file=sys.stderr)
        return EXIT_FAILURE

    solution.verify()
    print("verification: OK")
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    handler = run_solve if args.command == "solve" else run_verify
    try:
        return handler(args)
    except PowError as err:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"{args.command} failed: {err}", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
