"""Command-line interface for generating Anchor discriminators.

    discriminator generate NAME [-n NAMESPACE] [-e]
    discriminator idl -f FILE [-i INSTRUCTION] [-e EVENT]
    discriminator NAME [-n NAMESPACE] [-e]        (legacy form)

Legacy ``-n``/``-e`` flags placed before a subcommand are ignored.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from anchordisc.config import EVENT_NAMESPACE, GLOBAL_NAMESPACE, LOG_FORMAT
from anchordisc.discriminator import get_hash
from anchordisc.encoding import to_base58, to_base64, to_byte_array, to_prefixed_hex
from anchordisc.idl import IdlError, load_idl
from anchordisc.resolver import (
    NotFound,
    ResolvedDiscriminator,
    resolve,
)

logger = logging.getLogger(__name__)

PROG = "discriminator"
COMMANDS = ("generate", "idl")
RULE = "-" * 80


def setup_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("anchordisc")
    for h in root.handlers[:]:
        root.removeHandler(h)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def print_discriminator(namespace: str, name: str, disc: bytes) -> None:
    print(f"namespace: {namespace}")
    print(f"name: {name}")
    print(f"hash: {to_byte_array(disc)} {to_prefixed_hex(disc)}")
    print(f"b64: {to_base64(disc)}")
    print(f"b58: {to_base58(disc)}")


def _print_table(title: str, rows: tuple[ResolvedDiscriminator, ...]) -> None:
    print(title)
    print(RULE)
    for r in rows:
        print(f"{r.name:<30} | {to_prefixed_hex(r.discriminator)} | {to_base64(r.discriminator)}")


def _print_not_found(nf: NotFound) -> None:
    print(f"{nf.kind.capitalize()} '{nf.target}' not found in IDL")
    print(f"Available {nf.kind}s:")
    for name in nf.available:
        print(f"  - {name}")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_generate(name: str, namespace: str, event: bool) -> int:
    if event:
        namespace = EVENT_NAMESPACE
    logger.debug("hashing %r in namespace %r (event=%s)", name, namespace, event)
    print_discriminator(namespace, name, get_hash(namespace, name, event))
    return 0


def cmd_idl(file: str, instruction: Optional[str], event: Optional[str]) -> int:
    idl = load_idl(file)

    print(f"IDL Name: {idl.program_name}")
    print(f"IDL Version: {idl.program_version}")
    print(f"Found {len(idl.instructions)} instructions")
    print(f"Found {len(idl.events)} events")
    print()

    result = resolve(idl, instruction=instruction, event=event)

    if isinstance(result, NotFound):
        _print_not_found(result)
        print(f"error: {result.kind} not found", file=sys.stderr)
        return 1

    if isinstance(result, ResolvedDiscriminator):
        label = "Instruction" if instruction is not None else "Event"
        print(f"{label}: {result.name}")
        if result.stored:
            logger.debug("using discriminator stored in IDL for %r", result.name)
        print_discriminator(result.namespace, result.name, result.discriminator)
        return 0

    _print_table("Instruction discriminators:", result.instructions)
    if result.events:
        print()
        _print_table("Event discriminators:", result.events)
    return 0


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _add_generate_args(p: argparse.ArgumentParser, name_required: bool) -> None:
    if name_required:
        p.add_argument("name", help="Name to generate discriminator for")
    else:
        p.add_argument(
            "name", nargs="?", help="Name to generate discriminator for (legacy mode)"
        )
    p.add_argument(
        "-n",
        "--namespace",
        default=GLOBAL_NAMESPACE,
        help="Namespace to use (default: global)",
    )
    p.add_argument("-e", dest="event", action="store_true", help="Use 'event' namespace")


def _add_verbose(p: argparse.ArgumentParser, default: object = False) -> None:
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="log diagnostics to stderr",
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog=PROG, description="A CLI tool for generating Anchor discriminators"
    )
    _add_verbose(ap)
    # legacy-mode flags before a subcommand are accepted and ignored
    ap.add_argument("-n", "--namespace", dest="legacy_namespace", help=argparse.SUPPRESS)
    ap.add_argument("-e", dest="legacy_event", action="store_true", help=argparse.SUPPRESS)
    sub = ap.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate discriminator from name")
    _add_generate_args(gen, name_required=True)
    # SUPPRESS keeps a -v given before the subcommand from being reset
    _add_verbose(gen, default=argparse.SUPPRESS)

    idl = sub.add_parser("idl", help="Read Solana Anchor IDL and calculate instruction hashes")
    idl.add_argument("-f", "--file", required=True, help="Path to IDL JSON file")
    idl.add_argument(
        "-i", "--instruction", help="Specific instruction name to calculate hash for"
    )
    idl.add_argument("-e", "--event", help="Specific event name to calculate hash for")
    _add_verbose(idl, default=argparse.SUPPRESS)
    return ap


def build_legacy_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog=PROG,
        description="A CLI tool for generating Anchor discriminators",
        epilog=f"subcommands: {', '.join(COMMANDS)} (see '{PROG} <command> --help')",
    )
    _add_generate_args(ap, name_required=False)
    _add_verbose(ap)
    return ap


def _wants_subcommand(argv: list[str]) -> bool:
    """Report whether the first positional argument names a subcommand."""
    it = iter(argv)
    for arg in it:
        if arg in ("-n", "--namespace"):
            next(it, None)
            continue
        if arg.startswith("-"):
            continue
        return arg in COMMANDS
    return False


def main(argv: Optional[list[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)

    if _wants_subcommand(argv):
        args = build_parser().parse_args(argv)
    else:
        args = build_legacy_parser().parse_args(argv)
        args.command = None

    setup_logging(args.verbose)

    try:
        if args.command == "generate":
            return cmd_generate(args.name, args.namespace, args.event)
        if args.command == "idl":
            return cmd_idl(args.file, args.instruction, args.event)
    except IdlError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.name is None:
        print("No arguments provided. Use --help for usage information.")
        return 0
    return cmd_generate(args.name, args.namespace, args.event)


if __name__ == "__main__":
    sys.exit(main())
