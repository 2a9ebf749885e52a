"""solana_idls/cli.py

`solana-idls` command line.

Usage:
  solana-idls decode --program pumpfun_amm --hex 66063d1201daebea...
  solana-idls decode --program raydium_cpmm --base64 QMbN6CYIceI... --event
  solana-idls decode --program <id> --hex ... --accounts <key> <key> ...
  solana-idls programs

Exit status: 0 decoded, 1 decode error, 2 usage / configuration error.
"""
from __future__ import annotations

import argparse
import base64
import json
import logging
import sys
from typing import List, Optional

from .config import ConfigError, DecoderConfig, build_registry, config_from_env, configure_logging, load_config
from .errors import DecodeError
from .registry import OnUnrecognized, Registry

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DECODE_ERROR = 1
EXIT_USAGE = 2


class UsageError(RuntimeError):
    pass


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default="", help="decoder config YAML (default: $SOLANA_IDLS_CONFIG)")

    ap = argparse.ArgumentParser(prog="solana-idls", description="Decode Solana instruction and event payloads.")
    sub = ap.add_subparsers(dest="command", required=True)

    dec = sub.add_parser("decode", parents=[common], help="decode one instruction or event buffer")
    dec.add_argument("--program", required=True, help="program name or base58 id")
    data = dec.add_mutually_exclusive_group(required=True)
    data.add_argument("--hex", default=None)
    data.add_argument("--base64", default=None)
    dec.add_argument("--event", action="store_true", help="decode against the event table")
    dec.add_argument("--accounts", nargs="*", default=None, help="instruction account keys (base58), in order")
    dec.add_argument("--on-unrecognized", choices=["unknown", "error"], default=None)

    sub.add_parser("programs", parents=[common], help="list registered programs")
    return ap


def _load(args: argparse.Namespace) -> DecoderConfig:
    if args.config:
        return load_config(args.config)
    return config_from_env()


def _read_data(args: argparse.Namespace) -> bytes:
    try:
        if args.hex is not None:
            text = args.hex[2:] if args.hex.startswith("0x") else args.hex
            return bytes.fromhex(text)
        return base64.b64decode(args.base64, validate=True)
    except ValueError as e:
        raise UsageError(f"cannot parse input data: {e}") from e


def _decode(registry: Registry, args: argparse.Namespace) -> dict:
    data = _read_data(args)
    policy = None if args.on_unrecognized is None else OnUnrecognized.parse(args.on_unrecognized)
    if args.program not in registry:
        raise UsageError(f"program not registered: {args.program}")

    if args.event:
        out = registry.decode_event(args.program, data, on_unrecognized=policy).to_dict()
        out["program"] = registry.get(args.program).name
        return out
    return registry.decode_instruction(args.program, data, accounts=args.accounts, on_unrecognized=policy).to_dict()


def _programs(registry: Registry) -> List[dict]:
    return [
        {
            "name": p.name,
            "program_id": p.program_id,
            "instructions": 0 if p.instructions is None else len(p.instructions),
            "events": 0 if p.events is None else len(p.events),
        }
        for p in sorted(registry, key=lambda p: p.name)
    ]


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        cfg = _load(args)
        configure_logging(cfg)
        registry = build_registry(cfg)
        if args.command == "programs":
            result = _programs(registry)
        else:
            result = _decode(registry, args)
    except (ConfigError, UsageError, KeyError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE
    except DecodeError as e:
        logger.debug(f"[cli] decode failed: {e!r}")
        print(f"DECODE ERROR: {e}", file=sys.stderr)
        return EXIT_DECODE_ERROR

    print(json.dumps(result, indent=2, sort_keys=False))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
