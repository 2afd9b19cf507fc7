from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from partialmock.errors import ConfigurationError
from partialmock.generator.spec import load_specifications


def _cmd_spec_validate(args: argparse.Namespace) -> int:
    try:
        specs = load_specifications(Path(args.spec_file))
    except ConfigurationError as exc:
        print(str(exc))
        return 1
    print(f"OK: {len(specs)} mock specifications")
    return 0


def _cmd_spec_show(args: argparse.Namespace) -> int:
    try:
        specs = load_specifications(Path(args.spec_file))
    except ConfigurationError as exc:
        print(str(exc))
        return 1
    summary = [
        {**spec.to_mapping(), "kept_methods": list(spec.kept_methods())}
        for spec in specs
    ]
    print(json.dumps(summary, indent=2, sort_keys=True))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="partialmock")
    p.add_argument("--verbose", "-v", action="store_true", help="Log at DEBUG level")
    sub = p.add_subparsers(dest="cmd", required=True)

    spec = sub.add_parser("spec", help="Mock specification file utilities")
    spec_sub = spec.add_subparsers(dest="spec_cmd", required=True)

    spec_v = spec_sub.add_parser("validate", help="Validate a specification file")
    spec_v.add_argument("spec_file")
    spec_v.set_defaults(func=_cmd_spec_validate)

    spec_s = spec_sub.add_parser("show", help="Summarize each specification as JSON")
    spec_s.add_argument("spec_file")
    spec_s.set_defaults(func=_cmd_spec_show)

    return p


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    rc = args.func(args)
    raise SystemExit(rc)
