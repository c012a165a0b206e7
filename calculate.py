#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Oct 19 13:41:52 2026

@author: KRHE

Command line version of the charge calculator. Reads the charge description
as JSON (see charge_io) from a file or stdin and prints N.E.W. and MSD as JSON.

    python calculate.py charge.json --breakdown
    echo '{"materials": {"Composition C-4": {"pounds": 5}}}' | python calculate.py
"""
from __future__ import annotations

import argparse
import sys

from charge_io import ChargeInputError, compute_json_text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Net Explosive Weight and minimum safe distance calculator")
    parser.add_argument("input", nargs="?", default="-", help="JSON input file, '-' for stdin (default)")
    parser.add_argument("--breakdown", action="store_true", help="include per-material contributions")
    parser.add_argument("--indent", type=int, default=None, help="indent the JSON output")
    return parser


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as fh:
        return fh.read()


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        text = _read_input(args.input)
        output = compute_json_text(text, breakdown=args.breakdown, indent=args.indent)
    except (ChargeInputError, OSError) as err:
        print("Error:", err, file=sys.stderr)
        return 1
    print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
