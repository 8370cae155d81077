"""Command-line wrapper around the transform.

Usage:
    dmmf-transform dmmf.json                  # prints to stdout
    dmmf-transform dmmf.json -o out.json      # writes to file
    dmmf-transform dmmf.json -v               # debug logging on stderr
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from dmmf_transform.codec import DocumentFormatError, dump_document, load_document
from dmmf_transform.transform import run_transform
from dmmf_transform.where import WhereOutcome


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Synthesize filter, where and order-by types for a DMMF document"
    )
    parser.add_argument("input", type=Path, help="DMMF JSON file to transform")
    parser.add_argument("-o", "--output", type=Path, help="Output JSON file (default: stdout)")
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log each pass at debug level",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not args.input.exists():
        print(f"Error: {args.input} not found", file=sys.stderr)
        return 1

    try:
        document = load_document(args.input)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {args.input}: {e}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"Error: {args.input} is not UTF-8 text: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Cannot read {args.input}: {e}", file=sys.stderr)
        return 1
    except DocumentFormatError as e:
        print(f"Error: {args.input}: {e}", file=sys.stderr)
        return 1

    report = run_transform(document)
    passthrough = [
        name
        for name, outcome in report.where.outcomes.items()
        if outcome is WhereOutcome.PASSTHROUGH
    ]
    if passthrough:
        print(f"Warning: no model for {', '.join(passthrough)}", file=sys.stderr)

    if args.output:
        dump_document(report.document, args.output)
        print(f"Wrote {args.output}", file=sys.stderr)
    else:
        print(dump_document(report.document))
    return 0


if __name__ == "__main__":
    sys.exit(main())
