"""Check the SHA-256 implementation against known-answer vectors.

Usage:
    python check_vectors.py                       # bundled vectors.yaml
    python check_vectors.py --vectors other.yaml
"""

from __future__ import annotations

import argparse
import sys

from sha256_cli import sha256_hex
from vectors import DEFAULT_VECTORS_PATH, VectorFileError, load_vectors


def _preview(message: bytes, limit: int = 40) -> str:
    text = repr(message[:limit])
    if len(message) > limit:
        text += f"... ({len(message):,} bytes)"
    return text


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Check sha256() against a YAML file of known answers"
    )
    parser.add_argument(
        "--vectors",
        type=str,
        default=DEFAULT_VECTORS_PATH,
        help="YAML vector file (default: the bundled vectors.yaml)",
    )
    args = parser.parse_args(argv)

    try:
        answers = load_vectors(args.vectors)
    except OSError as e:
        sys.stderr.write(f"Error reading vector file '{args.vectors}': {e}\n")
        return 1
    except VectorFileError as e:
        sys.stderr.write(f"Invalid vector file: {e}\n")
        return 1

    failed = 0
    for answer in answers:
        got = sha256_hex(answer.message)
        if got == answer.digest_hex:
            print(f"[PASS] {answer.name}")
            continue
        failed += 1
        print(f"[FAIL] {answer.name}")
        print(f"  Input:    {_preview(answer.message)}")
        print(f"  Expected: {answer.digest_hex}")
        print(f"  Got:      {got}")

    print(f"\n{len(answers) - failed}/{len(answers)} vectors passed")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
