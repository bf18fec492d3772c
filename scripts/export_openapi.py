#!/usr/bin/env python3
"""
Export the API's OpenAPI schema to a JSON file for client generation.
Run from the repository root:
  python scripts/export_openapi.py
  python scripts/export_openapi.py -o build/openapi.json --indent 0
Settings are read as usual, so SUPABASE_* must be set (no connection is made).
"""
import argparse
import json
import sys
from pathlib import Path

# Ensure project root is on path when running script directly
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.main import app


def export_schema(out_path: Path, indent: int | None = 2) -> Path:
    schema = app.openapi()
    out_path.parent.mkdir(parents=True, exist_ok=True)

    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(schema, f, indent=indent or None, ensure_ascii=False)

    return out_path


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Export OpenAPI schema to JSON")
    parser.add_argument(
        "-o",
        "--output",
        default="openapi.json",
        help="Output JSON file path (default: openapi.json)",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indent, 0 for compact output (default: 2)",
    )
    args = parser.parse_args(argv)

    out_path = export_schema(Path(args.output), args.indent)
    print(f"Exported {app.title} OpenAPI schema to {out_path.absolute()}")


if __name__ == "__main__":
    main()
