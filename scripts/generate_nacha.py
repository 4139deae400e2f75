"""Format a batch JSON file as a NACHA, CSV or JSON export without any AWS services.

Usage:
    python scripts/generate_nacha.py batch.json --profile acme.json --output ACH_1.txt
    python scripts/generate_nacha.py batch.json --format csv
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from achexport.core.config import AppSettings
from achexport.core.exceptions import AchExportError
from achexport.core.logging import setup_logging
from achexport.models.ach import Batch, OriginatorProfile
from achexport.nacha.builder import build_nacha_file
from achexport.nacha.exports import format_ach_csv, format_ach_json
from achexport.nacha.validators import validate_entries


def _load_profile(path: Path, settings: AppSettings) -> OriginatorProfile:
    return OriginatorProfile.from_stored(json.loads(path.read_text()), settings.originator)


def render(batch: Batch, fmt: str, profile: OriginatorProfile | None, now: datetime | None) -> str:
    if fmt == "csv":
        return format_ach_csv(batch.entries)
    if fmt == "json":
        return format_ach_json(batch, batch.entries)
    if profile is None:
        raise ValueError("--profile is required for NACHA output")
    return build_nacha_file(batch, batch.entries, profile.company, profile.originator, now=now)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Format an ACH batch as NACHA, CSV or JSON")
    parser.add_argument("batch", type=Path, help="Batch JSON file (id, scheduled_date, entries, ...)")
    parser.add_argument("--profile", type=Path, default=None,
                        help="Originator profile JSON ({company: {...}, originator: {...}})")
    parser.add_argument("--format", choices=("nacha", "csv", "json"), default="nacha")
    parser.add_argument("--output", type=Path, default=None, help="Write here instead of stdout")
    parser.add_argument("--now", type=datetime.fromisoformat, default=None,
                        help="File creation timestamp (ISO 8601) for reproducible output")
    parser.add_argument("--skip-validation", action="store_true", help="Do not pre-validate entries")
    args = parser.parse_args(argv)

    settings = AppSettings()
    setup_logging(settings.service_name, settings.log_level)

    try:
        batch = Batch.model_validate_json(args.batch.read_text())
        profile = _load_profile(args.profile, settings) if args.profile else None
    except (OSError, ValidationError, KeyError, json.JSONDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.format == "nacha" and not args.skip_validation:
        issues = validate_entries(batch.entries, settings.validation)
        if issues:
            for issue in issues:
                print(issue, file=sys.stderr)
            return 1

    try:
        content = render(batch, args.format, profile, args.now)
    except (ValueError, AchExportError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.output:
        newline = "" if args.format == "nacha" else None
        with open(args.output, "w", encoding="ascii" if args.format == "nacha" else "utf-8",
                  newline=newline) as fo:
            fo.write(content)
        print(f"Wrote {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(content)
    return 0


if __name__ == "__main__":
    sys.exit(main())
