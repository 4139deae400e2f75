"""NACHA flat-file formatter, export variants, and field validators."""

from __future__ import annotations

from achexport.nacha.builder import NachaFileBuilder, build_nacha_file
from achexport.nacha.exports import format_ach_csv, format_ach_json
from achexport.nacha.validators import (
    compute_entry_hash,
    generate_trace_number,
    to_cents,
    validate_account_number,
    validate_entries,
    validate_routing_number,
)

__all__ = [
    "NachaFileBuilder",
    "build_nacha_file",
    "compute_entry_hash",
    "format_ach_csv",
    "format_ach_json",
    "generate_trace_number",
    "to_cents",
    "validate_account_number",
    "validate_entries",
    "validate_routing_number",
]
