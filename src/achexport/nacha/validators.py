"""Field validators and pure helpers for NACHA entries.

Validators return booleans or issue lists and never raise for bad data;
callers reject a batch before it reaches the file builder.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from achexport.core.config import ValidationConfig
from achexport.core.types import Cents, RoutingNumber
from achexport.models.ach import Entry

_ROUTING_RE = re.compile(r"[0-9]{9}")
_ACCOUNT_RE = re.compile(r"[A-Za-z0-9]{4,17}")
_ABA_WEIGHTS = (3, 7, 1, 3, 7, 1, 3, 7, 1)

ENTRY_HASH_MODULUS = 10**10
MAX_TRACE_SEQUENCE = 9_999_999


def validate_routing_number(routing_number: RoutingNumber) -> bool:
    """ABA checksum: weights 3,7,1 over the 9 digits, sum divisible by 10."""
    if not isinstance(routing_number, str) or not _ROUTING_RE.fullmatch(routing_number):
        return False
    total = sum(int(d) * w for d, w in zip(routing_number, _ABA_WEIGHTS))
    return total % 10 == 0


def validate_account_number(account_number: str) -> bool:
    return isinstance(account_number, str) and _ACCOUNT_RE.fullmatch(account_number) is not None


def generate_trace_number(originating_dfi: str, sequence: int) -> str:
    """ODFI (first 8 digits) + 7-digit zero-padded 1-based sequence."""
    if not 1 <= sequence <= MAX_TRACE_SEQUENCE:
        raise ValueError(f"trace sequence {sequence} outside 1..{MAX_TRACE_SEQUENCE}")
    return f"{originating_dfi[:8]}{sequence:07d}"


def compute_entry_hash(routing_numbers: Iterable[RoutingNumber]) -> int:
    """Sum of receiving DFI ids (first 8 routing digits), rightmost 10 digits kept."""
    return sum(int(rn[:8]) for rn in routing_numbers) % ENTRY_HASH_MODULUS


def to_cents(amount: Decimal) -> Cents:
    """Dollars to integer cents, half-up."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def validate_entries(entries: Sequence[Entry], limits: ValidationConfig | None = None) -> list[str]:
    """Collect every problem in a batch as a readable issue string.

    An empty list means the batch is safe to format. With
    ``duplicate_detection`` on, an entry repeating an earlier entry's routing
    number, account, amount and type is flagged. Account numbers are
    never echoed back in issue text.
    """
    if limits is None:
        limits = ValidationConfig()

    issues: list[str] = []
    if not entries and not limits.allow_empty_batch:
        issues.append("Batch has no entries")

    file_total = Decimal("0")
    first_seen: dict[tuple, int] = {}
    for position, entry in enumerate(entries, start=1):
        label = f"Entry {position} ({entry.payee_id or 'no payee id'})"
        if not entry.routing_number:
            issues.append(f"{label}: missing routing number")
        elif limits.routing_number_validation and not validate_routing_number(entry.routing_number):
            issues.append(f"{label}: invalid routing number {entry.routing_number!r}")
        if not entry.account_number:
            issues.append(f"{label}: missing account number")
        elif limits.account_number_validation and not validate_account_number(entry.account_number):
            issues.append(f"{label}: account number must be 4-17 letters or digits")
        if entry.amount <= 0:
            issues.append(f"{label}: invalid amount {entry.amount}")
        elif entry.amount > limits.max_per_transaction:
            issues.append(
                f"{label}: amount {entry.amount} exceeds per-transaction limit {limits.max_per_transaction}"
            )
        if not entry.payee_name:
            issues.append(f"{label}: missing payee name")
        if limits.duplicate_detection:
            key = (entry.routing_number, entry.account_number, to_cents(entry.amount), entry.transaction_type)
            if key in first_seen:
                issues.append(
                    f"{label}: duplicate of entry {first_seen[key]} (same routing, account, amount and type)"
                )
            else:
                first_seen[key] = position
        file_total += entry.amount

    if file_total > limits.max_per_file:
        issues.append(f"Batch total {file_total} exceeds per-file limit {limits.max_per_file}")
    return issues
