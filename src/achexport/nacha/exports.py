"""CSV and JSON export variants of an ACH batch."""

from __future__ import annotations

import csv
import io
import json
from datetime import date
from decimal import Decimal
from typing import Any, Sequence

from achexport.models.ach import Batch, Entry

CSV_HEADER = (
    "Transaction Type,Routing Number,Account Number,Amount,"
    "Employee ID,Employee Name,Description,Effective Date"
)


class _ExportEncoder(json.JSONEncoder):
    """Encode Decimal as int or float and dates as ISO strings."""

    def default(self, o: Any) -> Any:
        if isinstance(o, Decimal):
            return int(o) if o == int(o) else float(o)
        if isinstance(o, date):
            return o.isoformat()
        return super().default(o)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def format_ach_csv(entries: Sequence[Entry]) -> str:
    """Header row plus one fully quoted row per entry, ``\\n``-joined, no trailing newline."""
    buf = io.StringIO()
    buf.write(CSV_HEADER + "\n")
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for e in entries:
        writer.writerow([
            _text(e.transaction_type),
            e.routing_number,
            e.account_number,
            _text(e.amount),
            e.payee_id,
            e.payee_name,
            e.description,
            _text(e.effective_date),
        ])
    return buf.getvalue()[:-1]


def _entry_projection(e: Entry) -> dict[str, Any]:
    return {
        "transactionType": str(e.transaction_type),
        "routingNumber": e.routing_number,
        "accountNumber": e.account_number,
        "amount": e.amount,
        "employeeId": e.payee_id,
        "employeeName": e.payee_name,
        "description": e.description,
        "effectiveDate": e.effective_date,
    }


def format_ach_json(batch: Batch, entries: Sequence[Entry]) -> str:
    """Batch summary plus camelCase entry projections, 2-space indented."""
    payload = {
        "batch": {
            "id": batch.id,
            "name": batch.name,
            "effectiveDate": batch.scheduled_date,
            "status": batch.status,
            "totalAmount": batch.total_amount,
            "entryCount": len(entries),
        },
        "entries": [_entry_projection(e) for e in entries],
    }
    return json.dumps(payload, indent=2, cls=_ExportEncoder)
