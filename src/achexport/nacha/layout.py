"""Declarative NACHA record layouts.

Each record type is a table of ``FieldSpec`` rows (name, 1-based start,
width, kind, justification, constant). Tables are checked when the module is
imported: fields must be contiguous from position 1 and cover exactly 94
characters. Rendering never mis-aligns a column:

* numeric fields are zero-filled on the left and must be all ASCII digits; a
  value wider than its field raises ``FieldOverflowError``;
* alphanumeric fields are folded to ASCII and space-filled; a value wider
  than its field is cut to width and a warning is logged;
* ``exact`` fields (routing-derived ids, dates, trace numbers) must already
  be exactly ``width`` characters.

Reference: https://achdevguide.nacha.org/ach-file-details
"""

from __future__ import annotations

import logging
import unicodedata
from typing import Any, Literal, Optional

from pydantic import BaseModel, model_validator

from achexport.core.exceptions import FieldOverflowError, RecordLayoutError

logger = logging.getLogger(__name__)

RECORD_SIZE = 94
BLOCKING_FACTOR = 10
FILLER_RECORD = "9" * RECORD_SIZE


def to_ascii(text: str) -> str:
    """Fold accents (NFKD) and replace anything still outside ASCII with ``?``."""
    folded = unicodedata.normalize("NFKD", text)
    folded = "".join(ch for ch in folded if not unicodedata.combining(ch))
    return folded.encode("ascii", errors="replace").decode("ascii")


class FieldSpec(BaseModel):
    """One fixed-width field of a record."""

    name: str
    start: int  # 1-based, as printed in the NACHA rules
    width: int
    kind: Literal["N", "A"] = "A"
    justify: Optional[Literal["left", "right"]] = None
    constant: Optional[str] = None
    exact: bool = False

    model_config = {"frozen": True}

    @property
    def end(self) -> int:
        return self.start + self.width - 1

    @property
    def right_justified(self) -> bool:
        if self.justify is not None:
            return self.justify == "right"
        return self.kind == "N"

    def render(self, record: str, value: Any) -> str:
        text = self.constant if self.constant is not None else ("" if value is None else str(value))

        if self.kind == "N":
            # str.isdigit() also accepts non-ASCII digits
            if not (text.isascii() and text.isdigit()):
                reason = "missing numeric value" if text == "" else "non-numeric value"
                raise FieldOverflowError(record, self.name, text, self.width, reason)
            if len(text) > self.width:
                raise FieldOverflowError(record, self.name, text, self.width)
        elif not text.isascii():
            logger.warning(
                "Transliterated non-ASCII text in %s.%s", record, self.name,
                extra={"record": record, "field": self.name},
            )
            text = to_ascii(text)

        if self.exact and len(text) != self.width:
            raise FieldOverflowError(
                record, self.name, text, self.width,
                f"expected exactly {self.width} chars, got {len(text)}",
            )

        if len(text) > self.width:
            logger.warning(
                "Truncated %s.%s from %d to %d chars",
                record, self.name, len(text), self.width,
                extra={"record": record, "field": self.name},
            )
            text = text[: self.width]

        fill = "0" if self.kind == "N" else " "
        return text.rjust(self.width, fill) if self.right_justified else text.ljust(self.width, fill)


def _n(name: str, start: int, width: int, **kwargs: Any) -> FieldSpec:
    return FieldSpec(name=name, start=start, width=width, kind="N", **kwargs)


def _a(name: str, start: int, width: int, **kwargs: Any) -> FieldSpec:
    return FieldSpec(name=name, start=start, width=width, kind="A", **kwargs)


class RecordLayout(BaseModel):
    """Ordered field table for one record type."""

    name: str
    record_type: str
    field_specs: tuple[FieldSpec, ...]

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_table(self) -> "RecordLayout":
        position = 1
        for spec in self.field_specs:
            if spec.width < 1:
                raise RecordLayoutError(f"{self.name}.{spec.name}: width must be positive")
            if spec.start != position:
                raise RecordLayoutError(
                    f"{self.name}.{spec.name}: starts at {spec.start}, expected {position}"
                )
            if spec.constant is not None and len(spec.constant) != spec.width:
                raise RecordLayoutError(
                    f"{self.name}.{spec.name}: constant {spec.constant!r} does not fill width {spec.width}"
                )
            position = spec.end + 1
        if position - 1 != RECORD_SIZE:
            raise RecordLayoutError(f"{self.name}: covers {position - 1} chars, expected {RECORD_SIZE}")
        first = self.field_specs[0]
        if first.name != "record_type" or first.constant != self.record_type:
            raise RecordLayoutError(f"{self.name}: first field must be record_type {self.record_type!r}")
        return self

    @property
    def field_names(self) -> list[str]:
        return [spec.name for spec in self.field_specs]

    def render(self, **values: Any) -> str:
        """Render one 94-character record from keyword field values."""
        unknown = set(values) - set(self.field_names)
        if unknown:
            raise RecordLayoutError(f"{self.name}: unknown field(s) {sorted(unknown)}")
        line = "".join(spec.render(self.name, values.get(spec.name)) for spec in self.field_specs)
        if len(line) != RECORD_SIZE:  # pragma: no cover - guaranteed by _check_table
            raise RecordLayoutError(f"{self.name}: rendered {len(line)} chars")
        return line

    def parse(self, line: str) -> dict[str, str]:
        """Split a rendered record back into raw (unstripped) field strings."""
        if len(line) != RECORD_SIZE:
            raise RecordLayoutError(f"{self.name}: record is {len(line)} chars, expected {RECORD_SIZE}")
        return {spec.name: line[spec.start - 1 : spec.end] for spec in self.field_specs}


FILE_HEADER = RecordLayout(
    name="file_header",
    record_type="1",
    field_specs=(
        _a("record_type", 1, 1, constant="1"),
        _n("priority_code", 2, 2, constant="01"),
        _a("immediate_destination", 4, 10, justify="right"),
        _a("immediate_origin", 14, 10, justify="right"),
        _n("file_creation_date", 24, 6, exact=True),
        _n("file_creation_time", 30, 4, exact=True),
        _a("file_id_modifier", 34, 1),
        _n("record_size", 35, 3, constant="094"),
        _n("blocking_factor", 38, 2, constant="10"),
        _n("format_code", 40, 1, constant="1"),
        _a("immediate_destination_name", 41, 23),
        _a("immediate_origin_name", 64, 23),
        _a("reference_code", 87, 8),
    ),
)

BATCH_HEADER = RecordLayout(
    name="batch_header",
    record_type="5",
    field_specs=(
        _a("record_type", 1, 1, constant="5"),
        _n("service_class_code", 2, 3, exact=True),
        _a("company_name", 5, 16),
        _a("company_discretionary_data", 21, 20),
        _a("company_id", 41, 10),
        _a("standard_entry_class", 51, 3, exact=True),
        _a("entry_description", 54, 10),
        _a("descriptive_date", 64, 6),
        _n("effective_entry_date", 70, 6, exact=True),
        _a("settlement_date", 76, 3),
        _a("originator_status_code", 79, 1, constant="1"),
        _n("originating_dfi", 80, 8, exact=True),
        _n("batch_number", 88, 7),
    ),
)

ENTRY_DETAIL = RecordLayout(
    name="entry_detail",
    record_type="6",
    field_specs=(
        _a("record_type", 1, 1, constant="6"),
        _n("transaction_code", 2, 2, exact=True),
        _n("receiving_dfi", 4, 8, exact=True),
        _n("check_digit", 12, 1, exact=True),
        _a("account_number", 13, 17),
        _n("amount", 30, 10),
        _a("individual_id", 40, 15),
        _a("individual_name", 55, 22),
        _a("discretionary_data", 77, 2),
        _n("addenda_indicator", 79, 1, constant="0"),
        _n("trace_number", 80, 15, exact=True),
    ),
)

BATCH_CONTROL = RecordLayout(
    name="batch_control",
    record_type="8",
    field_specs=(
        _a("record_type", 1, 1, constant="8"),
        _n("service_class_code", 2, 3, exact=True),
        _n("entry_count", 5, 6),
        _n("entry_hash", 11, 10),
        _n("total_debit", 21, 12),
        _n("total_credit", 33, 12),
        _a("company_id", 45, 10),
        _a("message_authentication_code", 55, 19),
        _a("reserved", 74, 6),
        _n("originating_dfi", 80, 8, exact=True),
        _n("batch_number", 88, 7),
    ),
)

FILE_CONTROL = RecordLayout(
    name="file_control",
    record_type="9",
    field_specs=(
        _a("record_type", 1, 1, constant="9"),
        _n("batch_count", 2, 6),
        _n("block_count", 8, 6),
        _n("entry_count", 14, 8),
        _n("entry_hash", 22, 10),
        _n("total_debit", 32, 12),
        _n("total_credit", 44, 12),
        _a("reserved", 56, 39),
    ),
)

LAYOUTS: dict[str, RecordLayout] = {
    layout.record_type: layout
    for layout in (FILE_HEADER, BATCH_HEADER, ENTRY_DETAIL, BATCH_CONTROL, FILE_CONTROL)
}
