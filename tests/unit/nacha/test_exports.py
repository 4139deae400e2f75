"""Tests for the CSV and JSON export variants."""

from __future__ import annotations

import json
from datetime import date

from achexport.models.ach import Batch, Entry
from achexport.nacha.exports import CSV_HEADER, format_ach_csv, format_ach_json


class TestCsv:
    def test_header_plus_one_row_per_entry(self, batch):
        lines = format_ach_csv(batch.entries).split("\n")
        assert len(lines) == len(batch.entries) + 1
        assert lines[0] == (
            "Transaction Type,Routing Number,Account Number,Amount,"
            "Employee ID,Employee Name,Description,Effective Date"
        )

    def test_rows_are_quoted_verbatim(self, batch):
        lines = format_ach_csv(batch.entries).split("\n")
        assert lines[1] == (
            '"debit","021000021","12345678","100","EMP001","Jane Doe","Benefit premium","2025-03-15"'
        )

    def test_empty_entries_is_header_only(self):
        assert format_ach_csv([]) == CSV_HEADER

    def test_embedded_quotes_are_doubled(self):
        entry = Entry(
            transaction_type="credit", routing_number="021000021", account_number="1234",
            amount="5.10", payee_name='Robert "Bob" Jones, Jr',
        )
        row = format_ach_csv([entry]).split("\n")[1]
        assert row == '"credit","021000021","1234","5.10","","Robert ""Bob"" Jones, Jr","",""'


class TestJson:
    def test_batch_summary(self, batch):
        payload = json.loads(format_ach_json(batch, batch.entries))
        assert payload["batch"] == {
            "id": "B-1",
            "name": "March 15 payroll",
            "effectiveDate": "2025-03-15",
            "status": "scheduled",
            "totalAmount": 150,
            "entryCount": 2,
        }

    def test_entries_are_camel_case_projections(self, batch):
        payload = json.loads(format_ach_json(batch, batch.entries))
        assert payload["entries"][1] == {
            "transactionType": "credit",
            "routingNumber": "011000015",
            "accountNumber": "987654321",
            "amount": 50,
            "employeeId": "EMP002",
            "employeeName": "John Smith",
            "description": "Net pay",
            "effectiveDate": "2025-03-15",
        }

    def test_two_space_indent(self, batch):
        text = format_ach_json(batch, batch.entries)
        assert text.startswith('{\n  "batch": {\n    "id": "B-1"')

    def test_fractional_amounts_stay_numeric(self):
        batch = Batch(id="B-2", scheduled_date=date(2025, 3, 15), total_amount="10.25")
        payload = json.loads(format_ach_json(batch, []))
        assert payload["batch"]["totalAmount"] == 10.25
        assert payload["entries"] == []
