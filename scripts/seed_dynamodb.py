"""Create the achexport DynamoDB tables and seed a sample originator profile.

Usage:
    python scripts/seed_dynamodb.py --endpoint-url http://localhost:4566
"""

from __future__ import annotations

import argparse
from typing import Any

import boto3

TABLE_DEFINITIONS: list[dict[str, Any]] = [
    {"name": "achexport-originators"},
    {"name": "achexport-audit-log"},
]

SAMPLE_ORIGINATORS: list[dict[str, Any]] = [
    {
        "PK": "COMPANY#acme", "SK": "ACH",
        "company": {"company_name": "ACME CORPORATION", "company_id": "1234567890"},
        "originator": {
            "immediate_destination": "091000019",
            "immediate_destination_name": "WELLS FARGO BANK",
            "immediate_origin": "1234567890",
            "entry_description": "PAYROLL",
        },
    },
]


def create_tables(ddb: Any, suffix: str = "") -> None:
    """Create both tables. Skips any that already exist."""
    client = ddb.meta.client
    existing = client.list_tables().get("TableNames", [])

    for defn in TABLE_DEFINITIONS:
        table_name = f"{defn['name']}{suffix}"
        if table_name in existing:
            print(f"  Table {table_name} already exists, skipping")
            continue
        client.create_table(
            TableName=table_name,
            KeySchema=[
                {"AttributeName": "PK", "KeyType": "HASH"},
                {"AttributeName": "SK", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "PK", "AttributeType": "S"},
                {"AttributeName": "SK", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        print(f"  Created table {table_name}")


def seed_originators(ddb: Any, suffix: str = "") -> None:
    tbl = ddb.Table(f"achexport-originators{suffix}")
    with tbl.batch_writer() as batch:
        for item in SAMPLE_ORIGINATORS:
            batch.put_item(Item=item)
    print(f"  Seeded {len(SAMPLE_ORIGINATORS)} originator profile(s)")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed DynamoDB tables for achexport")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--table-suffix", default="", help="Table name suffix (e.g. -dev)")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating tables...")
    create_tables(ddb, suffix=args.table_suffix)

    print("Seeding originators...")
    seed_originators(ddb, suffix=args.table_suffix)

    print("Done!")


if __name__ == "__main__":
    main()
