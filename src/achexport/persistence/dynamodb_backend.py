"""DynamoDB backends: originator profiles (Redis read-through) and the audit log."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

import boto3
from botocore.exceptions import ClientError

from achexport.core.exceptions import AuditLogError, OriginatorNotFoundError

logger = logging.getLogger(__name__)

ORIGINATORS_TABLE = "achexport-originators"
AUDIT_LOG_TABLE = "achexport-audit-log"


class _DecimalEncoder(json.JSONEncoder):
    """Encode Decimal values as int or float for JSON serialization."""

    def default(self, o: Any) -> Any:
        if isinstance(o, Decimal):
            return int(o) if o == int(o) else float(o)
        return super().default(o)


def _decode_decimals(value: Any) -> Any:
    """Convert DynamoDB Decimals in nested maps/lists to int/float."""
    if isinstance(value, Decimal):
        return int(value) if value == int(value) else float(value)
    if isinstance(value, dict):
        return {k: _decode_decimals(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_decode_decimals(v) for v in value]
    return value


def _encode_decimals(value: Any) -> Any:
    """Convert floats to Decimal; boto3 rejects float attributes."""
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: _encode_decimals(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_encode_decimals(v) for v in value]
    return value


def _resource(region: str, endpoint_url: str | None):
    kwargs: dict = {"region_name": region}
    if endpoint_url:
        kwargs["endpoint_url"] = endpoint_url
    return boto3.resource("dynamodb", **kwargs)


class DynamoDBOriginatorStore:
    """Production IOriginatorStore backed by DynamoDB + optional Redis cache.

    Item shape: ``PK=COMPANY#{id}``, ``SK=ACH``, ``company`` and
    ``originator`` maps.
    """

    CACHE_TTL = 300  # 5 minutes

    def __init__(self, table_suffix: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None, cache: Any = None,
                 cache_ttl: int | None = None) -> None:
        self._table_name = f"{ORIGINATORS_TABLE}{table_suffix}"
        self._cache = cache
        self._cache_ttl = cache_ttl or self.CACHE_TTL
        self._ddb = _resource(region, endpoint_url)

    @staticmethod
    def _cache_key(company_id: str) -> str:
        return f"originator:{company_id}"

    def get_originator(self, company_id: str) -> dict[str, Any]:
        cache_key = self._cache_key(company_id)
        if self._cache is not None:
            cached = self._cache.get(cache_key)
            if cached is not None:
                return json.loads(cached)

        resp = self._ddb.Table(self._table_name).get_item(
            Key={"PK": f"COMPANY#{company_id}", "SK": "ACH"}
        )
        item = resp.get("Item")
        if item is None:
            raise OriginatorNotFoundError(company_id)

        profile = _decode_decimals({k: v for k, v in item.items() if k not in ("PK", "SK")})
        if self._cache is not None:
            self._cache.setex(cache_key, self._cache_ttl, json.dumps(profile, cls=_DecimalEncoder))
        return profile

    def put_originator(self, company_id: str, profile: dict[str, Any]) -> None:
        item = {"PK": f"COMPANY#{company_id}", "SK": "ACH", **_encode_decimals(profile)}
        self._ddb.Table(self._table_name).put_item(Item=item)
        if self._cache is not None:
            self._cache.delete(self._cache_key(company_id))


class DynamoDBAuditLog:
    """Production IAuditLog: one item per event under ``PK=BATCH#{id}``."""

    def __init__(self, table_suffix: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._table_name = f"{AUDIT_LOG_TABLE}{table_suffix}"
        self._ddb = _resource(region, endpoint_url)

    def record(self, batch_id: str, company_id: str, action_type: str,
               details: dict[str, Any]) -> None:
        performed_at = datetime.now(timezone.utc).isoformat()
        item = {
            "PK": f"BATCH#{batch_id}",
            "SK": f"EVENT#{performed_at}#{action_type}",
            "company_id": company_id,
            "action_type": action_type,
            "action_details": _encode_decimals(json.loads(json.dumps(details, cls=_DecimalEncoder))),
            "performed_by": "system",
            "performed_at": performed_at,
        }
        try:
            self._ddb.Table(self._table_name).put_item(Item=item)
        except ClientError as exc:
            raise AuditLogError(f"Audit write failed for batch {batch_id!r}: {exc}") from exc
        logger.debug("Audit event %s recorded for batch %s", action_type, batch_id)

    def events_for_batch(self, batch_id: str) -> list[dict[str, Any]]:
        resp = self._ddb.Table(self._table_name).query(
            KeyConditionExpression="PK = :pk",
            ExpressionAttributeValues={":pk": f"BATCH#{batch_id}"},
        )
        return [_decode_decimals(item) for item in resp.get("Items", [])]
