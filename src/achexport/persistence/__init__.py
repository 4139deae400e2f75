"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from achexport.core.config import AppSettings
from achexport.persistence.dynamodb_backend import DynamoDBAuditLog, DynamoDBOriginatorStore
from achexport.persistence.redis_backend import RedisCacheBackend
from achexport.persistence.s3_backend import S3FileStore


def create_persistence(settings: AppSettings | None = None):
    """Create wired-up persistence backends from application settings.

    Returns:
        Tuple of (originator_store, file_store, audit_log, cache).
    """
    if settings is None:
        settings = AppSettings()

    cache = RedisCacheBackend(
        host=settings.redis.host,
        port=settings.redis.port,
        db=settings.redis.db,
        key_prefix=settings.redis.key_prefix,
    )

    originator_store = DynamoDBOriginatorStore(
        table_suffix=settings.dynamodb.table_suffix,
        region=settings.dynamodb.region,
        endpoint_url=settings.dynamodb.endpoint_url,
        cache=cache,
        cache_ttl=settings.redis.profile_ttl,
    )

    file_store = S3FileStore(
        bucket=settings.s3.bucket,
        region=settings.s3.region,
        endpoint_url=settings.s3.endpoint_url,
    )

    audit_log = DynamoDBAuditLog(
        table_suffix=settings.dynamodb.table_suffix,
        region=settings.dynamodb.region,
        endpoint_url=settings.dynamodb.endpoint_url,
    )

    return originator_store, file_store, audit_log, cache
