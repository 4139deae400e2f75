"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic_settings import BaseSettings

from achexport.models.ach import OriginatorConfig


class DynamoDBConfig(BaseSettings):
    """DynamoDB configuration for originator profiles and the audit log."""

    model_config = {"env_prefix": "ACHEXPORT_DYNAMO_"}

    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class RedisConfig(BaseSettings):
    """Redis cache configuration."""

    model_config = {"env_prefix": "ACHEXPORT_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    key_prefix: str = "achexport"
    profile_ttl: int = 300


class S3Config(BaseSettings):
    """S3 storage for generated NACHA and export files."""

    model_config = {"env_prefix": "ACHEXPORT_S3_"}

    bucket: str = "achexport-files"
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class ValidationConfig(BaseSettings):
    """Pre-build checks applied to every batch before a file is generated."""

    model_config = {"env_prefix": "ACHEXPORT_VALIDATION_"}

    routing_number_validation: bool = True
    account_number_validation: bool = True
    max_per_transaction: Decimal = Decimal("1000000")
    max_per_file: Decimal = Decimal("10000000")
    duplicate_detection: bool = True
    allow_empty_batch: bool = False


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs.

    Originator defaults are nested: ``ACHEXPORT_ORIGINATOR__IMMEDIATE_DESTINATION``.
    """

    model_config = {"env_prefix": "ACHEXPORT_", "env_nested_delimiter": "__"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    service_name: str = "achexport"

    originator: OriginatorConfig = OriginatorConfig()
    validation: ValidationConfig = ValidationConfig()
    dynamodb: DynamoDBConfig = DynamoDBConfig()
    redis: RedisConfig = RedisConfig()
    s3: S3Config = S3Config()
