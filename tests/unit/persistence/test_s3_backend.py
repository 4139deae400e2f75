"""Unit tests for S3FileStore using moto."""

from __future__ import annotations

import boto3
import pytest
from moto import mock_aws

from achexport.core.exceptions import ExportStoreError
from achexport.persistence.s3_backend import S3FileStore

BUCKET = "test-achexport-files"


@pytest.fixture
def s3_client():
    with mock_aws():
        client = boto3.client("s3", region_name="us-east-1")
        client.create_bucket(Bucket=BUCKET)
        yield client


@pytest.fixture
def s3_backend(s3_client):
    return S3FileStore(bucket=BUCKET, region="us-east-1")


class TestWrite:
    def test_write_returns_path(self, s3_backend):
        result = s3_backend.write("nacha/acme/ACH_B-1_20250315.txt", b"101 091000019")
        assert result == "nacha/acme/ACH_B-1_20250315.txt"

    def test_write_is_encrypted_with_content_type(self, s3_backend, s3_client):
        s3_backend.write("exports/ACH_B-1_20250315.csv", b"a,b", content_type="text/csv")
        head = s3_client.head_object(Bucket=BUCKET, Key="exports/ACH_B-1_20250315.csv")
        assert head["ServerSideEncryption"] == "AES256"
        assert head["ContentType"] == "text/csv"

    def test_write_stores_metadata(self, s3_backend, s3_client):
        s3_backend.write("nacha/acme/f.txt", b"x", metadata={"batch_id": "B-1", "company_id": "acme"})
        head = s3_client.head_object(Bucket=BUCKET, Key="nacha/acme/f.txt")
        assert head["Metadata"] == {"batch_id": "B-1", "company_id": "acme"}

    def test_write_to_missing_bucket_raises(self, s3_client):
        store = S3FileStore(bucket="no-such-bucket", region="us-east-1")
        with pytest.raises(ExportStoreError):
            store.write("x.txt", b"x")


class TestRead:
    def test_read_returns_bytes(self, s3_backend):
        s3_backend.write("nacha/acme/f.txt", b"\r\n".join([b"1" * 94, b"9" * 94]))
        assert s3_backend.read("nacha/acme/f.txt") == b"1" * 94 + b"\r\n" + b"9" * 94

    def test_read_missing_key_raises(self, s3_backend):
        with pytest.raises(ExportStoreError):
            s3_backend.read("does/not/exist.txt")


class TestListFiles:
    def test_list_returns_matching_keys(self, s3_backend):
        s3_backend.write("nacha/acme/a.txt", b"1")
        s3_backend.write("nacha/acme/b.txt", b"2")
        s3_backend.write("exports/c.csv", b"3")
        result = s3_backend.list_files("nacha/")
        assert sorted(result) == ["nacha/acme/a.txt", "nacha/acme/b.txt"]

    def test_list_empty_prefix_returns_nothing(self, s3_backend):
        assert s3_backend.list_files("nonexistent/") == []

    def test_list_handles_pagination(self, s3_backend):
        for i in range(1050):
            s3_backend.write(f"bulk/{i:04d}.txt", b"x")
        assert len(s3_backend.list_files("bulk/")) == 1050
