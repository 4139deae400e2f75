"""Unit tests for RedisCacheBackend using fakeredis."""

from __future__ import annotations

import json
from unittest.mock import patch

import fakeredis
import pytest

from achexport.core.exceptions import CacheError
from achexport.persistence.redis_backend import RedisCacheBackend


@pytest.fixture
def fake_server():
    return fakeredis.FakeServer()


@pytest.fixture
def raw(fake_server):
    return fakeredis.FakeRedis(server=fake_server, decode_responses=True)


@pytest.fixture
def backend(raw):
    with patch("redis.Redis", return_value=raw):
        return RedisCacheBackend(host="localhost", port=6379, db=0, key_prefix="achexport")


class TestGet:
    def test_returns_none_on_miss(self, backend):
        assert backend.get("originator:acme") is None

    def test_returns_stored_string(self, backend):
        profile = {"company": {"company_id": "1234567890"}}
        backend.setex("originator:acme", 300, json.dumps(profile))
        assert json.loads(backend.get("originator:acme")) == profile


class TestSetex:
    def test_keys_are_namespaced(self, backend, raw):
        backend.setex("originator:acme", 60, "v")
        assert raw.get("achexport:originator:acme") == "v"
        assert raw.get("originator:acme") is None

    def test_ttl_applied(self, backend, raw):
        backend.setex("k", 60, "v")
        assert 0 < raw.ttl("achexport:k") <= 60

    def test_overwrites_existing_value(self, backend):
        backend.setex("k", 60, "old")
        backend.setex("k", 60, "new")
        assert backend.get("k") == "new"


class TestDelete:
    def test_removes_existing_key(self, backend):
        backend.setex("del_me", 60, "val")
        backend.delete("del_me")
        assert backend.get("del_me") is None

    def test_noop_on_missing_key(self, backend):
        backend.delete("never_existed")  # should not raise


def test_empty_prefix_uses_bare_keys(raw):
    with patch("redis.Redis", return_value=raw):
        backend = RedisCacheBackend(key_prefix="")
    backend.setex("k", 60, "v")
    assert raw.get("k") == "v"


def test_ping(backend):
    assert backend.ping() is True


class TestErrorWrapping:
    def test_get_wraps_redis_error(self):
        b = RedisCacheBackend.__new__(RedisCacheBackend)
        b._prefix = "achexport"
        b._client = None  # will cause AttributeError -> CacheError
        with pytest.raises(CacheError):
            b.get("k")

    def test_connection_failure_wrapped(self, backend, raw):
        with patch.object(raw, "setex", side_effect=ConnectionError("refused")):
            with pytest.raises(CacheError, match="SETEX"):
                backend.setex("k", 60, "v")
