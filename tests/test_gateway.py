"""Smoke tests for the htcode gateway.

Runs the real application factory with an explicit config, so no
config file or environment is consulted.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from htcode.app import create_app
from htcode.config import HtcodeConfig
from htcode.errors import CodeOverflowError


@pytest.fixture
def client():
    with TestClient(create_app(HtcodeConfig())) as c:
        yield c


@pytest.fixture
def keyed_client():
    with TestClient(create_app(HtcodeConfig(api_key="s3cret"))) as c:
        yield c


class TestMeta:
    def test_health(self, client):
        r = client.get("/api/v1/health")
        assert r.status_code == 200
        assert r.json() == {"status": "ok", "service": "htcode"}

    def test_version(self, client):
        r = client.get("/api/v1/version")
        assert r.status_code == 200
        assert r.json()["gateway"] == "0.1.0"
        assert r.json()["profile"] == "default"

    def test_domain(self, client):
        data = client.get("/api/v1/domain").json()
        assert data["identifier_shape"] == "99AA9999"
        assert data["domain_size"] == 676_000_000
        assert data["code_space"] == 31**6
        assert data["code_length"] == 6
        assert data["rounds"] == 4


class TestEncode:
    def test_encode(self, client):
        r = client.post("/api/v1/encode", json={"identifier": "12AB3456"})
        assert r.status_code == 200
        assert r.json() == {
            "identifier": "12AB3456",
            "code": "DUECKB",
            "display": "HT-DUECKB",
        }

    def test_encode_normalizes_input(self, client):
        r = client.post("/api/v1/encode", json={"identifier": "  12ab3456 "})
        assert r.status_code == 200
        assert r.json()["code"] == "DUECKB"

    def test_encode_wrong_shape(self, client):
        r = client.post("/api/v1/encode", json={"identifier": "AB1234CD"})
        assert r.status_code == 422
        assert "AB1234CD" in r.json()["detail"]

    def test_encode_missing_field(self, client):
        r = client.post("/api/v1/encode", json={})
        assert r.status_code == 422


class TestDecode:
    def test_decode(self, client):
        r = client.post("/api/v1/decode", json={"code": "DUECKB"})
        assert r.status_code == 200
        assert r.json() == {"code": "DUECKB", "identifier": "12AB3456"}

    @pytest.mark.parametrize("raw", ["HT-DUECKB", "ht-dueckb", " DUECKB\n"])
    def test_decode_strips_prefix_and_case(self, client, raw):
        r = client.post("/api/v1/decode", json={"code": raw})
        assert r.status_code == 200
        assert r.json()["identifier"] == "12AB3456"

    def test_get_code(self, client):
        r = client.get("/api/v1/codes/HT-DNV8CC")
        assert r.status_code == 200
        assert r.json()["identifier"] == "00AA0000"

    def test_invalid_character(self, client):
        r = client.post("/api/v1/decode", json={"code": "!!!!!!"})
        assert r.status_code == 422

    def test_invalid_length(self, client):
        r = client.post("/api/v1/decode", json={"code": "DUECK"})
        assert r.status_code == 422

    def test_never_issued(self, client):
        r = client.post("/api/v1/decode", json={"code": "2V9N7W"})
        assert r.status_code == 404

    def test_roundtrip(self, client):
        for identifier in ("00AA0000", "99ZZ9999", "00AA0001", "76HT1416"):
            code = client.post("/api/v1/encode", json={"identifier": identifier}).json()["code"]
            back = client.post("/api/v1/decode", json={"code": code}).json()["identifier"]
            assert back == identifier


class TestAuth:
    def test_missing_key(self, keyed_client):
        r = keyed_client.get("/api/v1/health")
        assert r.status_code == 401

    def test_wrong_key(self, keyed_client):
        r = keyed_client.get("/api/v1/health", headers={"X-API-Key": "nope"})
        assert r.status_code == 401

    def test_non_ascii_key(self, keyed_client):
        r = keyed_client.get("/api/v1/health", headers={"X-API-Key": b"caf\xe9"})
        assert r.status_code == 401

    def test_correct_key(self, keyed_client):
        r = keyed_client.post(
            "/api/v1/encode",
            json={"identifier": "00AA0000"},
            headers={"X-API-Key": "s3cret"},
        )
        assert r.status_code == 200
        assert r.json()["code"] == "DNV8CC"


class TestProfiles:
    def test_adm_profile(self):
        with TestClient(create_app(HtcodeConfig(profile="adm"))) as c:
            r = c.get("/api/v1/codes/HT-T7GNMD")
            assert r.status_code == 200
            assert r.json()["identifier"] == "08001111"
            domain = c.get("/api/v1/domain").json()
            assert domain["profile"] == "adm"
            assert domain["identifier_shape"] == "99999999"

    def test_bad_config_fails_at_startup(self):
        app = create_app(HtcodeConfig(code_length=4))
        with pytest.raises(CodeOverflowError):
            with TestClient(app):
                pass
