"""Tests for the vectors router."""

import base64
import os
import struct

import pytest
from fastapi.testclient import TestClient

from ..main import app

SAMPLE_TEXT = "[-0.0026168018,-0.024089903,0.03355637]"
SAMPLE_B64 = base64.b64encode(
    struct.pack("<3f", -0.0026168018, -0.024089903, 0.03355637)
).decode("ascii")
SAMPLE_FLOAT32 = list(struct.unpack("<3f", struct.pack("<3f", -0.0026168018, -0.024089903, 0.03355637)))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

class FakeEs:
    def __init__(self, docs: dict, fail: bool = False):
        self._docs = docs
        self._fail = fail

    async def search(self, *, index=None, query=None, size=None, _source=None, **kwargs):
        if self._fail:
            raise ConnectionError("cluster unavailable")
        ids = query["ids"]["values"]
        return {"hits": {"hits": [{"_source": self._docs[i]} for i in ids if i in self._docs]}}


@pytest.fixture(autouse=True)
def api_key_env():
    prev = os.environ.get("API_KEY")
    os.environ["API_KEY"] = "testkey"
    yield
    if prev is None:
        del os.environ["API_KEY"]
    else:
        os.environ["API_KEY"] = prev


@pytest.fixture
def fake_app_es():
    def install(docs: dict | None = None, fail: bool = False):
        app.state.es = FakeEs(docs or {}, fail=fail)

    yield install
    try:
        delattr(app.state, "es")
    except AttributeError:
        pass


@pytest.fixture
def client():
    return TestClient(app, headers={"X-API-Key": "testkey"})


# ---------------------------------------------------------------------------
# POST /vectors/decode
# ---------------------------------------------------------------------------

class TestDecode:
    def test_json_float32(self, client):
        resp = client.post(
            "/vectors/decode",
            json={"source_format": "json", "payload": SAMPLE_TEXT, "scalar_type": "float32"},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["scalar_type"] == "float32"
        assert body["dimensions"] == 3
        assert body["scalars"] == SAMPLE_FLOAT32

    def test_base64_matches_json(self, client):
        resp = client.post(
            "/vectors/decode", json={"source_format": "base64", "payload": SAMPLE_B64}
        )
        assert resp.status_code == 200
        assert resp.json()["scalars"] == SAMPLE_FLOAT32

    def test_int8(self, client):
        resp = client.post(
            "/vectors/decode",
            json={"source_format": "json", "payload": "[1,-2,3]", "scalar_type": "sbyte"},
        )
        assert resp.json() == {"scalar_type": "int8", "dimensions": 3, "scalars": [1, -2, 3]}

    def test_misaligned_base64_is_422(self, client):
        resp = client.post(
            "/vectors/decode",
            json={"source_format": "base64", "payload": base64.b64encode(bytes(6)).decode()},
        )
        assert resp.status_code == 422
        assert "not a multiple" in resp.json()["detail"]

    def test_non_finite_base64_values_are_422(self, client):
        payload = base64.b64encode(struct.pack("<2f", float("inf"), float("nan"))).decode("ascii")
        resp = client.post(
            "/vectors/decode",
            json={"source_format": "base64", "payload": payload, "scalar_type": "float32"},
        )
        assert resp.status_code == 422
        assert "Element 0" in resp.json()["detail"]

    def test_malformed_json_is_422(self, client):
        resp = client.post("/vectors/decode", json={"source_format": "json", "payload": "[1,2"})
        assert resp.status_code == 422

    def test_unsupported_type_is_400(self, client):
        resp = client.post(
            "/vectors/decode",
            json={"source_format": "json", "payload": "[1]", "scalar_type": "float64"},
        )
        assert resp.status_code == 400

    def test_unknown_source_format_is_rejected(self, client):
        resp = client.post("/vectors/decode", json={"source_format": "csv", "payload": "1,2"})
        assert resp.status_code == 422

    def test_requires_api_key(self):
        resp = TestClient(app).post("/vectors/decode", json={"source_format": "json", "payload": "[1]"})
        assert resp.status_code == 401


# ---------------------------------------------------------------------------
# POST /vectors/encode
# ---------------------------------------------------------------------------

class TestEncode:
    def test_array(self, client):
        resp = client.post("/vectors/encode", json={"scalars": [-0.0026168018, -0.024089903, 0.03355637]})
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/json"
        assert resp.text == SAMPLE_TEXT

    def test_base64(self, client):
        resp = client.post(
            "/vectors/encode",
            json={"scalars": [-0.0026168018, -0.024089903, 0.03355637], "encoding": "base64"},
        )
        assert resp.status_code == 200
        assert resp.json() == SAMPLE_B64

    def test_uint8(self, client):
        resp = client.post("/vectors/encode", json={"scalars": [1, 2, 3], "scalar_type": "byte"})
        assert resp.text == "[1,2,3]"

    def test_unknown_format_is_400(self, client):
        resp = client.post("/vectors/encode", json={"scalars": [1.0], "format": "B"})
        assert resp.status_code == 400

    def test_out_of_range_is_422(self, client):
        resp = client.post("/vectors/encode", json={"scalars": [300], "scalar_type": "uint8"})
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# GET /vectors/{index}/{doc_id}
# ---------------------------------------------------------------------------

class TestFetch:
    def test_decodes_array_field(self, client, fake_app_es):
        fake_app_es({"hotel-1": {"DescriptionVector": [0.5, -0.25]}})
        resp = client.get("/vectors/hotels/hotel-1")
        assert resp.status_code == 200
        assert resp.json() == {"scalar_type": "float32", "dimensions": 2, "scalars": [0.5, -0.25]}

    def test_decodes_base64_field_as_float16(self, client, fake_app_es):
        encoded = base64.b64encode(struct.pack("<2e", 1.0, -2.0)).decode("ascii")
        fake_app_es({"doc": {"embedding": encoded}})
        resp = client.get("/vectors/posts/doc?field=embedding&scalar_type=float16")
        assert resp.json()["scalars"] == [1.0, -2.0]

    def test_field_from_environment(self, client, fake_app_es, monkeypatch):
        monkeypatch.setenv("EMBEDDING_FIELD", "vec")
        fake_app_es({"doc": {"vec": [1.0]}})
        assert client.get("/vectors/posts/doc").json()["scalars"] == [1.0]

    def test_missing_document_is_404(self, client, fake_app_es):
        fake_app_es({})
        assert client.get("/vectors/hotels/nope").status_code == 404

    def test_elasticsearch_failure_is_502(self, client, fake_app_es):
        fake_app_es(fail=True)
        resp = client.get("/vectors/hotels/hotel-1")
        assert resp.status_code == 502
        assert resp.json() == {"detail": "Elasticsearch request failed"}

    def test_unconfigured_elasticsearch_is_503(self, client):
        assert client.get("/vectors/hotels/hotel-1").status_code == 503

    def test_misaligned_stored_vector_is_422(self, client, fake_app_es):
        fake_app_es({"doc": {"DescriptionVector": base64.b64encode(bytes(3)).decode()}})
        assert client.get("/vectors/hotels/doc").status_code == 422
