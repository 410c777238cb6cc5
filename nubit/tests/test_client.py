import json

import httpx
import pytest

from nubit.config import NubitConfig
from nubit.errors import InvalidServiceURL, NamespaceTooLong, TransportError
from nubit.interfaces import BlobReader, BlobWriter
from nubit.nmt.namespace import encode_namespace
from nubit.retrieval.client import NuportClient
from nubit.utils.bytes import b64encode

from .squares import make_square

CFG = NubitConfig(enable=True, url="http://nuport.test:26658", namespace="nitro-dev", authkey="tok")
COMMITMENT = b"\x0c" * 40


# ---------------------------------------------------------------------------
# Mock transport helpers
# ---------------------------------------------------------------------------

def _rpc_result(result):
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})
    return handler


def _client(handler, cfg: NubitConfig = CFG) -> NuportClient:
    http = httpx.Client(transport=httpx.MockTransport(handler), base_url=cfg.url)
    return NuportClient(cfg, client=http)


# ---------------------------------------------------------------------------
# store
# ---------------------------------------------------------------------------

def test_store_submits_single_blob_and_returns_id():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(
            200, json={"jsonrpc": "2.0", "id": seen["body"]["id"], "result": [b64encode(COMMITMENT)]}
        )

    with _client(handler) as c:
        assert c.store(b"batch-1") == COMMITMENT

    body = seen["body"]
    assert body["jsonrpc"] == "2.0"
    assert body["method"] == "da.Submit"
    blobs, gas_price, ns = body["params"]
    assert blobs == [b64encode(b"batch-1")]
    assert gas_price == -1.0
    assert ns == b64encode(encode_namespace("nitro-dev").raw)
    assert seen["auth"] == "Bearer tok"


@pytest.mark.parametrize("result", [[], [b64encode(b"a"), b64encode(b"b")], None, "abc"])
def test_store_requires_exactly_one_id(result):
    with pytest.raises(TransportError):
        _client(_rpc_result(result)).store(b"batch")


def test_store_rejects_bad_base64_id():
    with pytest.raises(TransportError):
        _client(_rpc_result(["%%%"])).store(b"batch")


def test_rpc_error_object():
    def handler(request):
        return httpx.Response(
            200, json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": "insufficient fee"}}
        )

    with pytest.raises(TransportError) as ei:
        _client(handler).store(b"batch")
    assert "insufficient fee" in str(ei.value)
    assert ei.value.data["method"] == "da.Submit"


def test_http_status_error():
    with pytest.raises(TransportError) as ei:
        _client(lambda request: httpx.Response(503, text="unavailable")).store(b"batch")
    assert isinstance(ei.value.__cause__, httpx.HTTPStatusError)


def test_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError) as ei:
        _client(handler).store(b"batch")
    assert isinstance(ei.value.__cause__, httpx.ConnectError)


def test_non_json_response():
    with pytest.raises(TransportError):
        _client(lambda request: httpx.Response(200, text="<html>")).store(b"batch")


# ---------------------------------------------------------------------------
# read / proofs / construction
# ---------------------------------------------------------------------------

def test_read_and_proof_are_empty():
    c = _client(_rpc_result([]))
    pointer, _ = make_square()
    assert c.read(pointer) == (b"", None)
    assert c.get_proof(b"msg") == b""


def test_satisfies_capabilities():
    c = _client(_rpc_result([]))
    assert isinstance(c, BlobReader)
    assert isinstance(c, BlobWriter)


def test_str():
    assert str(_client(_rpc_result([]))) == "NubitDASClient{url:http://nuport.test:26658}"


def test_construction_validates_config():
    with pytest.raises(InvalidServiceURL):
        NuportClient(NubitConfig(url="not a url"))
    with pytest.raises(NamespaceTooLong):
        NuportClient(NubitConfig(namespace="n" * 30))


def test_owned_client_is_closed():
    c = NuportClient(NubitConfig())
    with c:
        pass
    assert c._client.is_closed


def test_injected_client_is_left_open():
    http = httpx.Client(transport=httpx.MockTransport(_rpc_result([])), base_url=CFG.url)
    with NuportClient(CFG, client=http):
        pass
    assert not http.is_closed
    http.close()
