import requests
import pytest

from bread.config import API_URL


def _api_available() -> bool:
    try:
        res = requests.get(f"{API_URL}/token", timeout=2)
        return res.ok
    except requests.RequestException:
        return False


def get_json(path, **params):
    resp = requests.get(f"{API_URL}{path}", params=params, timeout=5)
    resp.raise_for_status()
    return resp.json()


pytestmark = pytest.mark.skipif(
    not _api_available(),
    reason=f"HTTP API not running at {API_URL}; start bread.app to run this smoke test"
)


def test_api_smoke():
    info = get_json("/token")
    assert info["symbol"] == "BGBRD"
    assert info["decimals"] == 18

    limits = get_json("/rate_limits")
    assert "batch" in limits
    assert "owner" in limits

    chain = get_json("/blockchain")
    assert isinstance(chain, list)
    assert chain[0]["number"] == 0
