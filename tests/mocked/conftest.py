"""Shared fixtures for mocked tests -- fake xkcd server behind requests.Session."""
import pytest
import requests
from unittest.mock import MagicMock, patch

from tests.factories.comic_factories import make_comic_dict

BASE_URL = "https://xkcd.test"


# ---------------------------------------------------------------------------
# Mock responses
# ---------------------------------------------------------------------------

def make_json_response(data, status_code=200):
    """Build a mock Response whose .json() returns ``data``."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = data
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    else:
        resp.raise_for_status = MagicMock()
    return resp


def make_bytes_response(content=b"\x89PNG image", status_code=200):
    resp = MagicMock()
    resp.status_code = status_code
    resp.content = content
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    else:
        resp.raise_for_status = MagicMock()
    return resp


class FakeXkcd:
    """
    Routes session.get(url) to canned responses.

    ``comics`` maps comic number -> info.0.json dict; the highest number is
    served as the latest comic. URLs listed in ``broken`` answer 500, and a
    number in ``broken_comics`` fails its metadata request.
    """

    def __init__(self, count=3, broken=(), broken_comics=()):
        self.comics = {n: make_comic_dict(n) for n in range(1, count + 1) if n != 404}
        self.latest = count
        self.broken = set(broken)
        self.broken_comics = set(broken_comics)
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append(url)
        if url in self.broken:
            return make_bytes_response(status_code=500)
        if url == f"{BASE_URL}/info.0.json":
            return make_json_response(make_comic_dict(self.latest))
        if url.startswith(f"{BASE_URL}/") and url.endswith("/info.0.json"):
            n = int(url[len(BASE_URL) + 1:-len("/info.0.json")])
            if n in self.broken_comics:
                raise requests.ConnectionError(f"connection refused for #{n}")
            if n not in self.comics:
                return make_json_response({}, status_code=404)
            return make_json_response(self.comics[n])
        if url.startswith("https://imgs.xkcd.com/"):
            return make_bytes_response(f"image:{url}".encode())
        return make_bytes_response(status_code=404)

    def comic_calls(self):
        return [u for u in self.calls if u.endswith("/info.0.json") and u != f"{BASE_URL}/info.0.json"]

    def image_calls(self):
        return [u for u in self.calls if u.startswith("https://imgs.xkcd.com/")]


@pytest.fixture
def fake_xkcd():
    return FakeXkcd()


@pytest.fixture
def make_client():
    """
    Factory building an XkcdClient whose session is routed to a FakeXkcd.

    Usage:
        client = make_client(fake)
    """
    def _make_client(fake=None):
        with patch("models.xkcd.requests.Session") as mock_session_cls:
            mock_session = MagicMock()
            mock_session_cls.return_value = mock_session
            from models.xkcd import XkcdClient
            client = XkcdClient(BASE_URL, timeout=5)
        if fake is not None:
            mock_session.get.side_effect = fake.get
        return client

    return _make_client
