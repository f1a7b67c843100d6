"""Pytest fixtures: a fake requests session and isolated configuration."""

import pytest

from zabbix_rpc import ZabbixClient
from zabbix_rpc.config import reset_config

URL = "https://zabbix.example.com/api_jsonrpc.php"

NO_BODY = object()

_ENV_VARS = (
    "ZABBIX_URL",
    "ZABBIX_TOKEN",
    "ZABBIX_USER",
    "ZABBIX_PASSWORD",
    "REQUEST_TIMEOUT",
    "DEBUG",
    "VERIFY_SSL",
)


class FakeResponse:
    def __init__(self, status_code=200, body=NO_BODY):
        self.status_code = status_code
        self._body = body
        self.text = "" if body is NO_BODY else str(body)

    def json(self):
        if self._body is NO_BODY:
            raise ValueError("No JSON object could be decoded")
        return self._body


class FakeSession:
    """Records every POST and replays queued responses or exceptions."""

    def __init__(self):
        self.posts = []
        self.closed = False
        self._queue = []

    def reply(self, status_code=200, body=NO_BODY):
        self._queue.append(FakeResponse(status_code, body))
        return self

    def result(self, value, id=1):
        return self.reply(200, {"jsonrpc": "2.0", "id": id, "result": value})

    def error(self, code, message, data=None):
        return self.reply(200, {
            "jsonrpc": "2.0",
            "id": 1,
            "error": {"code": code, "message": message, "data": data},
        })

    def fail(self, exc):
        self._queue.append(exc)
        return self

    def close(self):
        self.closed = True

    def post(self, url, json=None, headers=None, timeout=None, verify=None):
        self.posts.append({
            "url": url,
            "json": json,
            "headers": headers,
            "timeout": timeout,
            "verify": verify,
        })
        if not self._queue:
            # Default answer keeps tests that only inspect requests short
            return FakeResponse(200, {"jsonrpc": "2.0", "id": json["id"], "result": True})
        item = self._queue.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    @property
    def bodies(self):
        return [p["json"] for p in self.posts]


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session):
    return ZabbixClient(URL, "Admin", "zabbix", session=session)
