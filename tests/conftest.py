import base64
import gzip
import io
import json
import random

import httpx
import pytest
from rich.console import Console

from java_heapdump import config
from java_heapdump.api import PlatformClient
from java_heapdump.command import HeapDumpCommand
from java_heapdump.config import Settings

API_URL = "https://api.test"
HEAP_BYTES = b"JAVA PROFILE 1.0.2\x00" + random.Random(0).randbytes(8000)


def encode_dump(data: bytes) -> str:
    return base64.b64encode(gzip.compress(data)).decode("ascii")


def dyno_list(*names: str) -> list[dict]:
    out = []
    for n in names:
        t, _, name = n.partition(".")
        out.append({"type": t, "name": name, "state": "up", "size": "gp2"})
    return out


class FakeAkkeris:
    """Serves canned responses for the two platform API calls and records requests."""

    def __init__(self, dynos=None, stdout="", stderr="", status=200, raw=None):
        self.dynos = dynos if dynos is not None else []
        self.stdout = stdout
        self.stderr = stderr
        self.status = status
        self.raw = raw
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status != 200:
            return httpx.Response(self.status, json={"message": "nope"})
        if self.raw is not None:
            return httpx.Response(200, text=self.raw)
        if request.method == "GET" and request.url.path.endswith("/dynos"):
            return httpx.Response(200, json=self.dynos)
        if request.method == "POST" and request.url.path.endswith("/actions/attach"):
            return httpx.Response(200, json={"stdout": self.stdout, "stderr": self.stderr})
        return httpx.Response(404, json={"message": "not found"})

    def attach_bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests if r.method == "POST"]


class FakeSelector:
    def __init__(self, choice=None):
        self.choice = choice
        self.calls = []

    async def __call__(self, candidates, seed=""):
        self.calls.append((list(candidates), seed))
        return self.choice if self.choice is not None else candidates[0]


@pytest.fixture
def settings():
    return Settings(api_url=API_URL, token="secret-token")


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=1000)


@pytest.fixture
def make_command(settings, console, tmp_path):
    def _make(fake: FakeAkkeris, selector=None, now=None, cwd=None):
        client = httpx.AsyncClient(transport=httpx.MockTransport(fake))
        kwargs = {}
        if now is not None:
            kwargs["now"] = now
        return HeapDumpCommand(
            PlatformClient(client, settings),
            settings,
            selector=selector or FakeSelector(),
            console=console,
            cwd=cwd or (lambda: str(tmp_path)),
            **kwargs,
        )
    return _make


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ("AKKERIS_API_HOST", "AKKERIS_API_TOKEN", "JAVA_HEAPDUMP_CONFIG", "JAVA_HEAPDUMP_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("NETRC", str(tmp_path / "missing-netrc"))
    monkeypatch.setattr(config, "DEFAULT_CONFIG_PATH", str(tmp_path / "missing-config.yaml"))
