"""shared fixtures: a record/replay transport backed by JSON cassettes."""
import json
import sys
from pathlib import Path

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from npm_registry.registry.npm import NPMRegistry

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# hop-by-hop or encoding headers that no longer describe the stored body
DROPPED_HEADERS = {"content-encoding", "content-length", "transfer-encoding", "connection"}


class CassetteTransport(httpx.BaseTransport):
    """
    replay recorded exchanges from a cassette file, recording new ones on a miss.

    interactions are matched on method and full url. anything recorded during
    a session is written back to the cassette when the transport is closed.
    """

    def __init__(self, cassette: Path):
        self.cassette = cassette
        self.interactions = []
        if cassette.exists():
            self.interactions = json.loads(cassette.read_text(encoding="utf-8"))["interactions"]
        self.recorded = False
        self.live = None

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        for interaction in self.interactions:
            recorded = interaction["request"]
            if recorded["method"] == request.method and recorded["url"] == str(request.url):
                return self._replay(interaction["response"], request)

        if self.live is None:
            self.live = httpx.HTTPTransport()
        response = self.live.handle_request(request)
        response.read()
        stored = {
            "status_code": response.status_code,
            "headers": {k: v for k, v in response.headers.items() if k.lower() not in DROPPED_HEADERS},
            "body": response.content.decode("utf-8"),
        }
        self.interactions.append({
            "request": {"method": request.method, "url": str(request.url)},
            "response": stored,
        })
        self.recorded = True
        return self._replay(stored, request)

    def close(self):
        if self.recorded:
            self.cassette.parent.mkdir(parents=True, exist_ok=True)
            self.cassette.write_text(
                json.dumps({"interactions": self.interactions}, indent=2) + "\n",
                encoding="utf-8",
            )
            self.recorded = False
        if self.live is not None:
            self.live.close()
            self.live = None

    @staticmethod
    def _replay(stored: dict, request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code=stored["status_code"],
            headers=stored["headers"],
            content=stored["body"].encode("utf-8"),
            request=request,
        )


@pytest.fixture
def cassette_registry(request):
    """an NPMRegistry replaying the cassette named after the test module."""
    name = Path(request.module.__file__).stem
    registry = NPMRegistry(transport=CassetteTransport(FIXTURES_DIR / f"{name}.json"))
    yield registry
    registry.close()
