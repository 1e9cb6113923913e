"""Shared fixtures for hugh tests."""

from __future__ import annotations

import copy
import queue
import threading
from unittest.mock import MagicMock

import pytest
import requests

from hugh.api.http_client import HttpClient
from hugh.services.discovery_service import ServiceEntry

SAMPLE_LIGHTS = {
    "1": {
        "state": {
            "on": False,
            "bri": 1,
            "hue": 33761,
            "sat": 254,
            "effect": "none",
            "xy": [0.3171, 0.3366],
            "ct": 159,
            "alert": "none",
            "colormode": "xy",
            "mode": "homeautomation",
            "reachable": True,
        },
        "swupdate": {"state": "noupdates", "lastinstall": "2018-01-02T19:24:20"},
        "type": "Extended color light",
        "name": "Hue color lamp 7",
        "modelid": "LCT007",
        "manufacturername": "Philips",
        "productname": "Hue color lamp",
        "capabilities": {
            "certified": True,
            "control": {
                "mindimlevel": 5000,
                "maxlumen": 600,
                "colorgamuttype": "B",
                "colorgamut": [[0.675, 0.322], [0.409, 0.518], [0.167, 0.04]],
                "ct": {"min": 153, "max": 500},
            },
            "streaming": {"renderer": True, "proxy": False},
        },
        "config": {
            "archetype": "sultanbulb",
            "function": "mixed",
            "direction": "omnidirectional",
        },
        "uniqueid": "00:17:88:01:00:bd:c7:b9-0b",
        "swversion": "5.105.0.21169",
    }
}


def _mock_response(body=None, status_code: int = 200, json_error: bool = False) -> MagicMock:
    """Build a mock requests.Response."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    if json_error:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def sample_lights() -> dict:
    """A fresh copy of a real ``GET /lights`` body with one colour lamp."""
    return copy.deepcopy(SAMPLE_LIGHTS)


@pytest.fixture
def make_response():
    """Factory for mock requests.Response objects."""
    return _mock_response


@pytest.fixture
def session() -> MagicMock:
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session: MagicMock) -> HttpClient:
    return HttpClient(timeout=3, session=session)


class FakeBrowser:
    """MulticastBrowser double that publishes canned entries or fails."""

    def __init__(self, entries: list[ServiceEntry] | None = None, error: Exception | None = None):
        self.entries = entries or []
        self.error = error
        self.calls: list[tuple[str, str]] = []
        self.done: threading.Event | None = None

    def browse(self, service: str, domain: str, entries: queue.Queue, done: threading.Event) -> None:
        self.calls.append((service, domain))
        self.done = done
        if self.error is not None:
            raise self.error
        for entry in self.entries:
            entries.put(entry)


HUE_ENV_KEYS = (
    "HUE_TIMEOUT",
    "HUE_DISCOVERY_TIMEOUT",
    "HUE_APP_NAME",
    "HUE_DEVICE_NAME",
    "HUE_BRIDGE_IP",
    "HUE_APP_KEY",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove HUE_* variables and undo anything load_dotenv sets during the test."""
    for key in HUE_ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


@pytest.fixture
def fake_browser():
    """Factory for FakeBrowser instances."""
    return FakeBrowser
