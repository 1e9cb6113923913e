"""Bridge discovery over multicast DNS.

A browse session publishes :class:`ServiceEntry` objects onto a queue from
whatever thread the mDNS library calls back on. One listener thread owns
the result list; :meth:`BridgeDiscoverer.discover` waits out the deadline,
stops the session and joins the listener before reading that list.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional, Protocol

from pydantic import ValidationError

from hugh.config import ClientConfig
from hugh.exceptions import DiscoveryBrowseFailure
from hugh.models.bridge import Bridge

_LOGGER = logging.getLogger(__name__)

HUE_SERVICE = "_hue._tcp"
HUE_DOMAIN = "local"

# Marks the end of the entry stream for the listener
_DONE = object()


@dataclass
class ServiceEntry:
    """One resolved mDNS service announcement."""

    name: str = ""
    text: list[str] = field(default_factory=list)
    addr_ipv4: list[str] = field(default_factory=list)


class MulticastBrowser(Protocol):
    def browse(
        self,
        service: str,
        domain: str,
        entries: queue.Queue,
        done: threading.Event,
    ) -> None:
        """Start browsing for ``service`` in ``domain``.

        Must return once the session is running, keep putting
        :class:`ServiceEntry` objects on ``entries`` until ``done`` is set,
        and raise if the session cannot be started.
        """


def parse_service_text(texts: Iterable[str]) -> dict[str, str]:
    """Turn TXT records into a ``key -> value`` mapping.

    Hue bridges have been seen sending all pairs as one bracketed,
    space-separated string (``"[bridgeid=... modelid=...]"``) as well as
    one ``key=value`` per record; both are accepted.
    """
    data: dict[str, str] = {}
    for text in texts:
        text = text.strip()
        if text.startswith("[") and text.endswith("]"):
            records = text[1:-1].split()
        else:
            records = [text]

        for record in records:
            if not record:
                continue
            key, _, value = record.partition("=")
            data[key] = value
    return data


def bridge_from_entry(entry: ServiceEntry) -> Optional[Bridge]:
    if not entry.addr_ipv4:
        _LOGGER.warning("Ignoring %r: no IPv4 address announced", entry.name)
        return None

    text = parse_service_text(entry.text)
    # Multi-homed bridges announce several addresses; the first one wins
    try:
        return Bridge(
            id=text.get("bridgeid", ""),
            model=text.get("modelid", ""),
            ip=entry.addr_ipv4[0],
        )
    except ValidationError:
        _LOGGER.warning("Ignoring %r: %r is not an IPv4 address", entry.name, entry.addr_ipv4[0])
        return None


class BridgeDiscoverer:
    def __init__(self, browser: MulticastBrowser, config: Optional[ClientConfig] = None):
        self.browser = browser
        self.config = config or ClientConfig()

    def discover(self, timeout_seconds: Optional[float] = None) -> list[Bridge]:
        """Browse for bridges until ``timeout_seconds`` elapse.

        Returns every bridge announced before the deadline, in arrival
        order. Repeated announcements of one bridge are all kept. Finding
        nothing is not an error.

        Raises:
            DiscoveryBrowseFailure: the browse session could not be started
        """
        timeout = self.config.discovery_timeout if timeout_seconds is None else timeout_seconds
        _LOGGER.info("Scanning network for Hue bridges...")

        entries: queue.Queue = queue.Queue()
        done = threading.Event()
        bridges: list[Bridge] = []

        listener = threading.Thread(
            target=self._listen,
            args=(entries, bridges),
            name="hugh-discovery",
            daemon=True,
        )
        listener.start()

        try:
            self.browser.browse(HUE_SERVICE, HUE_DOMAIN, entries, done)
        except Exception as e:
            self._stop(entries, done, listener)
            raise DiscoveryBrowseFailure(f"Could not browse for {HUE_SERVICE}.{HUE_DOMAIN}: {e}") from e

        done.wait(timeout)
        self._stop(entries, done, listener)

        return bridges

    @staticmethod
    def _stop(entries: queue.Queue, done: threading.Event, listener: threading.Thread) -> None:
        done.set()
        entries.put(_DONE)
        listener.join()

    @staticmethod
    def _listen(entries: queue.Queue, bridges: list[Bridge]) -> None:
        while True:
            entry = entries.get()
            if entry is _DONE:
                break

            bridge = bridge_from_entry(entry)
            if bridge is None:
                continue
            bridges.append(bridge)
            _LOGGER.info("Found Hue bridge at %s (ID: `%s` Model: `%s`)", bridge.ip, bridge.id, bridge.model)
