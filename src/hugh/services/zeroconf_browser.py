import logging
import queue
import threading
from typing import Callable

from zeroconf import IPVersion, ServiceBrowser, ServiceStateChange, Zeroconf

from hugh.services.discovery_service import ServiceEntry

_LOGGER = logging.getLogger(__name__)


def _decode(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", "replace")
    return str(value)


class ZeroconfBrowser:
    """:class:`~hugh.services.discovery_service.MulticastBrowser` backed by python-zeroconf."""

    def __init__(self, zeroconf_factory: Callable[[], Zeroconf] = Zeroconf, resolve_timeout_ms: int = 3000):
        self.zeroconf_factory = zeroconf_factory
        self.resolve_timeout_ms = resolve_timeout_ms

    def browse(self, service: str, domain: str, entries: queue.Queue, done: threading.Event) -> None:
        service_type = f"{service}.{domain}."

        def on_service_state_change(zeroconf: Zeroconf, service_type: str, name: str, state_change: ServiceStateChange):
            if state_change is not ServiceStateChange.Added or done.is_set():
                return
            info = zeroconf.get_service_info(service_type, name, timeout=self.resolve_timeout_ms)
            if info is None:
                _LOGGER.debug("Could not resolve %s", name)
                return

            text = [f"{_decode(k)}={_decode(v)}" for k, v in (info.properties or {}).items()]
            entries.put(
                ServiceEntry(
                    name=name,
                    text=text,
                    addr_ipv4=info.parsed_addresses(IPVersion.V4Only),
                )
            )

        zc = self.zeroconf_factory()
        try:
            browser = ServiceBrowser(zc, service_type, handlers=[on_service_state_change])
        except Exception:
            zc.close()
            raise

        threading.Thread(
            target=self._close_when_done,
            args=(zc, browser, done),
            name="hugh-zeroconf",
            daemon=True,
        ).start()

    @staticmethod
    def _close_when_done(zc: Zeroconf, browser: ServiceBrowser, done: threading.Event) -> None:
        done.wait()
        browser.cancel()
        zc.close()
