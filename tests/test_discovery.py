"""Tests for mDNS bridge discovery."""

from __future__ import annotations

import time
from ipaddress import IPv4Address

import pytest

from hugh.config import ClientConfig
from hugh.exceptions import DiscoveryBrowseFailure
from hugh.models.bridge import Bridge
from hugh.services.discovery_service import (
    HUE_DOMAIN,
    HUE_SERVICE,
    BridgeDiscoverer,
    ServiceEntry,
    bridge_from_entry,
    parse_service_text,
)


def make_discoverer(browser, timeout: float = 0.2) -> BridgeDiscoverer:
    return BridgeDiscoverer(browser, ClientConfig(discovery_timeout=timeout))


class TestParseServiceText:
    def test_one_record_per_string(self):
        assert parse_service_text(["bridgeid=001788fffe", "modelid=BSB002"]) == {
            "bridgeid": "001788fffe",
            "modelid": "BSB002",
        }

    def test_bracketed_blob(self):
        assert parse_service_text(["[bridgeid=test modelid=foo]"]) == {
            "bridgeid": "test",
            "modelid": "foo",
        }

    def test_value_containing_equals(self):
        assert parse_service_text(["key=a=b"]) == {"key": "a=b"}

    def test_record_without_value(self):
        assert parse_service_text(["flag"]) == {"flag": ""}

    def test_empty(self):
        assert parse_service_text([]) == {}
        assert parse_service_text(["[]"]) == {}


class TestBridgeFromEntry:
    def test_first_address_wins(self):
        entry = ServiceEntry(
            text=["bridgeid=abc", "modelid=BSB002"],
            addr_ipv4=["192.168.1.66", "10.0.0.2"],
        )

        assert bridge_from_entry(entry) == Bridge(id="abc", model="BSB002", ip="192.168.1.66")

    def test_no_address_is_skipped(self, caplog):
        entry = ServiceEntry(name="Philips Hue - 1A2B3C", text=["bridgeid=abc"])

        assert bridge_from_entry(entry) is None
        assert "no IPv4 address" in caplog.text

    def test_invalid_address_is_skipped(self):
        entry = ServiceEntry(text=["bridgeid=abc"], addr_ipv4=["not-an-ip"])

        assert bridge_from_entry(entry) is None


class TestDiscover:
    def test_bridges_are_found_in_order(self, fake_browser):
        browser = fake_browser(
            [
                ServiceEntry(text=["[bridgeid=test modelid=foo]"], addr_ipv4=["127.0.0.1"]),
                ServiceEntry(text=["bridgeid=foobar", "modelid=bar"], addr_ipv4=["192.168.1.66"]),
            ]
        )

        bridges = make_discoverer(browser).discover()

        assert bridges == [
            Bridge(id="test", model="foo", ip=IPv4Address("127.0.0.1")),
            Bridge(id="foobar", model="bar", ip=IPv4Address("192.168.1.66")),
        ]
        assert browser.calls == [(HUE_SERVICE, HUE_DOMAIN)]

    def test_no_bridge_is_found(self, fake_browser):
        assert make_discoverer(fake_browser()).discover() == []

    def test_duplicates_are_kept(self, fake_browser):
        entry = ServiceEntry(text=["bridgeid=abc", "modelid=BSB002"], addr_ipv4=["10.0.0.2"])

        bridges = make_discoverer(fake_browser([entry, entry])).discover()

        assert len(bridges) == 2
        assert bridges[0] == bridges[1]

    def test_many_entries(self, fake_browser):
        entries = [
            ServiceEntry(text=[f"bridgeid=b{i}", "modelid=BSB002"], addr_ipv4=[f"10.0.0.{i}"])
            for i in range(1, 51)
        ]

        bridges = make_discoverer(fake_browser(entries)).discover()

        assert [b.id for b in bridges] == [f"b{i}" for i in range(1, 51)]

    def test_browse_failure(self, fake_browser):
        cause = OSError("no multicast interface")
        browser = fake_browser(error=cause)

        with pytest.raises(DiscoveryBrowseFailure) as exc_info:
            make_discoverer(browser).discover()

        assert exc_info.value.__cause__ is cause
        assert browser.done.is_set()

    def test_session_is_stopped_after_deadline(self, fake_browser):
        browser = fake_browser()

        make_discoverer(browser).discover()

        assert browser.done.is_set()

    def test_waits_for_the_deadline(self, fake_browser):
        start = time.monotonic()
        bridges = make_discoverer(fake_browser()).discover(timeout_seconds=1)
        elapsed = time.monotonic() - start

        assert bridges == []
        assert 0.95 <= elapsed < 2.0

    def test_timeout_defaults_to_config(self, fake_browser):
        start = time.monotonic()
        make_discoverer(fake_browser(), timeout=0.3).discover()

        assert time.monotonic() - start >= 0.25

    def test_found_bridges_are_logged(self, caplog, fake_browser):
        caplog.set_level("INFO", logger="hugh")
        browser = fake_browser([ServiceEntry(text=["bridgeid=abc", "modelid=BSB002"], addr_ipv4=["10.0.0.2"])])

        make_discoverer(browser).discover()

        assert "Found Hue bridge at 10.0.0.2 (ID: `abc` Model: `BSB002`)" in caplog.text
