"""Command line entry points: ``hugh-discover`` and ``hugh-lights``."""

from __future__ import annotations

import argparse
import ipaddress
import logging
import sys
from typing import Callable, Optional, Sequence

from hugh.api.http_client import HttpClient
from hugh.config import ClientConfig
from hugh.exceptions import HughError
from hugh.models.bridge import Bridge
from hugh.models.light import Light
from hugh.repo.light_repository import LightRepository
from hugh.services.discovery_service import BridgeDiscoverer
from hugh.services.pairing_service import BridgePairer
from hugh.services.zeroconf_browser import ZeroconfBrowser

_LOGGER = logging.getLogger("hugh.cli")


def positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a number") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"{value!r} must be greater than 0")
    return number


def _parse_args(parser: argparse.ArgumentParser, argv: Optional[Sequence[str]]) -> Optional[argparse.Namespace]:
    try:
        return parser.parse_args(argv)
    except argparse.ArgumentError as e:
        _LOGGER.error("%s", e)
        return None


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def choose_bridge(bridges: list[Bridge], ask: Callable[[str], str] = input) -> Bridge:
    if not bridges:
        raise HughError("No Hue bridges found!")
    if len(bridges) == 1:
        return bridges[0]

    print("More than one Hue bridge discovered. Choose one of the following:")
    for i, candidate in enumerate(bridges):
        print(f"[{i}] {candidate.ip} (ID: `{candidate.id}` Model: `{candidate.model}`)")

    answer = ask("Enter selection number: ")
    try:
        selection = int(answer)
    except ValueError:
        raise HughError(f"Invalid selection {answer!r}") from None
    if not 0 <= selection < len(bridges):
        raise HughError(f"Invalid selection `{selection}` (must be between 0 and {len(bridges) - 1})")
    return bridges[selection]


def discover_main(argv: Optional[Sequence[str]] = None, browser=None, ask: Callable[[str], str] = input) -> int:
    parser = argparse.ArgumentParser(prog="hugh-discover", description="Find a Hue bridge and pair with it.", exit_on_error=False)
    parser.add_argument("--timeout", type=positive_float, default=None, help="Seconds to wait for bridges and for web requests")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = _parse_args(parser, argv)
    if args is None:
        return 1
    _setup_logging(args.verbose)

    try:
        config = ClientConfig.from_env(timeout=args.timeout, discovery_timeout=args.timeout)
        discoverer = BridgeDiscoverer(browser or ZeroconfBrowser(), config)
        bridge = choose_bridge(discoverer.discover(), ask)

        print("Attempting to associate with bridge. Please press the button on your bridge.")
        ask("Press the Enter key when ready...")
        username = BridgePairer(HttpClient(config.timeout), config).connect(bridge.ip)
    except HughError as e:
        _LOGGER.error("%s", e)
        return 1

    print(username)
    return 0


def describe_light(light: Light) -> str:
    status = "On" if light.state.on else "Off"
    return (
        f"[{light.id}] {light.name}: {status} "
        f"brightness={light.state.brightness} hue={light.state.hue} saturation={light.state.saturation}"
    )


def lights_main(argv: Optional[Sequence[str]] = None, client: Optional[HttpClient] = None) -> int:
    parser = argparse.ArgumentParser(prog="hugh-lights", description="List the lights of a paired Hue bridge.", exit_on_error=False)
    parser.add_argument("--timeout", type=positive_float, default=None, help="Timeout in seconds for web requests")
    parser.add_argument("--address", default=None, help="Address of the bridge (HUE_BRIDGE_IP)")
    parser.add_argument("--username", default=None, help="Username from hugh-discover (HUE_APP_KEY)")
    parser.add_argument("--toggle", metavar="ID", default=None, help="Toggle the light with this id")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = _parse_args(parser, argv)
    if args is None:
        return 1
    _setup_logging(args.verbose)

    try:
        config = ClientConfig.from_env(timeout=args.timeout, bridge_ip=args.address, app_key=args.username)
    except HughError as e:
        _LOGGER.error("%s", e)
        return 1
    if not config.app_key:
        _LOGGER.error("A username must be supplied with --username or HUE_APP_KEY.")
        return 1
    if not config.bridge_ip:
        _LOGGER.error("A bridge address must be supplied with --address or HUE_BRIDGE_IP.")
        return 1
    try:
        ipaddress.ip_address(config.bridge_ip)
    except ValueError:
        _LOGGER.error("%r is not a valid IP address.", config.bridge_ip)
        return 1

    repo = LightRepository(client or HttpClient(config.timeout))
    try:
        lights = repo.fetch_all(config.bridge_ip, config.app_key)
        if args.toggle is not None:
            light = next((l for l in lights if l.id == args.toggle), None)
            if light is None:
                raise HughError(f"No light with id {args.toggle!r}")
            repo.toggle(light)
    except HughError as e:
        _LOGGER.error("%s", e)
        return 1

    for light in lights:
        print(describe_light(light))
    return 0


def discover() -> None:
    sys.exit(discover_main())


def lights() -> None:
    sys.exit(lights_main())
