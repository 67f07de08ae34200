from pathlib import Path

import psutil

from nettraffic import glyphs
from nettraffic.data.traffic import Counters

LOOPBACK = "lo"
SYS_CLASS_NET = Path("/sys/class/net")


def _wanted(interface: str, interfaces: list[str] | None) -> bool:
    if interfaces:
        return interface in interfaces
    return interface != LOOPBACK


def get_counters(interfaces: list[str] | None = None) -> Counters:
    """
    Sum the cumulative received/transmitted bytes of the selected interfaces.
    """
    counters = Counters()
    for interface, io in psutil.net_io_counters(pernic=True).items():
        if _wanted(interface=interface, interfaces=interfaces):
            counters.received += io.bytes_recv
            counters.transmitted += io.bytes_sent

    return counters


def _interface_connected(interface: str) -> bool:
    try:
        with open(SYS_CLASS_NET / interface / "carrier", "r") as f:
            contents = f.read()
        return True if int(contents) == 1 else False
    except (OSError, ValueError):
        return False


def connectivity_available(interfaces: list[str] | None = None) -> bool:
    """
    True when at least one selected interface is up and has a link carrier.
    An unplugged port or an empty bridge stays up without a carrier.
    """
    for interface, stats in psutil.net_if_stats().items():
        if (
            _wanted(interface=interface, interfaces=interfaces)
            and stats.isup
            and _interface_connected(interface=interface)
        ):
            return True

    return False


def _interface_type(interface: str) -> str:
    if (SYS_CLASS_NET / interface / "wireless").is_dir():
        return "wireless"
    return "wired"


def get_icon(interfaces: list[str] | None, connected: bool) -> str:
    """
    Pick the tooltip icon; wireless only when every selected interface is wireless.
    """
    wireless = bool(interfaces) and all(
        _interface_type(interface=interface) == "wireless"
        for interface in interfaces or []
    )
    if wireless:
        return (
            glyphs.md_wifi_strength_4
            if connected
            else glyphs.md_wifi_strength_alert_outline
        )
    return glyphs.md_network if connected else glyphs.md_network_off
