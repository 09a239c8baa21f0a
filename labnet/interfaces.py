"""List network interfaces that are up and not loopback, with their MAC addresses."""

from __future__ import annotations

import argparse
import ipaddress
import re
from dataclasses import dataclass, field

import psutil

_MAC_PART = re.compile(r"^[0-9A-Fa-f]{1,2}$")


@dataclass(frozen=True)
class InterfaceInfo:
    """An active interface: its name, the addresses bound to it and its MAC."""

    name: str
    addresses: tuple[str, ...] = field(default_factory=tuple)
    mac: str | None = None


def _normalise_mac(address: str) -> str | None:
    parts = re.split(r"[:-]", address)
    if len(parts) != 6 or not all(_MAC_PART.match(part) for part in parts):
        return None
    return ":".join(f"{int(part, 16):02x}" for part in parts)


def _is_loopback_address(address: str) -> bool:
    try:
        return ipaddress.ip_address(address.split("%", 1)[0]).is_loopback
    except ValueError:
        return False


def _is_loopback(stats, addresses) -> bool:
    flags = getattr(stats, "flags", None)
    if flags:
        return "loopback" in flags.split(",")
    return any(_is_loopback_address(addr.address) for addr in addresses)


def _link_mac(addresses) -> str | None:
    for addr in addresses:
        if addr.family == psutil.AF_LINK:
            mac = _normalise_mac(addr.address)
            if mac is not None:
                return mac
    return None


def list_up_interfaces() -> list[InterfaceInfo]:
    """Return the interfaces that have an address, are up and are not loopback."""
    all_addresses = psutil.net_if_addrs()
    all_stats = psutil.net_if_stats()
    result: list[InterfaceInfo] = []
    for name, addresses in all_addresses.items():
        stats = all_stats.get(name)
        if not addresses or stats is None or not stats.isup:
            continue
        if _is_loopback(stats, addresses):
            continue
        result.append(
            InterfaceInfo(
                name=name,
                addresses=tuple(addr.address for addr in addresses),
                mac=_link_mac(addresses),
            )
        )
    return result


def mac_address(name: str) -> str | None:
    """Return the six-byte hardware address of ``name`` as ``xx:xx:xx:xx:xx:xx``.

    Returns None when the interface has no such address; raises KeyError when
    there is no interface of that name.
    """
    addresses = psutil.net_if_addrs()
    if name not in addresses:
        raise KeyError(name)
    return _link_mac(addresses[name])


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Active, non-loopback network interfaces.")
    parser.add_argument("--mac", action="store_true", help="print MAC addresses instead")
    args = parser.parse_args(argv)
    try:
        interfaces = list_up_interfaces()
    except OSError as exc:
        print(f"getifaddrs: {exc}")
        return 1
    for info in interfaces:
        if args.mac:
            if info.mac is not None:
                print(f"MAC address of {info.name}: {info.mac}")
        else:
            print(f"Name: {info.name}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())