"""Decode captured Ethernet frames into one-line summaries."""

from __future__ import annotations

# The ether type and the UDP ports are read in little-endian order, so the
# values below are the wire types with their two bytes swapped.
_ORDER = "little"

ETHERTYPE_IPV4 = 8
ETHERTYPE_ARP = 1544
ETHERTYPE_IPV6 = 56710
ETHERTYPE_ARP_ALT = 0x8060

PROTO_ICMP = 1
PROTO_TCP = 6
PROTO_UDP = 17

ICMP_ECHO_REPLY = 0
ICMP_ECHO_REQUEST = 8
ICMP_REDIRECT = 5

ETHERNET_HEADER_LEN = 14


def _slice(frame: bytes, start: int, length: int) -> bytes:
    if len(frame) < start + length:
        raise ValueError(f"frame of {len(frame)} bytes is too short")
    return bytes(frame[start:start + length])


def _byte(frame: bytes, index: int) -> int:
    return _slice(frame, index, 1)[0]


def _ipv4(frame: bytes, start: int) -> str:
    return ".".join(str(byte) for byte in _slice(frame, start, 4))


def format_mac(raw: bytes) -> str:
    """Render six bytes as upper-case hex pairs joined by colons."""
    if len(raw) != 6:
        raise ValueError("a MAC address has exactly 6 bytes")
    return ":".join(f"{byte:02X}" for byte in raw)


def describe_frame(frame: bytes) -> str:
    """Return the text printed for one captured frame.

    The text may be empty (an IPv4 frame whose version is not 4) and does not
    always end in a newline. Raises ValueError when the frame is too short for
    the fields it has to read.
    """
    length = len(frame)
    destination = format_mac(_slice(frame, 0, 6))
    source = format_mac(_slice(frame, 6, 6))
    ether_type = int.from_bytes(_slice(frame, 12, 2), _ORDER)
    header = f"Rx {length} bytes de[{source}] a[{destination}] TypeMSG[{ether_type}] "
    pos = ETHERNET_HEADER_LEN

    if ether_type == ETHERTYPE_IPV4:
        first = _byte(frame, pos)
        if first >> 4 != 4:
            return ""
        header_len = (first & 0x0F) * 4
        protocol = _byte(frame, pos + 9)
        if protocol == PROTO_ICMP:
            payload = pos + header_len
            icmp_type = _byte(frame, payload)
            if icmp_type == ICMP_ECHO_REPLY:
                return header + f"Protocol ICMP Type[Respuesta PING] {length - payload} data\n"
            if icmp_type == ICMP_ECHO_REQUEST:
                return header + "Protocol ICMP Type[PING]\n"
            if icmp_type == ICMP_REDIRECT:
                return "Protocol ICMP Type[RIP]\n"
            return f"Protocol ICMP unknown Type[{icmp_type}]\n"
        if protocol == PROTO_TCP:
            return (
                header
                + "Protocolo TPC "
                + f"IP({_ipv4(frame, 26)}) a IP({_ipv4(frame, 30)})\n"
            )
        if protocol == PROTO_UDP:
            ports = pos + header_len
            src_port = int.from_bytes(_slice(frame, ports, 2), _ORDER)
            dst_port = int.from_bytes(_slice(frame, ports + 2, 2), _ORDER)
            return (
                header
                + f"Protocolo UDP PortSrc[{src_port}] PortDst[{dst_port}] "
                + f"IP({_ipv4(frame, 26)}) a IP({_ipv4(frame, 30)})\n"
            )
        return f"Protocolo: {protocol} "

    if ether_type == ETHERTYPE_ARP:
        return (
            header
            + "Protocolo ARP "
            + f"Src: {_ipv4(frame, 28)} Dst: {_ipv4(frame, 38)} \n"
        )
    if ether_type == ETHERTYPE_IPV6:
        return "Protocolo IPv6\n"
    if ether_type == ETHERTYPE_ARP_ALT:
        return "Protocolo ARP\n"
    return f"Type[{ether_type}] Desconocido...\n"