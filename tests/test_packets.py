import pytest

from labnet.packets import describe_frame, format_mac

DST = bytes([0x02, 0, 0, 0, 0, 0x01])
SRC = bytes([0x02, 0, 0, 0, 0, 0x02])
IP_SRC = bytes([192, 0, 2, 1])
IP_DST = bytes([192, 0, 2, 2])


def ipv4_frame(protocol, payload, version_ihl=0x45):
    ip_header = bytes([version_ihl, 0, 0, 0, 0, 0, 0, 0, 64, protocol, 0, 0]) + IP_SRC + IP_DST
    return DST + SRC + bytes([0x08, 0x00]) + ip_header + payload


def arp_frame():
    body = (
        bytes([0, 1, 8, 0, 6, 4, 0, 1])
        + SRC + IP_SRC
        + bytes(6) + IP_DST
    )
    return DST + SRC + bytes([0x08, 0x06]) + body


def test_format_mac_uppercase_hex():
    assert format_mac(bytes([0x02, 0xAB, 0x0C, 0, 0xFF, 0x01])) == "02:AB:0C:00:FF:01"


def test_format_mac_rejects_wrong_length():
    with pytest.raises(ValueError):
        format_mac(b"\x01\x02\x03")


def test_icmp_echo_request():
    frame = ipv4_frame(1, bytes([8, 0, 0, 0, 0, 1, 0, 1]))
    text = describe_frame(frame)
    assert text.startswith(f"Rx {len(frame)} bytes de[{format_mac(SRC)}] a[{format_mac(DST)}] TypeMSG[8] ")
    assert text.endswith("Protocol ICMP Type[PING]\n")


def test_icmp_echo_reply_counts_data():
    frame = ipv4_frame(1, bytes([0, 0, 0, 0, 0, 1, 0, 1]))
    text = describe_frame(frame)
    assert text.endswith("Protocol ICMP Type[Respuesta PING] 8 data\n")


def test_icmp_redirect_and_unknown():
    assert describe_frame(ipv4_frame(1, bytes([5, 0, 0, 0]))) == "Protocol ICMP Type[RIP]\n"
    assert describe_frame(ipv4_frame(1, bytes([3, 0, 0, 0]))) == "Protocol ICMP unknown Type[3]\n"


def test_tcp_addresses():
    text = describe_frame(ipv4_frame(6, bytes(20)))
    assert "TypeMSG[8] Protocolo TPC " in text
    assert text.endswith("IP(192.0.2.1) a IP(192.0.2.2)\n")


def test_udp_ports():
    frame = ipv4_frame(17, bytes([0x01, 0x01, 0x02, 0x02, 0, 8, 0, 0]))
    text = describe_frame(frame)
    assert "Protocolo UDP PortSrc[257] PortDst[514] " in text
    assert text.endswith("IP(192.0.2.1) a IP(192.0.2.2)\n")


def test_other_ip_protocol_has_no_newline():
    assert describe_frame(ipv4_frame(2, bytes(8))) == "Protocolo: 2 "


def test_non_ipv4_version_prints_nothing():
    assert describe_frame(ipv4_frame(1, bytes(8), version_ihl=0x65)) == ""


def test_arp_addresses():
    text = describe_frame(arp_frame())
    assert "TypeMSG[1544] Protocolo ARP " in text
    assert text.endswith("Src: 192.0.2.1 Dst: 192.0.2.2 \n")


def test_ipv6_and_alternate_arp():
    assert describe_frame(DST + SRC + bytes([0x86, 0xDD]) + bytes(40)) == "Protocolo IPv6\n"
    assert describe_frame(DST + SRC + bytes([0x60, 0x80]) + bytes(28)) == "Protocolo ARP\n"


def test_unknown_type():
    assert describe_frame(DST + SRC + bytes([0x88, 0xB5]) + bytes(10)).endswith("Desconocido...\n")


def test_short_frames_raise():
    with pytest.raises(ValueError):
        describe_frame(DST + SRC)
    with pytest.raises(ValueError):
        describe_frame(DST + SRC + bytes([0x08, 0x00]) + bytes([0x45, 0, 0]))