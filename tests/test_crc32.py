from labnet.crc32 import DEFAULT_TEXT, crc32, hex_bytes, main


def test_check_value():
    assert crc32(b"123456789") == 0xCBF43926


def test_empty_input():
    assert crc32(b"") == 0


def test_result_is_unsigned_32_bit():
    for data in (b"\xff" * 10, b"abc", DEFAULT_TEXT.encode()):
        assert 0 <= crc32(data) <= 0xFFFFFFFF


def test_sensitive_to_single_bit():
    assert crc32(b"Mensaje de Prueba") != crc32(b"Mensaje de Pruebb")


def test_hex_bytes_format():
    assert hex_bytes(b"\x00\xff\x1a") == "3 bytes : 00 FF 1A "


def test_hex_bytes_empty():
    assert hex_bytes(b"") == "0 bytes : "


def test_main_default(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out.strip()
    expected = crc32(DEFAULT_TEXT.encode())
    assert out == f'Calculador crc32 para texto "{DEFAULT_TEXT}": {expected}'