import io

import pytest

from labnet.rolefile import random_small, read_role, toggle_role


def test_missing_file_reads_as_no_role(tmp_path):
    assert read_role(tmp_path / "missing.dat") == 2


def test_empty_file_reads_as_no_role(tmp_path):
    path = tmp_path / "maestro.dat"
    path.write_bytes(b"")
    assert read_role(path) == 2


@pytest.mark.parametrize("content, role", [(b"0", 0), (b"1\n", 1), (b"  1", 1)])
def test_read_role(tmp_path, content, role):
    path = tmp_path / "maestro.dat"
    path.write_bytes(content)
    assert read_role(path) == role


def test_toggle_round_trip(tmp_path):
    path = tmp_path / "maestro.dat"
    path.write_bytes(b"0")
    assert toggle_role(path) == 1
    assert read_role(path) == 1
    assert toggle_role(path) == 0
    assert read_role(path) == 0


def test_toggle_overwrites_in_place(tmp_path):
    path = tmp_path / "maestro.dat"
    path.write_bytes(b"1\nrest")
    toggle_role(path)
    assert path.read_bytes() == b"0\nrest"


def test_toggle_other_value_unchanged(tmp_path, capsys):
    path = tmp_path / "maestro.dat"
    path.write_bytes(b"5")
    assert toggle_role(path) is None
    assert path.read_bytes() == b"5"
    assert "no tiene nada..." in capsys.readouterr().out


def test_toggle_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        toggle_role(tmp_path / "missing.dat")


def test_random_small_zero():
    assert random_small(io.BytesIO(b"\x00\x00")) == 0


def test_random_small_range():
    for high in range(256):
        for low in (0, 1, 7, 128, 255):
            value = random_small(io.BytesIO(bytes([high, low])))
            assert 0 <= value // 2 <= 8


def test_random_small_default_source():
    assert 0 <= random_small() <= 17


def test_random_small_short_read():
    with pytest.raises(ValueError):
        random_small(io.BytesIO(b"\x01"))