import pytest

from liquid.core.exceptions import ValidationError
from liquid.utils.bytes_bitwise import bitwise_and, masked_equal, to_bytes, to_hex


def test_bitwise_and():
    assert bitwise_and(b"\xff\x0f", b"\x3c\x3c") == b"\x3c\x0c"


def test_bitwise_and_length_mismatch():
    with pytest.raises(ValidationError, match="BYTES_BITWISE: length mismatch"):
        bitwise_and(b"\xff", b"\xff\xff")


def test_masked_equal_ignores_bits_outside_mask():
    mask = to_bytes("0xffff0000")
    restrict = to_bytes("0x12340000")
    assert masked_equal(to_bytes("0x1234abcd"), mask, restrict)
    assert masked_equal(to_bytes("0x12340000"), mask, restrict)
    assert not masked_equal(to_bytes("0x1235abcd"), mask, restrict)


def test_masked_equal_single_bit():
    assert masked_equal(b"\x81", b"\x01", b"\x01")
    assert not masked_equal(b"\x80", b"\x01", b"\x01")


def test_to_bytes_and_hex():
    assert to_bytes("0x095ea7b3") == b"\x09\x5e\xa7\xb3"
    assert to_hex(b"\x09\x5e\xa7\xb3") == "0x095ea7b3"
    with pytest.raises(ValidationError):
        to_bytes("0xzz")
