from hexbytes import HexBytes

from liquid.core.exceptions import ValidationError


def to_bytes(data) -> HexBytes:
    try:
        return HexBytes(data)
    except (TypeError, ValueError):
        raise ValidationError(f"invalid hex data {data!r}")


def to_hex(data: bytes) -> str:
    return "0x" + bytes(data).hex()


def bitwise_and(a: bytes, b: bytes) -> bytes:
    if len(a) != len(b):
        raise ValidationError("BYTES_BITWISE: length mismatch")
    return bytes(x & y for x, y in zip(a, b))


def masked_equal(data: bytes, mask: bytes, restrict: bytes) -> bool:
    """
    True when ``data`` agrees with ``restrict`` on every bit set in ``mask``.
    """
    return bitwise_and(data, mask) == bitwise_and(restrict, mask)
