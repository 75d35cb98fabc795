from sqlalchemy import String
from sqlalchemy.types import TypeDecorator


class Uint256(TypeDecorator):
    """
    Unsigned integer of arbitrary size stored as a decimal string.

    Fixed-point prices carry 36+ decimals, far beyond BIGINT and beyond what a
    float column can hold without losing base units.
    """

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        value = int(value)
        if value < 0:
            raise ValueError(f"Uint256 cannot store negative value {value}")
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return int(value)
