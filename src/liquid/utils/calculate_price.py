"""
Fixed-point arithmetic behind the oracle conversions and the cashier fees.

Prices are share base units per asset base unit, scaled by 1e36. View
conversions truncate; every fee rounds up so value never leaks out of the
protocol.
"""

from typing import NamedTuple

from liquid.core.constants import (
    PRICE_PRECISION,
    PRICE_PRECISION_SQUARED,
    RATE_DENOMINATOR,
    SECONDS_PER_YEAR,
)


class Position(NamedTuple):
    shares: int
    timestamp: int
    standard_price: int


class Fees(NamedTuple):
    management: int
    performance: int
    exit: int

    @property
    def total(self) -> int:
        return self.management + self.performance + self.exit


def mul_div(a: int, b: int, denominator: int, round_up: bool = False) -> int:
    if denominator == 0:
        raise ZeroDivisionError("mul_div by zero")
    if round_up:
        return -((-a * b) // denominator)
    return (a * b) // denominator


def asset_to_share(amount: int, price: int) -> int:
    return mul_div(amount, price, PRICE_PRECISION)


def share_to_asset(shares: int, price: int) -> int:
    return mul_div(shares, PRICE_PRECISION, price)


def invert_price(price: int) -> int:
    """Price of one share expressed in the asset, same 1e36 scaling."""
    return PRICE_PRECISION_SQUARED // price


def calculate_avg_entry_price(total_shares, entry_price, latest_price, shares):
    if not total_shares:
        total_shares = 0
    return (total_shares * entry_price + latest_price * shares) // (total_shares + shares)


def merge_position(position: Position, shares: int, timestamp: int, standard_price: int) -> Position:
    """
    Fold a new deposit into a position, weighting time and entry price by shares.
    """
    if shares == 0:
        return position
    total = position.shares + shares
    weighted_timestamp = (position.shares * position.timestamp + shares * timestamp) // total
    weighted_price = calculate_avg_entry_price(
        position.shares, position.standard_price, standard_price, shares
    )
    return Position(total, weighted_timestamp, weighted_price)


def management_fee(principal: int, rate: int, elapsed: int) -> int:
    if elapsed <= 0 or rate == 0:
        return 0
    return mul_div(principal, rate * elapsed, RATE_DENOMINATOR * SECONDS_PER_YEAR, round_up=True)


def performance_fee(value: int, entry_price: int, current_price: int, rate: int) -> int:
    """
    Fee on the share of ``value`` that is appreciation over the holder's entry
    price: value * (current - entry) / current * rate.
    """
    if current_price <= entry_price or rate == 0:
        return 0
    return mul_div(
        value, (current_price - entry_price) * rate, current_price * RATE_DENOMINATOR, round_up=True
    )


def performance_fee_on_supply(supply: int, high_water_mark: int, current_price: int, rate: int) -> int:
    """
    Fee shares owed on the whole supply when the share price beats the high
    water mark: supply * (current - hwm) / hwm * rate.
    """
    if high_water_mark == 0 or current_price <= high_water_mark or rate == 0:
        return 0
    return mul_div(
        supply, (current_price - high_water_mark) * rate, high_water_mark * RATE_DENOMINATOR, round_up=True
    )


def exit_fee(value: int, rate: int) -> int:
    return mul_div(value, rate, RATE_DENOMINATOR, round_up=True)


def calculate_fees(
    value: int,
    position: Position,
    now: int,
    current_price: int,
    rate_management: int,
    rate_performance: int,
    rate_exit: int,
) -> Fees:
    return Fees(
        management=management_fee(value, rate_management, now - position.timestamp),
        performance=performance_fee(value, position.standard_price, current_price, rate_performance),
        exit=exit_fee(value, rate_exit),
    )


def split_amount(amount: int, category_ratio: int, third_party_ratio: int) -> tuple[int, int]:
    """Return (default receiver part, third party part)."""
    third_party = amount * category_ratio * third_party_ratio // (RATE_DENOMINATOR * RATE_DENOMINATOR)
    return amount - third_party, third_party
