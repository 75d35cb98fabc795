from liquid.core.constants import PRICE_PRECISION, SECONDS_PER_DAY
from liquid.utils.calculate_price import (
    Fees,
    Position,
    asset_to_share,
    calculate_avg_entry_price,
    calculate_fees,
    exit_fee,
    invert_price,
    management_fee,
    merge_position,
    mul_div,
    performance_fee,
    performance_fee_on_supply,
    share_to_asset,
    split_amount,
)
from tests.helpers import parse_units, price, shares

T0 = 1_704_067_200


def test_mul_div_rounding():
    assert mul_div(10, 1, 3) == 3
    assert mul_div(10, 1, 3, round_up=True) == 4
    assert mul_div(9, 1, 3, round_up=True) == 3
    assert mul_div(0, 5, 7, round_up=True) == 0


def test_asset_to_share_truncates():
    usdc = price(1.2, 6)
    assert asset_to_share(parse_units(10000, 6), usdc) == shares(12000)
    # 1 base unit of USDC is 1.2e12 share units, exact
    assert asset_to_share(1, usdc) == 1_200_000_000_000
    assert share_to_asset(1_200_000_000_001, usdc) == 1


def test_share_to_asset_recovers_amount_within_one_unit():
    wbtc = price(32000, 8)
    for amount in (1, 7, 12_345_678, parse_units("1.8", 8)):
        recovered = share_to_asset(asset_to_share(amount, wbtc), wbtc)
        assert amount - 1 <= recovered <= amount


def test_invert_price():
    assert invert_price(parse_units("1.25", 36)) == parse_units("0.8", 36)
    assert invert_price(price(50000, 18)) == 2 * 10**31


def test_avg_entry_price():
    assert calculate_avg_entry_price(0, 0, 100, 10) == 100
    assert calculate_avg_entry_price(None, 0, 100, 10) == 100
    assert calculate_avg_entry_price(10, 100, 200, 30) == 175


def test_merge_position_weights_time_and_price():
    position = Position(0, 0, 0)
    position = merge_position(position, shares(12000), T0, parse_units("0.8", 36))
    position = merge_position(position, shares(12000), T0, parse_units("0.8", 36))
    assert position == Position(shares(24000), T0, parse_units("0.8", 36))

    position = merge_position(
        position, shares(72000), T0 + 20 * SECONDS_PER_DAY, parse_units("1.0", 36)
    )
    assert position.shares == shares(96000)
    assert position.timestamp == T0 + 15 * SECONDS_PER_DAY
    assert position.standard_price == parse_units("0.95", 36)


def test_merge_position_with_zero_shares_is_identity():
    position = Position(shares(5), T0, PRICE_PRECISION)
    assert merge_position(position, 0, T0 + 100, 2 * PRICE_PRECISION) is position


def test_management_fee_rounds_up():
    value = parse_units(25000, 6)
    fee = management_fee(value, 200, 45 * SECONDS_PER_DAY)
    # 61.643835... USDC
    assert fee == 61_643_836
    assert management_fee(value, 200, 0) == 0
    assert management_fee(value, 0, 45 * SECONDS_PER_DAY) == 0


def test_performance_fee_only_on_appreciation():
    value = parse_units(25000, 6)
    entry = parse_units("0.95", 36)
    current = parse_units("1.25", 36)
    assert performance_fee(value, entry, current, 2000) == parse_units(1200, 6)
    assert performance_fee(value, current, entry, 2000) == 0
    assert performance_fee(value, current, current, 2000) == 0


def test_performance_fee_on_supply_uses_high_water_mark():
    supply = shares(24000)
    hwm = parse_units("0.8", 36)
    current = parse_units("1.0", 36)
    assert performance_fee_on_supply(supply, hwm, current, 2000) == shares(1200)
    # the per-holder formula divides by the current price instead
    assert performance_fee(supply, hwm, current, 2000) == shares(960)
    assert performance_fee_on_supply(supply, 0, current, 2000) == 0


def test_exit_fee():
    assert exit_fee(parse_units(25000, 6), 100) == parse_units(250, 6)
    assert exit_fee(1, 1) == 1


def test_calculate_fees_total_is_sum():
    position = Position(shares(96000), T0 + 15 * SECONDS_PER_DAY, parse_units("0.95", 36))
    fees = calculate_fees(
        parse_units(25000, 6),
        position,
        T0 + 60 * SECONDS_PER_DAY,
        parse_units("1.25", 36),
        400,
        3000,
        700,
    )
    assert fees == Fees(123_287_672, parse_units(1800, 6), parse_units(1750, 6))
    assert fees.total == fees.management + fees.performance + fees.exit


def test_split_amount():
    assert split_amount(parse_units(1200, 6), 10000, 6000) == (
        parse_units(480, 6),
        parse_units(720, 6),
    )
    assert split_amount(1000, 0, 6000) == (1000, 0)
    assert split_amount(1000, 5000, 5000) == (750, 250)
