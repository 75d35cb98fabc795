import pytest

from liquid.core.constants import STANDARD_ASSET
from liquid.core.exceptions import (
    AccessControlUnauthorizedAccount,
    TimingError,
    ValidationError,
)
from liquid.services.events import get_events
from tests.helpers import (
    BTCB,
    OWNER,
    UPDATER,
    USDC,
    USDT,
    USER1,
    WBTC,
    WETH,
    parse_units,
    price,
    prices,
)


@pytest.fixture
def oracle(contracts):
    oracle = contracts.oracle
    for asset in (BTCB, WBTC, USDC, USDT):
        oracle.add_supported_asset(OWNER, asset)
    return oracle


def test_add_supported_asset_keeps_order(oracle, db_session):
    assert oracle.get_supported_assets() == [BTCB, WBTC, USDC, USDT]
    assert oracle.get_supported_assets_num() == 4
    assert oracle.asset_decimals(WBTC) == 8
    assert oracle.asset_decimals(STANDARD_ASSET) == 18
    assert len(get_events(db_session, oracle.address, "AssetAdded")) == 4


def test_add_supported_asset_rejects_duplicates_and_outsiders(oracle, tokens):
    with pytest.raises(ValidationError, match="LIQUID_ORACLE: asset already exists"):
        oracle.add_supported_asset(OWNER, USDC)
    with pytest.raises(ValidationError, match="LIQUID_ORACLE: asset already exists"):
        oracle.add_supported_asset(OWNER, STANDARD_ASSET)

    tokens.register_token(WETH, "Wrapped Ether", "WETH", 18)
    with pytest.raises(AccessControlUnauthorizedAccount):
        oracle.add_supported_asset(USER1, WETH)
    assert not oracle.is_supported(WETH)


def test_update_prices_flow(oracle, clock):
    with pytest.raises(AccessControlUnauthorizedAccount):
        oracle.update_prices(OWNER, [1, 1, 1, 1, 1])

    oracle.set_price_updater(OWNER, UPDATER, True)
    with pytest.raises(ValidationError, match="LIQUID_ORACLE: invalid input length"):
        oracle.update_prices(UPDATER, [1, 1, 1, 1])

    oracle.update_prices(UPDATER, [1, 1, 1, 1, 1])
    assert oracle.last_price_update == clock.now()

    with pytest.raises(TimingError, match="LIQUID_ORACLE: update too frequently"):
        oracle.update_prices(UPDATER, [1, 1, 1, 1, 1])

    clock.travel(seconds=oracle.minimum_update_interval + 5)
    oracle.update_prices(UPDATER, prices(70000, 1.2, 1.2))
    # 1 USDT buys 1.2 shares
    assert oracle.asset_to_share(USDT, 1_000000) == parse_units("1.2", 18)


def test_update_prices_rejects_zero(oracle):
    oracle.set_price_updater(OWNER, UPDATER, True)
    with pytest.raises(ValidationError, match="LIQUID_ORACLE: invalid price"):
        oracle.update_prices(UPDATER, [1, 1, 0, 1, 1])
    assert oracle.last_price_update == 0


def test_views(oracle):
    oracle.set_price_updater(OWNER, UPDATER, True)
    oracle.update_prices(UPDATER, prices(50000, 1.2, 1.25))

    assert oracle.asset_price_to_share(BTCB) == price(50000, 18)
    assert oracle.share_price_to_asset(BTCB) == 2 * 10**31
    assert oracle.share_price_to_asset(STANDARD_ASSET) == parse_units("0.8", 36)
    assert oracle.fetch_share_standard_price() == parse_units("0.8", 36)
    assert oracle.fetch_assets_prices_all() == prices(50000, 1.2, 1.25)

    share_prices = oracle.fetch_share_prices_all()
    assert share_prices[0] == parse_units("0.00002", 36)
    assert share_prices[1] == parse_units("0.00002", 26)
    assert abs(share_prices[2] - parse_units("0.8333", 24)) < parse_units("0.001", 24)
    assert share_prices[4] == parse_units("0.8", 36)

    assert oracle.share_to_asset(USDC, parse_units(12000, 18)) == parse_units(10000, 6)

    oracle.set_price_updater(OWNER, UPDATER, False)
    with pytest.raises(AccessControlUnauthorizedAccount):
        oracle.update_prices(UPDATER, [1, 1, 1, 1, 1])


def test_conversion_before_prices(oracle):
    with pytest.raises(ValidationError, match="LIQUID_ORACLE: price not set"):
        oracle.asset_to_share(BTCB, 1)
    with pytest.raises(ValidationError, match="LIQUID_ORACLE: asset not found"):
        oracle.asset_to_share(WETH, 1)


def test_remove_supported_asset(oracle, clock):
    oracle.set_price_updater(OWNER, UPDATER, True)
    oracle.update_prices(UPDATER, prices(50000, 1.2, 1.25))

    oracle.remove_supported_asset(OWNER, WBTC)
    assert oracle.get_supported_assets() == [BTCB, USDC, USDT]
    # remaining prices stay aligned with their assets
    assert oracle.fetch_assets_prices_all() == [
        price(50000, 18), price(1.2, 6), price(1.2, 6), price(1.25, 18)
    ]
    with pytest.raises(ValidationError, match="LIQUID_ORACLE: asset not found"):
        oracle.remove_supported_asset(OWNER, WBTC)

    clock.travel(hours=1)
    with pytest.raises(ValidationError, match="LIQUID_ORACLE: invalid input length"):
        oracle.update_prices(UPDATER, prices(50000, 1.2, 1.25))
    oracle.update_prices(UPDATER, [price(40000, 18), price(1, 6), price(1, 6), price(1, 18)])


def test_minimum_update_interval(oracle, clock):
    oracle.set_price_updater(OWNER, UPDATER, True)
    oracle.set_minimum_update_interval(OWNER, 60)
    oracle.update_prices(UPDATER, [1, 1, 1, 1, 1])
    clock.travel(seconds=60)
    oracle.update_prices(UPDATER, [2, 2, 2, 2, 2])
    assert oracle.fetch_assets_prices_all() == [2, 2, 2, 2, 2]

    with pytest.raises(AccessControlUnauthorizedAccount):
        oracle.set_minimum_update_interval(UPDATER, 0)
