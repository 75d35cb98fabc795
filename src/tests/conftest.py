import pytest
from sqlmodel import Session

from liquid.core.clock import FrozenClock
from liquid.core.db import init_db, make_engine
from liquid.services import ExternalCallRouter, LiquidFactory, TokenLedger
from tests.helpers import (
    BTCB,
    LP,
    OWNER,
    TOKENS,
    UPDATER,
    USDC,
    USDT,
    USER1,
    USER2,
    WBTC,
    parse_units,
    prices,
)


@pytest.fixture
def engine():
    engine = make_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def tokens(db_session, clock):
    ledger = TokenLedger(db_session, clock)
    for address, name, symbol, decimals in TOKENS:
        ledger.register_token(address, name, symbol, decimals)
    for holder in (USER1, USER2, LP):
        ledger.mint(BTCB, holder, parse_units(10, 18))
        ledger.mint(WBTC, holder, parse_units(10, 8))
        ledger.mint(USDC, holder, parse_units(1_000_000, 6))
        ledger.mint(USDT, holder, parse_units(1_000_000, 6))
    return ledger


@pytest.fixture
def router(tokens):
    return ExternalCallRouter(tokens)


@pytest.fixture
def factory(db_session, clock, tokens, router):
    return LiquidFactory(db_session, clock, tokens, router)


@pytest.fixture
def contracts(factory):
    return factory.deploy_liquid("BTC Liquid Vault Share", "bSHARE", OWNER)


@pytest.fixture
def priced(contracts):
    """Liquid with the four test tokens listed and first prices pushed."""
    oracle = contracts.oracle
    for asset in (BTCB, WBTC, USDC, USDT):
        oracle.add_supported_asset(OWNER, asset)
    oracle.set_price_updater(OWNER, UPDATER, True)
    oracle.update_prices(UPDATER, prices(60000, 1.2, 1.25))
    return contracts
