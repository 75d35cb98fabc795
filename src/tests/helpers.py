from decimal import Decimal

from liquid.core.constants import SHARE_DECIMALS
from liquid.utils.web3_utils import derive_address

OWNER = derive_address("account", "owner")
UPDATER = derive_address("account", "updater")
USER1 = derive_address("account", "user1")
USER2 = derive_address("account", "user2")
LP = derive_address("account", "lp")
MANAGER = derive_address("account", "manager")
FEE_COLLECTOR_1 = derive_address("account", "fee-collector-1")
FEE_COLLECTOR_2 = derive_address("account", "fee-collector-2")
DEX_ROUTER = derive_address("contract", "dex-router")

BTCB = derive_address("token", "BTCB")
WBTC = derive_address("token", "WBTC")
USDC = derive_address("token", "USDC")
USDT = derive_address("token", "USDT")
WETH = derive_address("token", "WETH")

TOKENS = [
    (BTCB, "Binance BTC", "BTCB", 18),
    (WBTC, "Wrapped BTC", "WBTC", 8),
    (USDC, "USD Coin", "USDC", 6),
    (USDT, "Tether USD", "USDT", 6),
]


def parse_units(value, decimals: int) -> int:
    return int(Decimal(str(value)) * (Decimal(10) ** decimals))


def price(value, asset_decimals: int) -> int:
    """Oracle price of one asset unit worth ``value`` shares."""
    return parse_units(value, 36 + SHARE_DECIMALS - asset_decimals)


def shares(value) -> int:
    return parse_units(value, SHARE_DECIMALS)


def prices(btc, usd, standard) -> list:
    """Prices for BTCB, WBTC, USDC, USDT and the standard asset."""
    return [price(btc, 18), price(btc, 8), price(usd, 6), price(usd, 6), price(standard, 18)]
