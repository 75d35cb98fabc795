from .access_control import (
    ASSET_MANAGER_ROLE,
    FEE_MANAGER_ROLE,
    FEE_SPLIT_MANAGER_ROLE,
    LIQUIDITY_MANAGER_ROLE,
    PRICE_UPDATER_ROLE,
    AccessControl,
)
from .call_router import ExternalCallRouter
from .cashier import LiquidCashier
from .factory import LiquidContracts, LiquidFactory
from .fee_splitter import LiquidFeeSplitter
from .oracle import LiquidOracle
from .token_ledger import TokenLedger
from .vault import LiquidVault
