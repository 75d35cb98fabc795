from .liquid import (
    Event,
    Liquid,
    LiquidCreate,
    RoleMembership,
    RoleUpdate,
    Token,
    TokenAmount,
    TokenCreate,
)
from .oracle import (
    AssetRequest,
    Conversion,
    IntervalUpdate,
    OracleInfo,
    Prices,
    PricesUpdate,
    SharePrice,
)
from .cashier import (
    CashierInfo,
    CompletionQuote,
    DepositInfo,
    DepositRequest,
    DepositResult,
    FeeInfo,
    ParameterUpdate,
    PendingInfo,
    WithdrawQuote,
    WithdrawRequest,
)
from .vault import (
    AssetBalance,
    LiquidityMove,
    ShareBalance,
    ShareTransfer,
    Strategy,
    StrategyCreate,
    StrategyExecute,
    StrategyResult,
    VaultInfo,
)
from .fee_splitter import FeeSplitterInfo, RatioUpdate, ReceiverUpdate
