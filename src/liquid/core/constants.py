from eth_utils import keccak, to_checksum_address

from liquid.core.config import settings

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Synthetic reference asset, priced last in every price array
STANDARD_ASSET = to_checksum_address(keccak(text="LIQUID_STANDARD_ASSET")[-20:])

SHARE_DECIMALS = 18
STANDARD_DECIMALS = 18

PRICE_PRECISION = 10**36
PRICE_PRECISION_SQUARED = 10**72
RATE_DENOMINATOR = 10_000
SECONDS_PER_DAY = 86400
SECONDS_PER_YEAR = 365 * SECONDS_PER_DAY

# Cashier parameter keys
FEE_RATE_MANAGEMENT = "feeRateManagement"
FEE_RATE_PERFORMANCE = "feeRatePerformance"
FEE_RATE_EXIT = "feeRateExit"
FEE_RATE_INSTANT = "feeRateInstant"
THIRD_PARTY_RATIO_MANAGEMENT = "thirdPartyRatioManagement"
THIRD_PARTY_RATIO_PERFORMANCE = "thirdPartyRatioPerformance"
THIRD_PARTY_RATIO_EXIT = "thirdPartyRatioExit"
WITHDRAW_PERIOD = "withdrawPeriod"

DEFAULT_PARAMETERS = {
    FEE_RATE_MANAGEMENT: settings.DEFAULT_FEE_RATE_MANAGEMENT,
    FEE_RATE_PERFORMANCE: settings.DEFAULT_FEE_RATE_PERFORMANCE,
    FEE_RATE_EXIT: settings.DEFAULT_FEE_RATE_EXIT,
    FEE_RATE_INSTANT: settings.DEFAULT_FEE_RATE_INSTANT,
    THIRD_PARTY_RATIO_MANAGEMENT: settings.DEFAULT_THIRD_PARTY_RATIO_MANAGEMENT,
    THIRD_PARTY_RATIO_PERFORMANCE: settings.DEFAULT_THIRD_PARTY_RATIO_PERFORMANCE,
    THIRD_PARTY_RATIO_EXIT: settings.DEFAULT_THIRD_PARTY_RATIO_EXIT,
    WITHDRAW_PERIOD: settings.DEFAULT_WITHDRAW_PERIOD,
}

# Keys bounded by RATE_DENOMINATOR
BASIS_POINT_PARAMETERS = frozenset(DEFAULT_PARAMETERS) - {WITHDRAW_PERIOD}

# Fee categories handed to the fee splitter
FEE_MANAGEMENT = "management"
FEE_PERFORMANCE = "performance"
FEE_EXIT = "exit"

THIRD_PARTY_RATIO_KEYS = {
    FEE_MANAGEMENT: THIRD_PARTY_RATIO_MANAGEMENT,
    FEE_PERFORMANCE: THIRD_PARTY_RATIO_PERFORMANCE,
    FEE_EXIT: THIRD_PARTY_RATIO_EXIT,
}

# Component names, used in address derivation and the event log
ORACLE = "oracle"
VAULT = "vault"
CASHIER = "cashier"
FEE_SPLITTER = "fee_splitter"
