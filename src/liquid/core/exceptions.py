"""
Revert reasons raised by the Liquid components.

Every exception carries a ``reason`` string. Raising one inside a unit of work
rolls the whole call back.
"""


class LiquidError(Exception):
    category = "error"

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class AuthorizationError(LiquidError):
    category = "authorization"


class AccessControlUnauthorizedAccount(AuthorizationError):
    def __init__(self, account: str, role: str):
        super().__init__(f"AccessControlUnauthorizedAccount({account}, {role})")
        self.account = account
        self.role = role


class ValidationError(LiquidError):
    category = "validation"


class InvalidInitialization(ValidationError):
    def __init__(self):
        super().__init__("InvalidInitialization")


class TimingError(LiquidError):
    category = "timing"


class EnforcedPause(LiquidError):
    category = "paused"

    def __init__(self):
        super().__init__("EnforcedPause")


class ExpectedPause(LiquidError):
    category = "paused"

    def __init__(self):
        super().__init__("ExpectedPause")


class LiquidityError(LiquidError):
    category = "liquidity"


class ERC20InsufficientBalance(LiquidityError):
    def __init__(self, sender: str, balance: int, needed: int):
        super().__init__(f"ERC20InsufficientBalance({sender}, {balance}, {needed})")
        self.sender = sender
        self.balance = balance
        self.needed = needed


class ERC20InsufficientAllowance(LiquidityError):
    def __init__(self, spender: str, allowance: int, needed: int):
        super().__init__(f"ERC20InsufficientAllowance({spender}, {allowance}, {needed})")
        self.spender = spender
        self.allowance = allowance
        self.needed = needed
