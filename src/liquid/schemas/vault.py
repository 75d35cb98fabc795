from pydantic import BaseModel


class VaultInfo(BaseModel):
    name: str
    symbol: str
    decimals: int
    total_supply: int
    cashier: str | None = None
    fee_splitter: str | None = None


class ShareBalance(BaseModel):
    holder: str
    balance: int


class ShareTransfer(BaseModel):
    to: str
    amount: int


class AssetBalance(BaseModel):
    asset: str
    balance: int


class LiquidityMove(BaseModel):
    asset: str
    amount: int


class StrategyCreate(BaseModel):
    target: str
    # hex encoded, 0x-prefixed
    mask: str
    restrict: str
    description: str = ""


class Strategy(BaseModel):
    index: int
    target: str
    mask: str
    restrict: str
    description: str = ""


class StrategyExecute(BaseModel):
    data: str


class StrategyResult(BaseModel):
    index: int
    result: str
