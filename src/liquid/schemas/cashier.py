from typing import Dict

from pydantic import BaseModel


class FeeInfo(BaseModel):
    management_fee: int
    performance_fee: int
    exit_fee: int
    total: int

    @classmethod
    def from_fees(cls, fees) -> "FeeInfo":
        return cls(
            management_fee=fees.management,
            performance_fee=fees.performance,
            exit_fee=fees.exit,
            total=fees.total,
        )


class DepositInfo(BaseModel):
    shares: int
    timestamp: int
    standard_price: int


class PendingInfo(BaseModel):
    shares: int
    timestamp: int
    asset: str
    asset_amount: int
    fee_amount: int


class DepositRequest(BaseModel):
    asset: str
    amount: int


class DepositResult(BaseModel):
    asset: str
    amount: int
    shares: int


class WithdrawRequest(BaseModel):
    asset: str
    shares: int


class WithdrawQuote(BaseModel):
    asset: str
    shares: int
    gross: int
    net: int
    fees: FeeInfo

    @classmethod
    def from_quote(cls, quote) -> "WithdrawQuote":
        return cls(
            asset=quote.asset,
            shares=quote.shares,
            gross=quote.gross,
            net=quote.net,
            fees=FeeInfo.from_fees(quote.fees),
        )


class CompletionQuote(BaseModel):
    asset: str
    shares: int
    amount: int
    refund: bool
    fees: FeeInfo


class ParameterUpdate(BaseModel):
    key: str
    value: int


class CashierInfo(BaseModel):
    paused: bool
    high_water_mark: int
    last_collect_time: int
    parameters: Dict[str, int]
