"""
Deposits, withdrawals and fees of a Liquid.

Every mutating entry point has a ``simulate_*`` twin. Both go through the same
quote helpers so a preview always matches the call it mirrors, given the same
state and block time.
"""

import logging
from typing import Dict, NamedTuple

from sqlmodel import select

from liquid.core.constants import (
    CASHIER,
    DEFAULT_PARAMETERS,
    BASIS_POINT_PARAMETERS,
    FEE_EXIT,
    FEE_MANAGEMENT,
    FEE_PERFORMANCE,
    FEE_RATE_EXIT,
    FEE_RATE_INSTANT,
    FEE_RATE_MANAGEMENT,
    FEE_RATE_PERFORMANCE,
    RATE_DENOMINATOR,
    THIRD_PARTY_RATIO_KEYS,
    WITHDRAW_PERIOD,
    ZERO_ADDRESS,
)
from liquid.core.db import transactional
from liquid.core.exceptions import (
    ERC20InsufficientBalance,
    EnforcedPause,
    ExpectedPause,
    TimingError,
    ValidationError,
)
from liquid.models import CashierParameter, CashierState, DepositPosition, PendingWithdrawal
from liquid.services.access_control import FEE_MANAGER_ROLE
from liquid.services.base import LiquidComponent
from liquid.utils import calculate_price
from liquid.utils.calculate_price import Fees, Position
from liquid.utils.web3_utils import DEFAULT_ADMIN_ROLE, normalize_address

logger = logging.getLogger(__name__)


class WithdrawQuote(NamedTuple):
    asset: str
    shares: int
    gross: int
    fees: Fees

    @property
    def net(self) -> int:
        return self.gross - self.fees.total


class CompletionQuote(NamedTuple):
    asset: str
    shares: int
    amount: int
    fees: Fees
    # True when the asset is gone and the shares go back to the holder
    refund: bool


class PendingInfo(NamedTuple):
    shares: int
    timestamp: int
    asset: str
    asset_amount: int
    fee_amount: int


class LiquidCashier(LiquidComponent):
    component = CASHIER

    def __init__(self, session, liquid, clock, oracle, vault, fee_splitter):
        super().__init__(session, liquid, clock)
        self.oracle = oracle
        self.vault = vault
        self.fee_splitter = fee_splitter

    @property
    def state(self) -> CashierState:
        return self.session.get(CashierState, self.liquid.id)

    @property
    def paused(self) -> bool:
        return self.state.paused

    @property
    def high_water_mark(self) -> int:
        return self.state.high_water_mark

    @property
    def last_collect_time(self) -> int:
        return self.state.last_collect_time

    # Parameters

    def _parameter_row(self, key: str) -> CashierParameter | None:
        return self.session.exec(
            select(CashierParameter)
            .where(CashierParameter.liquid_id == self.liquid.id)
            .where(CashierParameter.key == key)
        ).first()

    def get_parameter(self, key: str) -> int:
        if key not in DEFAULT_PARAMETERS:
            raise ValidationError("LIQUID_CASHIER: invalid key")
        row = self._parameter_row(key)
        return row.value if row else DEFAULT_PARAMETERS[key]

    def parameters(self) -> Dict[str, int]:
        return {key: self.get_parameter(key) for key in DEFAULT_PARAMETERS}

    @transactional
    def set_parameter(self, caller: str, key: str, value: int) -> None:
        self.access.check_role(DEFAULT_ADMIN_ROLE, caller)
        if key not in DEFAULT_PARAMETERS:
            raise ValidationError("LIQUID_CASHIER: invalid key")
        value = int(value)
        if value < 0 or (key in BASIS_POINT_PARAMETERS and value > RATE_DENOMINATOR):
            raise ValidationError("LIQUID_CASHIER: invalid value")

        row = self._parameter_row(key)
        if row is None:
            row = CashierParameter(liquid_id=self.liquid.id, key=key, value=value)
        row.value = value
        self.session.add(row)
        self.emit("ParameterSet", key=key, value=value)

    # Roles and pause

    @transactional
    def set_fee_manager(self, caller: str, account: str, enabled: bool) -> bool:
        return self.access.set_role(caller, FEE_MANAGER_ROLE, account, enabled)

    @transactional
    def pause(self, caller: str) -> None:
        self.access.check_role(DEFAULT_ADMIN_ROLE, caller)
        state = self.state
        if state.paused:
            raise EnforcedPause()
        state.paused = True
        self.session.add(state)
        self.emit("Paused", account=normalize_address(caller))

    @transactional
    def unpause(self, caller: str) -> None:
        self.access.check_role(DEFAULT_ADMIN_ROLE, caller)
        state = self.state
        if not state.paused:
            raise ExpectedPause()
        state.paused = False
        self.session.add(state)
        self.emit("Unpaused", account=normalize_address(caller))

    def _when_not_paused(self) -> None:
        if self.state.paused:
            raise EnforcedPause()

    # Positions

    def _position_row(self, holder: str) -> DepositPosition | None:
        return self.session.exec(
            select(DepositPosition)
            .where(DepositPosition.liquid_id == self.liquid.id)
            .where(DepositPosition.holder == holder)
        ).first()

    def _pending_row(self, holder: str) -> PendingWithdrawal | None:
        return self.session.exec(
            select(PendingWithdrawal)
            .where(PendingWithdrawal.liquid_id == self.liquid.id)
            .where(PendingWithdrawal.holder == holder)
        ).first()

    def deposit_info(self, holder: str) -> Position:
        row = self._position_row(normalize_address(holder))
        if row is None:
            return Position(0, 0, 0)
        return Position(row.shares, row.timestamp, row.standard_price)

    def pending_info(self, holder: str) -> PendingInfo:
        row = self._pending_row(normalize_address(holder))
        if row is None:
            return PendingInfo(0, 0, ZERO_ADDRESS, 0, 0)
        return PendingInfo(row.shares, row.timestamp, row.asset, row.asset_amount, row.fee_amount)

    def _store_position(self, holder: str, position: Position) -> None:
        row = self._position_row(holder)
        if row is None:
            row = DepositPosition(liquid_id=self.liquid.id, holder=holder)
        row.shares, row.timestamp, row.standard_price = position
        self.session.add(row)

    def _reduce_position(self, holder: str, shares: int) -> None:
        """
        Take burned shares off the holder's position. Shares received by
        transfer or as fees carry no position, and a position never outgrows
        the balance left after the burn.
        """
        position = self.deposit_info(holder)
        remaining = min(position.shares - min(position.shares, shares), self.vault.balance_of(holder))
        self._store_position(holder, position._replace(shares=remaining))

    # Quotes

    def _quote_deposit(self, asset: str, amount: int) -> int:
        if amount <= 0:
            raise ValidationError("LIQUID_CASHIER: invalid amount")
        shares = self.oracle.asset_to_share(asset, amount)
        if shares == 0:
            raise ValidationError("LIQUID_CASHIER: invalid shares")
        return shares

    def calculate_fees(self, value: int, holder: str, is_instant: bool = False) -> Fees:
        """
        Fees charged on withdrawing ``value`` (asset base units) from ``holder``'s
        position at the current block time and share price.
        """
        now = self.clock.now()
        current_price = self.oracle.fetch_share_standard_price()
        position = self.deposit_info(holder)
        if position.shares == 0:
            position = Position(0, now, current_price)
        exit_key = FEE_RATE_INSTANT if is_instant else FEE_RATE_EXIT
        return calculate_price.calculate_fees(
            value,
            position,
            now,
            current_price,
            self.get_parameter(FEE_RATE_MANAGEMENT),
            self.get_parameter(FEE_RATE_PERFORMANCE),
            self.get_parameter(exit_key),
        )

    def _quote_withdraw(self, holder: str, asset: str, shares: int, is_instant: bool) -> WithdrawQuote:
        holder = normalize_address(holder)
        asset = normalize_address(asset)
        if shares <= 0:
            raise ValidationError("LIQUID_CASHIER: invalid amount")
        if shares > self.vault.balance_of(holder):
            raise ValidationError("LIQUID_CASHIER: insufficient shares")

        gross = self.oracle.share_to_asset(asset, shares)
        fees = self.calculate_fees(gross, holder, is_instant)
        if fees.total > gross:
            raise ValidationError("LIQUID_CASHIER: fees exceed value")
        return WithdrawQuote(asset, shares, gross, fees)

    def _quote_complete(self, holder: str) -> tuple[PendingWithdrawal, CompletionQuote]:
        pending = self._pending_row(normalize_address(holder))
        if pending is None:
            raise ValidationError("LIQUID_CASHIER: no pending withdrawal")
        if self.clock.now() < pending.timestamp + self.get_parameter(WITHDRAW_PERIOD):
            raise TimingError("LIQUID_CASHIER: still pending")

        fees = Fees(pending.management_fee, pending.performance_fee, pending.exit_fee)
        if not self.oracle.is_supported(pending.asset):
            return pending, CompletionQuote(pending.asset, pending.shares, 0, fees, True)

        gross = pending.asset_amount + fees.total
        balance = self.vault.asset_balance(pending.asset)
        if balance < gross:
            raise ERC20InsufficientBalance(self.vault.address, balance, gross)
        return pending, CompletionQuote(pending.asset, pending.shares, pending.asset_amount, fees, False)

    def simulate_deposit(self, asset: str, amount: int) -> int:
        self._when_not_paused()
        return self._quote_deposit(asset, amount)

    def simulate_request_withdraw(self, holder: str, asset: str, shares: int) -> WithdrawQuote:
        self._when_not_paused()
        return self._quote_withdraw(holder, asset, shares, is_instant=False)

    def simulate_instant_withdraw(self, holder: str, asset: str, shares: int) -> WithdrawQuote:
        self._when_not_paused()
        quote = self._quote_withdraw(holder, asset, shares, is_instant=True)
        self._check_liquidity(quote.asset, quote.gross)
        return quote

    def simulate_complete_withdraw(self, holder: str) -> CompletionQuote:
        return self._quote_complete(holder)[1]

    def _check_liquidity(self, asset: str, amount: int) -> None:
        balance = self.vault.asset_balance(asset)
        if balance < amount:
            raise ERC20InsufficientBalance(self.vault.address, balance, amount)

    def _distribute(self, asset: str, fees: Fees) -> None:
        for category, amount in zip((FEE_MANAGEMENT, FEE_PERFORMANCE, FEE_EXIT), fees):
            if amount:
                ratio = self.get_parameter(THIRD_PARTY_RATIO_KEYS[category])
                self.fee_splitter.distribute_asset(self.address, asset, category, amount, ratio)

    # Entry points

    @transactional
    def deposit(self, caller: str, asset: str, amount: int) -> int:
        self._when_not_paused()
        caller = normalize_address(caller)
        asset = normalize_address(asset)
        shares = self._quote_deposit(asset, amount)
        standard_price = self.oracle.fetch_share_standard_price()

        self.vault.pull_asset(self.address, asset, caller, amount)
        self.vault.mint(self.address, caller, shares)
        position = calculate_price.merge_position(
            self.deposit_info(caller), shares, self.clock.now(), standard_price
        )
        self._store_position(caller, position)
        self.emit("Deposit", account=caller, asset=asset, amount=amount, shares=shares)
        return shares

    @transactional
    def request_withdraw(self, caller: str, asset: str, shares: int) -> PendingWithdrawal:
        self._when_not_paused()
        caller = normalize_address(caller)
        if self._pending_row(caller) is not None:
            raise ValidationError("LIQUID_CASHIER: withdrawal already pending")
        quote = self._quote_withdraw(caller, asset, shares, is_instant=False)

        self.vault.burn(self.address, caller, shares)
        self._reduce_position(caller, shares)
        pending = PendingWithdrawal(
            liquid_id=self.liquid.id,
            holder=caller,
            shares=shares,
            timestamp=self.clock.now(),
            asset=quote.asset,
            asset_amount=quote.net,
            management_fee=quote.fees.management,
            performance_fee=quote.fees.performance,
            exit_fee=quote.fees.exit,
        )
        self.session.add(pending)
        self.emit(
            "WithdrawRequested",
            account=caller,
            asset=quote.asset,
            shares=shares,
            amount=quote.net,
            fee=quote.fees.total,
        )
        return pending

    @transactional
    def complete_withdraw(self, caller: str) -> CompletionQuote:
        caller = normalize_address(caller)
        pending, quote = self._quote_complete(caller)

        if quote.refund:
            self.vault.mint(self.address, caller, quote.shares)
            position = self.deposit_info(caller)
            if position.shares == 0:
                position = Position(0, pending.timestamp, self.oracle.fetch_share_standard_price())
            self._store_position(caller, position._replace(shares=position.shares + quote.shares))
            self.session.delete(pending)
            self.emit("WithdrawRefunded", account=caller, asset=quote.asset, shares=quote.shares)
            return quote

        self.vault.transfer_asset(self.address, quote.asset, caller, quote.amount)
        self._distribute(quote.asset, quote.fees)
        self.session.delete(pending)
        self.emit(
            "WithdrawCompleted",
            account=caller,
            asset=quote.asset,
            shares=quote.shares,
            amount=quote.amount,
            fee=quote.fees.total,
        )
        return quote

    @transactional
    def instant_withdraw(self, caller: str, asset: str, shares: int) -> WithdrawQuote:
        self._when_not_paused()
        caller = normalize_address(caller)
        quote = self._quote_withdraw(caller, asset, shares, is_instant=True)
        self._check_liquidity(quote.asset, quote.gross)

        self.vault.burn(self.address, caller, shares)
        self._reduce_position(caller, shares)
        self.vault.transfer_asset(self.address, quote.asset, caller, quote.net)
        self._distribute(quote.asset, quote.fees)
        self.emit(
            "InstantWithdraw",
            account=caller,
            asset=quote.asset,
            shares=shares,
            amount=quote.net,
            fee=quote.fees.total,
        )
        return quote

    @transactional
    def collect_fees(self, caller: str) -> Fees:
        """
        Charge management and performance fees on the whole share supply and
        mint them to the fee receivers.

        The performance fee is measured against the high water mark rather
        than any holder's entry price. The first collection only records the
        mark.
        """
        self.access.check_role(FEE_MANAGER_ROLE, caller)
        state = self.state
        now = self.clock.now()
        supply = self.vault.total_supply()
        current_price = self.oracle.fetch_share_standard_price()

        management = calculate_price.management_fee(
            supply, self.get_parameter(FEE_RATE_MANAGEMENT), now - state.last_collect_time
        )
        performance = calculate_price.performance_fee_on_supply(
            supply, state.high_water_mark, current_price, self.get_parameter(FEE_RATE_PERFORMANCE)
        )
        if current_price > state.high_water_mark:
            state.high_water_mark = current_price
        state.last_collect_time = now
        self.session.add(state)

        fees = Fees(management, performance, 0)
        for category, amount in ((FEE_MANAGEMENT, management), (FEE_PERFORMANCE, performance)):
            if amount:
                ratio = self.get_parameter(THIRD_PARTY_RATIO_KEYS[category])
                self.fee_splitter.distribute_shares(self.address, category, amount, ratio)
        self.emit(
            "FeesCollected",
            management_fee=management,
            performance_fee=performance,
            high_water_mark=state.high_water_mark,
        )
        logger.info(
            "Collected %s management and %s performance fee shares on supply %s",
            management, performance, supply,
        )
        return fees
