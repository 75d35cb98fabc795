import logging
from typing import List

from sqlmodel import select

from liquid.core.constants import SHARE_DECIMALS, VAULT, ZERO_ADDRESS
from liquid.core.db import transactional
from liquid.core.exceptions import (
    ERC20InsufficientAllowance,
    ERC20InsufficientBalance,
    InvalidInitialization,
    ValidationError,
)
from liquid.models import ShareAllowance, ShareBalance, Strategy, VaultState
from liquid.services.access_control import LIQUIDITY_MANAGER_ROLE
from liquid.services.base import LiquidComponent
from liquid.utils.bytes_bitwise import masked_equal, to_bytes, to_hex
from liquid.utils.web3_utils import DEFAULT_ADMIN_ROLE, normalize_address

logger = logging.getLogger(__name__)


class LiquidVault(LiquidComponent):
    """
    Share token of a Liquid and custodian of its underlying assets.

    Shares are minted and burned only by the wired cashier and fee splitter.
    Liquidity managers move assets in and out directly or through the
    registered strategies.
    """

    component = VAULT

    def __init__(self, session, liquid, clock, tokens, router):
        super().__init__(session, liquid, clock)
        self.tokens = tokens
        self.router = router

    @property
    def state(self) -> VaultState:
        return self.session.get(VaultState, self.liquid.id)

    # ERC20

    @property
    def name(self) -> str:
        return self.state.name

    @property
    def symbol(self) -> str:
        return self.state.symbol

    @property
    def decimals(self) -> int:
        return SHARE_DECIMALS

    def total_supply(self) -> int:
        return self.state.total_supply

    def _balance_row(self, holder: str, create: bool = False) -> ShareBalance | None:
        row = self.session.exec(
            select(ShareBalance)
            .where(ShareBalance.liquid_id == self.liquid.id)
            .where(ShareBalance.holder == holder)
        ).first()
        if row is None and create:
            row = ShareBalance(liquid_id=self.liquid.id, holder=holder, balance=0)
            self.session.add(row)
        return row

    def _allowance_row(self, owner: str, spender: str, create: bool = False) -> ShareAllowance | None:
        row = self.session.exec(
            select(ShareAllowance)
            .where(ShareAllowance.liquid_id == self.liquid.id)
            .where(ShareAllowance.owner == owner)
            .where(ShareAllowance.spender == spender)
        ).first()
        if row is None and create:
            row = ShareAllowance(liquid_id=self.liquid.id, owner=owner, spender=spender, amount=0)
            self.session.add(row)
        return row

    def balance_of(self, holder: str) -> int:
        row = self._balance_row(normalize_address(holder))
        return row.balance if row else 0

    def allowance(self, owner: str, spender: str) -> int:
        row = self._allowance_row(normalize_address(owner), normalize_address(spender))
        return row.amount if row else 0

    def _update(self, sender: str | None, to: str | None, amount: int) -> None:
        if amount < 0:
            raise ValidationError("invalid amount")
        state = self.state
        if sender is None:
            state.total_supply += amount
        else:
            source = self._balance_row(sender, create=True)
            if source.balance < amount:
                raise ERC20InsufficientBalance(sender, source.balance, amount)
            source.balance -= amount
        if to is None:
            state.total_supply -= amount
        else:
            target = self._balance_row(to, create=True)
            target.balance += amount
        self.session.add(state)
        self.emit("Transfer", sender=sender or ZERO_ADDRESS, to=to or ZERO_ADDRESS, value=amount)

    @transactional
    def transfer(self, caller: str, to: str, amount: int) -> bool:
        self._update(normalize_address(caller), normalize_address(to), amount)
        return True

    @transactional
    def approve(self, caller: str, spender: str, amount: int) -> bool:
        owner = normalize_address(caller)
        spender = normalize_address(spender)
        if amount < 0:
            raise ValidationError("invalid amount")
        row = self._allowance_row(owner, spender, create=True)
        row.amount = amount
        self.emit("Approval", owner=owner, spender=spender, value=amount)
        return True

    @transactional
    def transfer_from(self, caller: str, owner: str, to: str, amount: int) -> bool:
        spender = normalize_address(caller)
        owner = normalize_address(owner)
        row = self._allowance_row(owner, spender, create=True)
        if row.amount < amount:
            raise ERC20InsufficientAllowance(spender, row.amount, amount)
        row.amount -= amount
        self._update(owner, normalize_address(to), amount)
        return True

    # Wiring

    @property
    def cashier(self) -> str | None:
        return self.state.cashier

    @property
    def fee_splitter(self) -> str | None:
        return self.state.fee_splitter

    @transactional
    def set_cashier(self, caller: str, cashier: str) -> None:
        self.access.check_role(DEFAULT_ADMIN_ROLE, caller)
        state = self.state
        if state.cashier is not None:
            raise InvalidInitialization()
        state.cashier = normalize_address(cashier)
        self.session.add(state)
        self.emit("CashierSet", cashier=state.cashier)

    @transactional
    def set_fee_splitter(self, caller: str, fee_splitter: str) -> None:
        self.access.check_role(DEFAULT_ADMIN_ROLE, caller)
        state = self.state
        if state.fee_splitter is not None:
            raise InvalidInitialization()
        state.fee_splitter = normalize_address(fee_splitter)
        self.session.add(state)
        self.emit("FeeSplitterSet", fee_splitter=state.fee_splitter)

    def _only(self, caller: str, *allowed: str | None) -> str:
        caller = normalize_address(caller)
        if caller not in [a for a in allowed if a]:
            raise ValidationError("LIQUID_VAULT: caller not allowed")
        return caller

    # Hooks for the cashier and fee splitter

    @transactional
    def mint(self, caller: str, to: str, amount: int) -> None:
        state = self.state
        self._only(caller, state.cashier, state.fee_splitter)
        self._update(None, normalize_address(to), amount)

    @transactional
    def burn(self, caller: str, holder: str, amount: int) -> None:
        self._only(caller, self.state.cashier)
        self._update(normalize_address(holder), None, amount)

    @transactional
    def transfer_asset(self, caller: str, asset: str, to: str, amount: int) -> None:
        state = self.state
        self._only(caller, state.cashier, state.fee_splitter)
        self.tokens.transfer(asset, self.address, to, amount)

    @transactional
    def pull_asset(self, caller: str, asset: str, owner: str, amount: int) -> None:
        """Take ``amount`` of ``asset`` from ``owner`` using its allowance to the vault."""
        self._only(caller, self.state.cashier)
        self.tokens.transfer_from(asset, self.address, owner, self.address, amount)

    def asset_balance(self, asset: str) -> int:
        return self.tokens.balance_of(asset, self.address)

    # Liquidity management

    @transactional
    def set_liquidity_manager(self, caller: str, account: str, enabled: bool) -> bool:
        return self.access.set_role(caller, LIQUIDITY_MANAGER_ROLE, account, enabled)

    @transactional
    def deposit_liquidity_directly(self, caller: str, asset: str, amount: int) -> None:
        self.access.check_role(LIQUIDITY_MANAGER_ROLE, caller)
        caller = normalize_address(caller)
        self.tokens.transfer_from(asset, self.address, caller, self.address, amount)
        self.emit("LiquidityDeposited", manager=caller, asset=normalize_address(asset), amount=amount)

    @transactional
    def withdraw_liquidity_directly(self, caller: str, asset: str, amount: int) -> None:
        self.access.check_role(LIQUIDITY_MANAGER_ROLE, caller)
        caller = normalize_address(caller)
        self.tokens.transfer(asset, self.address, caller, amount)
        self.emit("LiquidityWithdrawn", manager=caller, asset=normalize_address(asset), amount=amount)

    # Strategies

    def _strategies(self) -> List[Strategy]:
        return self.session.exec(
            select(Strategy)
            .where(Strategy.liquid_id == self.liquid.id)
            .order_by(Strategy.position.asc())
        ).all()

    def strategies_length(self) -> int:
        return len(self._strategies())

    def strategies(self, index: int) -> Strategy:
        strategies = self._strategies()
        if not 0 <= index < len(strategies):
            raise ValidationError("LIQUID_VAULT: invalid index")
        return strategies[index]

    @transactional
    def add_strategy(self, caller: str, target: str, mask, restrict, description: str = "") -> Strategy:
        self.access.check_role(DEFAULT_ADMIN_ROLE, caller)
        target = normalize_address(target)
        mask = to_bytes(mask)
        restrict = to_bytes(restrict)
        if len(mask) != len(restrict):
            raise ValidationError("LIQUID_VAULT: length mismatch")

        strategy = Strategy(
            liquid_id=self.liquid.id,
            position=self.strategies_length(),
            target=target,
            mask=to_hex(mask),
            restrict=to_hex(restrict),
            description=description,
        )
        self.session.add(strategy)
        self.emit("StrategyAdded", index=strategy.position, target=target, description=description)
        return strategy

    @transactional
    def remove_strategy(self, caller: str, index: int) -> None:
        self.access.check_role(DEFAULT_ADMIN_ROLE, caller)
        strategy = self.strategies(index)
        target = strategy.target
        self.session.delete(strategy)
        self.session.flush()
        for position, remaining in enumerate(self._strategies()):
            remaining.position = position
            self.session.add(remaining)
        self.emit("StrategyRemoved", index=index, target=target)

    @transactional
    def execute_strategy(self, caller: str, index: int, data) -> bytes:
        self.access.check_role(LIQUIDITY_MANAGER_ROLE, caller)
        strategy = self.strategies(index)
        data = to_bytes(data)
        if not masked_equal(data, to_bytes(strategy.mask), to_bytes(strategy.restrict)):
            raise ValidationError("LIQUID_VAULT: strategy not matched")

        result = self.router.call(self.address, strategy.target, bytes(data))
        self.emit("StrategyExecuted", index=index, target=strategy.target, data=bytes(data))
        return result

