"""
ERC20 bookkeeping for the underlying asset tokens.

Stands in for the token contracts of the execution environment: balances,
allowances and transfers of BTCB, WBTC, USDC and friends.
"""

import logging
from typing import List

from sqlmodel import Session, select

from liquid.core.constants import ZERO_ADDRESS
from liquid.core.db import transactional
from liquid.core.exceptions import (
    ERC20InsufficientAllowance,
    ERC20InsufficientBalance,
    ValidationError,
)
from liquid.models import Token, TokenAllowance, TokenBalance
from liquid.services.events import emit_event
from liquid.utils.web3_utils import normalize_address

logger = logging.getLogger(__name__)


class TokenLedger:
    def __init__(self, session: Session, clock):
        self.session = session
        self.clock = clock

    @transactional
    def register_token(self, address: str, name: str, symbol: str, decimals: int) -> Token:
        address = normalize_address(address)
        if self.session.get(Token, address) is not None:
            raise ValidationError(f"token {address} already registered")
        if not 0 <= decimals <= 36:
            raise ValidationError("invalid decimals")
        token = Token(address=address, name=name, symbol=symbol, decimals=decimals)
        self.session.add(token)
        logger.info("Registered token %s (%s, %s decimals)", symbol, address, decimals)
        return token

    def get_token(self, address: str) -> Token:
        token = self.session.get(Token, normalize_address(address))
        if token is None:
            raise ValidationError(f"token {address} not found")
        return token

    def is_token(self, address: str) -> bool:
        return self.session.get(Token, normalize_address(address)) is not None

    def list_tokens(self) -> List[Token]:
        return self.session.exec(select(Token)).all()

    def decimals(self, address: str) -> int:
        return self.get_token(address).decimals

    def _balance_row(self, token: str, holder: str) -> TokenBalance:
        row = self.session.exec(
            select(TokenBalance)
            .where(TokenBalance.token == token)
            .where(TokenBalance.holder == holder)
        ).first()
        if row is None:
            row = TokenBalance(token=token, holder=holder, balance=0)
            self.session.add(row)
        return row

    def _allowance_row(self, token: str, owner: str, spender: str) -> TokenAllowance:
        row = self.session.exec(
            select(TokenAllowance)
            .where(TokenAllowance.token == token)
            .where(TokenAllowance.owner == owner)
            .where(TokenAllowance.spender == spender)
        ).first()
        if row is None:
            row = TokenAllowance(token=token, owner=owner, spender=spender, amount=0)
            self.session.add(row)
        return row

    def balance_of(self, token: str, holder: str) -> int:
        token = self.get_token(token).address
        row = self.session.exec(
            select(TokenBalance)
            .where(TokenBalance.token == token)
            .where(TokenBalance.holder == normalize_address(holder))
        ).first()
        return row.balance if row else 0

    def allowance(self, token: str, owner: str, spender: str) -> int:
        token = self.get_token(token).address
        row = self.session.exec(
            select(TokenAllowance)
            .where(TokenAllowance.token == token)
            .where(TokenAllowance.owner == normalize_address(owner))
            .where(TokenAllowance.spender == normalize_address(spender))
        ).first()
        return row.amount if row else 0

    @transactional
    def mint(self, token: str, to: str, amount: int) -> None:
        record = self.get_token(token)
        to = normalize_address(to)
        if amount < 0:
            raise ValidationError("invalid amount")
        row = self._balance_row(record.address, to)
        row.balance += amount
        record.total_supply += amount
        self.session.add(record)
        emit_event(
            self.session, record.address, "Transfer", self.clock.now(),
            sender=ZERO_ADDRESS, to=to, value=amount,
        )

    @transactional
    def transfer(self, token: str, sender: str, to: str, amount: int) -> bool:
        record = self.get_token(token)
        sender = normalize_address(sender)
        to = normalize_address(to)
        if amount < 0:
            raise ValidationError("invalid amount")
        source = self._balance_row(record.address, sender)
        if source.balance < amount:
            raise ERC20InsufficientBalance(sender, source.balance, amount)
        source.balance -= amount
        target = self._balance_row(record.address, to)
        target.balance += amount
        emit_event(
            self.session, record.address, "Transfer", self.clock.now(),
            sender=sender, to=to, value=amount,
        )
        return True

    @transactional
    def approve(self, token: str, owner: str, spender: str, amount: int) -> bool:
        record = self.get_token(token)
        owner = normalize_address(owner)
        spender = normalize_address(spender)
        if amount < 0:
            raise ValidationError("invalid amount")
        row = self._allowance_row(record.address, owner, spender)
        row.amount = amount
        emit_event(
            self.session, record.address, "Approval", self.clock.now(),
            owner=owner, spender=spender, value=amount,
        )
        return True

    @transactional
    def transfer_from(self, token: str, spender: str, owner: str, to: str, amount: int) -> bool:
        record = self.get_token(token)
        spender = normalize_address(spender)
        owner = normalize_address(owner)
        row = self._allowance_row(record.address, owner, spender)
        if row.amount < amount:
            raise ERC20InsufficientAllowance(spender, row.amount, amount)
        row.amount -= amount
        return self.transfer(record.address, owner, to, amount)
