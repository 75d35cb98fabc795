from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlmodel import Session

from liquid.core.clock import SystemClock
from liquid.core.db import engine
from liquid.services import LiquidContracts, LiquidFactory, TokenLedger
from liquid.utils.web3_utils import normalize_address

_clock = SystemClock()


def get_db() -> Generator:
    with Session(engine) as session:
        yield session


def get_clock():
    return _clock


SessionDep = Annotated[Session, Depends(get_db)]
ClockDep = Annotated[SystemClock, Depends(get_clock)]


def get_caller(x_caller_address: Annotated[str | None, Header()] = None) -> str:
    if not x_caller_address:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Caller-Address header is required",
        )
    return normalize_address(x_caller_address)


CallerDep = Annotated[str, Depends(get_caller)]


def get_tokens(session: SessionDep, clock: ClockDep) -> TokenLedger:
    return TokenLedger(session, clock)


TokensDep = Annotated[TokenLedger, Depends(get_tokens)]


def get_factory(session: SessionDep, clock: ClockDep, tokens: TokensDep) -> LiquidFactory:
    return LiquidFactory(session, clock, tokens)


FactoryDep = Annotated[LiquidFactory, Depends(get_factory)]


def get_contracts(index: int, factory: FactoryDep) -> LiquidContracts:
    return factory.load(factory.liquids(index))


ContractsDep = Annotated[LiquidContracts, Depends(get_contracts)]
