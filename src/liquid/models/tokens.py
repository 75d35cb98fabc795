import uuid

from sqlmodel import Field, SQLModel

from .types import Uint256


class Token(SQLModel, table=True):
    __tablename__ = "tokens"

    address: str = Field(primary_key=True)
    name: str
    symbol: str
    decimals: int
    total_supply: int = Field(default=0, sa_type=Uint256)


class TokenBalance(SQLModel, table=True):
    __tablename__ = "token_balances"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    token: str = Field(foreign_key="tokens.address", index=True)
    holder: str = Field(index=True)
    balance: int = Field(default=0, sa_type=Uint256)


class TokenAllowance(SQLModel, table=True):
    __tablename__ = "token_allowances"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    token: str = Field(foreign_key="tokens.address", index=True)
    owner: str = Field(index=True)
    spender: str
    amount: int = Field(default=0, sa_type=Uint256)
