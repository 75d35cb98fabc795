import uuid

from sqlmodel import Field, SQLModel

from .types import Uint256


class VaultState(SQLModel, table=True):
    __tablename__ = "vault_state"

    liquid_id: uuid.UUID = Field(foreign_key="liquids.id", primary_key=True)
    name: str
    symbol: str
    total_supply: int = Field(default=0, sa_type=Uint256)
    cashier: str | None = None
    fee_splitter: str | None = None


class ShareBalance(SQLModel, table=True):
    __tablename__ = "share_balances"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    liquid_id: uuid.UUID = Field(foreign_key="liquids.id", index=True)
    holder: str = Field(index=True)
    balance: int = Field(default=0, sa_type=Uint256)


class ShareAllowance(SQLModel, table=True):
    __tablename__ = "share_allowances"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    liquid_id: uuid.UUID = Field(foreign_key="liquids.id", index=True)
    owner: str = Field(index=True)
    spender: str
    amount: int = Field(default=0, sa_type=Uint256)


class Strategy(SQLModel, table=True):
    __tablename__ = "strategies"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    liquid_id: uuid.UUID = Field(foreign_key="liquids.id", index=True)
    position: int
    target: str
    # hex encoded, 0x-prefixed
    mask: str
    restrict: str
    description: str = ""
