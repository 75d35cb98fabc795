import uuid

from sqlmodel import Field, SQLModel

from .types import Uint256


class CashierState(SQLModel, table=True):
    __tablename__ = "cashier_state"

    liquid_id: uuid.UUID = Field(foreign_key="liquids.id", primary_key=True)
    paused: bool = False
    # share price in standard terms at the last fee collection
    high_water_mark: int = Field(default=0, sa_type=Uint256)
    last_collect_time: int


class CashierParameter(SQLModel, table=True):
    __tablename__ = "cashier_parameters"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    liquid_id: uuid.UUID = Field(foreign_key="liquids.id", index=True)
    key: str = Field(index=True)
    value: int = Field(sa_type=Uint256)


class DepositPosition(SQLModel, table=True):
    __tablename__ = "deposit_positions"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    liquid_id: uuid.UUID = Field(foreign_key="liquids.id", index=True)
    holder: str = Field(index=True)
    shares: int = Field(default=0, sa_type=Uint256)
    # share-weighted deposit time
    timestamp: int = 0
    # share-weighted entry share price, standard terms, 36 decimals
    standard_price: int = Field(default=0, sa_type=Uint256)


class PendingWithdrawal(SQLModel, table=True):
    __tablename__ = "pending_withdrawals"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    liquid_id: uuid.UUID = Field(foreign_key="liquids.id", index=True)
    holder: str = Field(index=True)
    shares: int = Field(sa_type=Uint256)
    timestamp: int
    asset: str
    asset_amount: int = Field(sa_type=Uint256)
    management_fee: int = Field(default=0, sa_type=Uint256)
    performance_fee: int = Field(default=0, sa_type=Uint256)
    exit_fee: int = Field(default=0, sa_type=Uint256)

    @property
    def fee_amount(self) -> int:
        return self.management_fee + self.performance_fee + self.exit_fee
