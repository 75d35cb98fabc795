import uuid

from sqlmodel import Field, SQLModel

from .types import Uint256


class OracleState(SQLModel, table=True):
    __tablename__ = "oracle_state"

    liquid_id: uuid.UUID = Field(foreign_key="liquids.id", primary_key=True)
    standard_price: int = Field(default=0, sa_type=Uint256)
    last_price_update: int = 0
    minimum_update_interval: int


class SupportedAsset(SQLModel, table=True):
    __tablename__ = "supported_assets"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    liquid_id: uuid.UUID = Field(foreign_key="liquids.id", index=True)
    address: str = Field(index=True)
    decimals: int
    # registration order, price arrays are aligned on it
    position: int
    price: int = Field(default=0, sa_type=Uint256)
