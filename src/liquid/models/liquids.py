from datetime import datetime, timezone
import uuid

import sqlmodel


class LiquidBase(sqlmodel.SQLModel):
    name: str
    symbol: str
    owner: str
    vault_address: str = sqlmodel.Field(index=True)
    oracle_address: str = sqlmodel.Field(index=True)
    cashier_address: str = sqlmodel.Field(index=True)
    fee_splitter_address: str = sqlmodel.Field(index=True)


# One deployed (vault, oracle, cashier, fee splitter) group
class Liquid(LiquidBase, table=True):
    __tablename__ = "liquids"

    id: uuid.UUID = sqlmodel.Field(default_factory=uuid.uuid4, primary_key=True)
    index: int = sqlmodel.Field(index=True, unique=True)
    created_at: datetime = sqlmodel.Field(
        default_factory=lambda: datetime.now(tz=timezone.utc)
    )
