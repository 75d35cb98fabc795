from datetime import datetime, timezone

from sqlalchemy import JSON
from sqlmodel import Field, SQLModel


class LiquidEvent(SQLModel, table=True):
    __tablename__ = "liquid_events"

    id: int | None = Field(default=None, primary_key=True)
    contract: str = Field(index=True)
    name: str = Field(index=True)
    args: dict = Field(default_factory=dict, sa_type=JSON)
    block_timestamp: int
    created_on: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))
