import uuid

from sqlmodel import Field, SQLModel


class FeeSplitterState(SQLModel, table=True):
    __tablename__ = "fee_splitter_state"

    liquid_id: uuid.UUID = Field(foreign_key="liquids.id", primary_key=True)
    vanilla_to: str
    third_party_to: str | None = None
    third_party_ratio: int = 0
