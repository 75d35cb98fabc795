from pydantic import BaseModel


class FeeSplitterInfo(BaseModel):
    vanilla_to: str
    third_party_to: str | None = None
    third_party_ratio: int


class ReceiverUpdate(BaseModel):
    receiver: str


class RatioUpdate(BaseModel):
    ratio: int
