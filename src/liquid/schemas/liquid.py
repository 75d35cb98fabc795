from datetime import datetime
import uuid

from pydantic import BaseModel, ConfigDict


class LiquidCreate(BaseModel):
    name: str
    symbol: str
    owner: str


# Properties to return to client
class Liquid(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    index: int
    name: str
    symbol: str
    owner: str
    vault_address: str
    oracle_address: str
    cashier_address: str
    fee_splitter_address: str
    created_at: datetime | None = None


class RoleUpdate(BaseModel):
    account: str
    enabled: bool = True


class RoleMembership(BaseModel):
    contract: str
    role: str
    account: str
    has_role: bool


class Event(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    contract: str
    name: str
    args: dict
    block_timestamp: int


class TokenCreate(BaseModel):
    address: str
    name: str
    symbol: str
    decimals: int


class Token(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    address: str
    name: str
    symbol: str
    decimals: int
    total_supply: int


class TokenAmount(BaseModel):
    # recipient for mints and transfers, spender for approvals
    account: str
    amount: int
