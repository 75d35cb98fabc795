from datetime import datetime, timezone
import uuid

from sqlmodel import Field, SQLModel


class RoleMember(SQLModel, table=True):
    __tablename__ = "role_members"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    # address of the component the role is scoped to
    contract: str = Field(index=True)
    role: str = Field(index=True)
    account: str = Field(index=True)
    granted_at: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))
