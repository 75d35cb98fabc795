from sqlmodel import Session

from liquid.core.db import transactional
from liquid.models import Liquid
from liquid.services.access_control import AccessControl
from liquid.services.events import emit_event
from liquid.utils.web3_utils import DEFAULT_ADMIN_ROLE


class LiquidComponent:
    """Shared plumbing of the oracle, vault, cashier and fee splitter."""

    component = ""

    def __init__(self, session: Session, liquid: Liquid, clock):
        self.session = session
        self.liquid = liquid
        self.clock = clock
        self.access = AccessControl(session, self.address, clock)

    @property
    def address(self) -> str:
        return getattr(self.liquid, f"{self.component}_address")

    def emit(self, name: str, **args):
        return emit_event(self.session, self.address, name, self.clock.now(), **args)

    def has_role(self, role: str, account: str) -> bool:
        return self.access.has_role(role, account)

    @transactional
    def grant_role(self, caller: str, role: str, account: str) -> bool:
        return self.access.grant_role(caller, role, account)

    @transactional
    def revoke_role(self, caller: str, role: str, account: str) -> bool:
        return self.access.revoke_role(caller, role, account)

    def is_admin(self, account: str) -> bool:
        return self.access.has_role(DEFAULT_ADMIN_ROLE, account)
