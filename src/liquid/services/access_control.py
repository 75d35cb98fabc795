import logging
from typing import List

from sqlmodel import Session, select

from liquid.core.exceptions import AccessControlUnauthorizedAccount, ValidationError
from liquid.models import RoleMember
from liquid.services.events import emit_event
from liquid.utils.web3_utils import DEFAULT_ADMIN_ROLE, normalize_address, role_id

logger = logging.getLogger(__name__)

ASSET_MANAGER_ROLE = role_id("ASSET_MANAGER_ROLE")
PRICE_UPDATER_ROLE = role_id("PRICE_UPDATER_ROLE")
LIQUIDITY_MANAGER_ROLE = role_id("LIQUIDITY_MANAGER_ROLE")
FEE_MANAGER_ROLE = role_id("FEE_MANAGER_ROLE")
FEE_SPLIT_MANAGER_ROLE = role_id("FEE_SPLIT_MANAGER_ROLE")

ROLE_NAMES = {
    DEFAULT_ADMIN_ROLE: "DEFAULT_ADMIN_ROLE",
    ASSET_MANAGER_ROLE: "ASSET_MANAGER_ROLE",
    PRICE_UPDATER_ROLE: "PRICE_UPDATER_ROLE",
    LIQUIDITY_MANAGER_ROLE: "LIQUIDITY_MANAGER_ROLE",
    FEE_MANAGER_ROLE: "FEE_MANAGER_ROLE",
    FEE_SPLIT_MANAGER_ROLE: "FEE_SPLIT_MANAGER_ROLE",
}


class AccessControl:
    """
    Role membership scoped to one component address.

    Every role is administered by DEFAULT_ADMIN_ROLE.
    """

    def __init__(self, session: Session, contract: str, clock):
        self.session = session
        self.contract = contract
        self.clock = clock

    def _member(self, role: str, account: str) -> RoleMember | None:
        return self.session.exec(
            select(RoleMember)
            .where(RoleMember.contract == self.contract)
            .where(RoleMember.role == role)
            .where(RoleMember.account == account)
        ).first()

    def has_role(self, role: str, account: str) -> bool:
        return self._member(role, normalize_address(account)) is not None

    def check_role(self, role: str, account: str) -> None:
        account = normalize_address(account)
        if self._member(role, account) is None:
            logger.warning(
                "%s lacks %s on %s", account, ROLE_NAMES.get(role, role), self.contract
            )
            raise AccessControlUnauthorizedAccount(account, role)

    def members(self, role: str) -> List[str]:
        rows = self.session.exec(
            select(RoleMember)
            .where(RoleMember.contract == self.contract)
            .where(RoleMember.role == role)
        ).all()
        return [row.account for row in rows]

    def grant_role(self, caller: str, role: str, account: str) -> bool:
        self.check_role(DEFAULT_ADMIN_ROLE, caller)
        return self._grant_role(role, account, sender=caller)

    def revoke_role(self, caller: str, role: str, account: str) -> bool:
        self.check_role(DEFAULT_ADMIN_ROLE, caller)
        return self._revoke_role(role, account, sender=caller)

    def set_role(self, caller: str, role: str, account: str, enabled: bool) -> bool:
        if enabled:
            return self.grant_role(caller, role, account)
        return self.revoke_role(caller, role, account)

    def _grant_role(self, role: str, account: str, sender: str | None = None) -> bool:
        account = normalize_address(account)
        if self._member(role, account) is not None:
            return False
        self.session.add(RoleMember(contract=self.contract, role=role, account=account))
        emit_event(
            self.session, self.contract, "RoleGranted", self.clock.now(),
            role=role, account=account, sender=sender,
        )
        return True

    def _revoke_role(self, role: str, account: str, sender: str | None = None) -> bool:
        account = normalize_address(account)
        member = self._member(role, account)
        if member is None:
            return False
        self.session.delete(member)
        emit_event(
            self.session, self.contract, "RoleRevoked", self.clock.now(),
            role=role, account=account, sender=sender,
        )
        return True


def resolve_role(role: str) -> str:
    """Accept a role name such as ``PRICE_UPDATER_ROLE`` or a 32-byte role id."""
    for role_hash, name in ROLE_NAMES.items():
        if role in (name, role_hash):
            return role_hash
    raise ValidationError(f"unknown role {role}")
