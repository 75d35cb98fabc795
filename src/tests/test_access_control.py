import pytest

from liquid.core.exceptions import AccessControlUnauthorizedAccount, ValidationError
from liquid.services.access_control import (
    ASSET_MANAGER_ROLE,
    PRICE_UPDATER_ROLE,
    resolve_role,
)
from liquid.services.events import get_events
from liquid.utils.web3_utils import DEFAULT_ADMIN_ROLE
from tests.helpers import OWNER, UPDATER, USER1


def test_owner_roles_after_deploy(contracts):
    for component in (contracts.oracle, contracts.vault, contracts.cashier, contracts.fee_splitter):
        assert component.is_admin(OWNER)
        assert not component.is_admin(USER1)
    assert contracts.oracle.has_role(ASSET_MANAGER_ROLE, OWNER)
    assert not contracts.vault.has_role(ASSET_MANAGER_ROLE, OWNER)


def test_grant_and_revoke(contracts, db_session):
    oracle = contracts.oracle
    assert oracle.grant_role(OWNER, PRICE_UPDATER_ROLE, UPDATER)
    # granting twice is a no-op
    assert not oracle.grant_role(OWNER, PRICE_UPDATER_ROLE, UPDATER)
    assert oracle.access.members(PRICE_UPDATER_ROLE) == [UPDATER]

    granted = get_events(db_session, oracle.address, "RoleGranted")[-1]
    assert granted.args == {"role": PRICE_UPDATER_ROLE, "account": UPDATER, "sender": OWNER}

    assert oracle.revoke_role(OWNER, PRICE_UPDATER_ROLE, UPDATER)
    assert not oracle.revoke_role(OWNER, PRICE_UPDATER_ROLE, UPDATER)
    assert not oracle.has_role(PRICE_UPDATER_ROLE, UPDATER)
    assert len(get_events(db_session, oracle.address, "RoleRevoked")) == 1


def test_only_admin_manages_roles(contracts):
    with pytest.raises(AccessControlUnauthorizedAccount) as excinfo:
        contracts.oracle.grant_role(USER1, PRICE_UPDATER_ROLE, USER1)
    assert excinfo.value.account == USER1
    assert excinfo.value.role == DEFAULT_ADMIN_ROLE
    assert not contracts.oracle.has_role(PRICE_UPDATER_ROLE, USER1)


def test_roles_are_scoped_per_component(contracts):
    contracts.vault.grant_role(OWNER, PRICE_UPDATER_ROLE, UPDATER)
    assert contracts.vault.has_role(PRICE_UPDATER_ROLE, UPDATER)
    assert not contracts.oracle.has_role(PRICE_UPDATER_ROLE, UPDATER)


def test_resolve_role():
    assert resolve_role("PRICE_UPDATER_ROLE") == PRICE_UPDATER_ROLE
    assert resolve_role(ASSET_MANAGER_ROLE) == ASSET_MANAGER_ROLE
    assert resolve_role("DEFAULT_ADMIN_ROLE") == DEFAULT_ADMIN_ROLE
    with pytest.raises(ValidationError, match="unknown role"):
        resolve_role("MINTER_ROLE")
