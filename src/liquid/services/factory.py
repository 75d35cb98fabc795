import logging
from dataclasses import dataclass
from typing import List

from sqlalchemy import func
from sqlmodel import Session, select

from liquid.core.config import settings
from liquid.core.constants import CASHIER, DEFAULT_PARAMETERS, FEE_SPLITTER, ORACLE, VAULT
from liquid.core.db import transactional
from liquid.core.exceptions import ValidationError
from liquid.models import (
    CashierParameter,
    CashierState,
    FeeSplitterState,
    Liquid,
    OracleState,
    VaultState,
)
from liquid.services.access_control import ASSET_MANAGER_ROLE, AccessControl
from liquid.services.call_router import ExternalCallRouter
from liquid.services.cashier import LiquidCashier
from liquid.services.events import emit_event
from liquid.services.fee_splitter import LiquidFeeSplitter
from liquid.services.oracle import LiquidOracle
from liquid.services.token_ledger import TokenLedger
from liquid.services.vault import LiquidVault
from liquid.utils.web3_utils import DEFAULT_ADMIN_ROLE, derive_address, normalize_address

logger = logging.getLogger(__name__)

FACTORY_ADDRESS = derive_address("liquid", "factory")


@dataclass
class LiquidContracts:
    liquid: Liquid
    oracle: LiquidOracle
    vault: LiquidVault
    cashier: LiquidCashier
    fee_splitter: LiquidFeeSplitter


class LiquidFactory:
    """Deploys and looks up (vault, oracle, cashier, fee splitter) groups."""

    address = FACTORY_ADDRESS

    def __init__(self, session: Session, clock, tokens: TokenLedger | None = None, router=None):
        self.session = session
        self.clock = clock
        self.tokens = tokens or TokenLedger(session, clock)
        self.router = router or ExternalCallRouter(self.tokens)

    def get_liquids_num(self) -> int:
        return self.session.exec(select(func.count()).select_from(Liquid)).one()

    def liquids(self, index: int) -> Liquid:
        liquid = self.session.exec(select(Liquid).where(Liquid.index == index)).first()
        if liquid is None:
            raise ValidationError("LIQUID_FACTORY: invalid index")
        return liquid

    def list_liquids(self) -> List[Liquid]:
        return self.session.exec(select(Liquid).order_by(Liquid.index.asc())).all()

    def find_by_vault(self, vault: str) -> Liquid:
        liquid = self.session.exec(
            select(Liquid).where(Liquid.vault_address == normalize_address(vault))
        ).first()
        if liquid is None:
            raise ValidationError("LIQUID_FACTORY: liquid not found")
        return liquid

    def load(self, liquid: Liquid) -> LiquidContracts:
        oracle = LiquidOracle(self.session, liquid, self.clock, self.tokens)
        vault = LiquidVault(self.session, liquid, self.clock, self.tokens, self.router)
        fee_splitter = LiquidFeeSplitter(self.session, liquid, self.clock, vault)
        cashier = LiquidCashier(self.session, liquid, self.clock, oracle, vault, fee_splitter)
        return LiquidContracts(liquid, oracle, vault, cashier, fee_splitter)

    @transactional
    def deploy_liquid(self, name: str, symbol: str, owner: str) -> LiquidContracts:
        owner = normalize_address(owner)
        if not name or not symbol:
            raise ValidationError("LIQUID_FACTORY: invalid name")

        index = self.get_liquids_num()
        liquid = Liquid(
            index=index,
            name=name,
            symbol=symbol,
            owner=owner,
            **{
                f"{component}_address": derive_address(FACTORY_ADDRESS, index, component)
                for component in (ORACLE, VAULT, CASHIER, FEE_SPLITTER)
            },
        )
        self.session.add(liquid)
        self.session.flush()

        now = self.clock.now()
        self.session.add(
            OracleState(liquid_id=liquid.id, minimum_update_interval=settings.MINIMUM_UPDATE_INTERVAL)
        )
        self.session.add(VaultState(liquid_id=liquid.id, name=name, symbol=symbol))
        self.session.add(CashierState(liquid_id=liquid.id, last_collect_time=now))
        self.session.add(FeeSplitterState(liquid_id=liquid.id, vanilla_to=owner))
        for key, value in DEFAULT_PARAMETERS.items():
            self.session.add(CashierParameter(liquid_id=liquid.id, key=key, value=value))

        for address in (
            liquid.oracle_address,
            liquid.vault_address,
            liquid.cashier_address,
            liquid.fee_splitter_address,
        ):
            AccessControl(self.session, address, self.clock)._grant_role(DEFAULT_ADMIN_ROLE, owner)
        AccessControl(self.session, liquid.oracle_address, self.clock)._grant_role(
            ASSET_MANAGER_ROLE, owner
        )

        contracts = self.load(liquid)
        contracts.vault.set_cashier(owner, liquid.cashier_address)
        contracts.vault.set_fee_splitter(owner, liquid.fee_splitter_address)

        emit_event(
            self.session, self.address, "LiquidDeployed", now,
            index=index,
            owner=owner,
            vault=liquid.vault_address,
            oracle=liquid.oracle_address,
            cashier=liquid.cashier_address,
            fee_splitter=liquid.fee_splitter_address,
        )
        logger.info("Deployed liquid #%s %s (%s) for %s", index, name, symbol, owner)
        return contracts
