import logging

from liquid.core.constants import FEE_SPLITTER, RATE_DENOMINATOR
from liquid.core.db import transactional
from liquid.core.exceptions import ValidationError
from liquid.models import FeeSplitterState
from liquid.services.access_control import FEE_SPLIT_MANAGER_ROLE
from liquid.services.base import LiquidComponent
from liquid.utils.calculate_price import split_amount
from liquid.utils.web3_utils import normalize_address

logger = logging.getLogger(__name__)


class LiquidFeeSplitter(LiquidComponent):
    """
    Routes collected fees to the default receiver and the third party.

    The cashier passes, with every fee, the share of that fee category that is
    eligible for splitting. Of that share the third party receives
    ``third_party_ratio`` basis points.
    """

    component = FEE_SPLITTER

    def __init__(self, session, liquid, clock, vault):
        super().__init__(session, liquid, clock)
        self.vault = vault

    @property
    def state(self) -> FeeSplitterState:
        return self.session.get(FeeSplitterState, self.liquid.id)

    @property
    def vanilla_to(self) -> str:
        return self.state.vanilla_to

    @property
    def third_party_to(self) -> str | None:
        return self.state.third_party_to

    @property
    def third_party_ratio(self) -> int:
        return self.state.third_party_ratio

    @transactional
    def set_fee_split_manager(self, caller: str, account: str, enabled: bool) -> bool:
        return self.access.set_role(caller, FEE_SPLIT_MANAGER_ROLE, account, enabled)

    @transactional
    def set_vanilla_to(self, caller: str, receiver: str) -> None:
        self.access.check_role(FEE_SPLIT_MANAGER_ROLE, caller)
        state = self.state
        state.vanilla_to = normalize_address(receiver)
        self.session.add(state)
        self.emit("VanillaToSet", receiver=state.vanilla_to)

    @transactional
    def set_third_party_to(self, caller: str, receiver: str) -> None:
        self.access.check_role(FEE_SPLIT_MANAGER_ROLE, caller)
        state = self.state
        state.third_party_to = normalize_address(receiver)
        self.session.add(state)
        self.emit("ThirdPartyToSet", receiver=state.third_party_to)

    @transactional
    def set_third_party_ratio(self, caller: str, ratio: int) -> None:
        self.access.check_role(FEE_SPLIT_MANAGER_ROLE, caller)
        if not 0 <= ratio <= RATE_DENOMINATOR:
            raise ValidationError("LIQUID_FEE_SPLITTER: invalid ratio")
        state = self.state
        state.third_party_ratio = ratio
        self.session.add(state)
        self.emit("ThirdPartyRatioSet", ratio=ratio)

    def split(self, amount: int, category_ratio: int) -> tuple[int, int]:
        """Return the (default receiver, third party) parts of ``amount``."""
        state = self.state
        vanilla, third_party = split_amount(amount, category_ratio, state.third_party_ratio)
        if state.third_party_to is None:
            return vanilla + third_party, 0
        return vanilla, third_party

    def _only_cashier(self, caller: str) -> None:
        if normalize_address(caller) != self.vault.cashier:
            raise ValidationError("LIQUID_FEE_SPLITTER: caller is not the cashier")

    @transactional
    def distribute_asset(self, caller: str, asset: str, category: str, amount: int, category_ratio: int):
        """Pay an asset fee held by the vault out to the receivers."""
        self._only_cashier(caller)
        vanilla, third_party = self.split(amount, category_ratio)
        state = self.state
        if vanilla:
            self.vault.transfer_asset(self.address, asset, state.vanilla_to, vanilla)
        if third_party:
            self.vault.transfer_asset(self.address, asset, state.third_party_to, third_party)
        self.emit(
            "FeeDistributed",
            asset=normalize_address(asset),
            category=category,
            vanilla_amount=vanilla,
            third_party_amount=third_party,
        )
        return vanilla, third_party

    @transactional
    def distribute_shares(self, caller: str, category: str, amount: int, category_ratio: int):
        """Mint fee shares straight to the receivers."""
        self._only_cashier(caller)
        vanilla, third_party = self.split(amount, category_ratio)
        state = self.state
        if vanilla:
            self.vault.mint(self.address, state.vanilla_to, vanilla)
        if third_party:
            self.vault.mint(self.address, state.third_party_to, third_party)
        self.emit(
            "FeeSharesDistributed",
            category=category,
            vanilla_amount=vanilla,
            third_party_amount=third_party,
        )
        return vanilla, third_party
