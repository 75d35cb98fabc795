import logging
from typing import List

from sqlmodel import select

from liquid.core.constants import ORACLE, STANDARD_ASSET, STANDARD_DECIMALS
from liquid.core.db import transactional
from liquid.core.exceptions import TimingError, ValidationError
from liquid.models import OracleState, SupportedAsset
from liquid.services.access_control import ASSET_MANAGER_ROLE, PRICE_UPDATER_ROLE
from liquid.services.base import LiquidComponent
from liquid.utils import calculate_price
from liquid.utils.web3_utils import DEFAULT_ADMIN_ROLE, normalize_address

logger = logging.getLogger(__name__)


class LiquidOracle(LiquidComponent):
    """
    Prices of the supported assets against the vault share.

    A price is the number of share base units one asset base unit is worth,
    scaled by 1e36. The standard asset is always priced last.
    """

    component = ORACLE

    def __init__(self, session, liquid, clock, tokens):
        super().__init__(session, liquid, clock)
        self.tokens = tokens

    @property
    def state(self) -> OracleState:
        return self.session.get(OracleState, self.liquid.id)

    @property
    def minimum_update_interval(self) -> int:
        return self.state.minimum_update_interval

    @property
    def last_price_update(self) -> int:
        return self.state.last_price_update

    def _assets(self) -> List[SupportedAsset]:
        return self.session.exec(
            select(SupportedAsset)
            .where(SupportedAsset.liquid_id == self.liquid.id)
            .order_by(SupportedAsset.position.asc())
        ).all()

    def _asset(self, asset: str) -> SupportedAsset | None:
        return self.session.exec(
            select(SupportedAsset)
            .where(SupportedAsset.liquid_id == self.liquid.id)
            .where(SupportedAsset.address == asset)
        ).first()

    def get_supported_assets(self) -> List[str]:
        return [a.address for a in self._assets()]

    def get_supported_assets_num(self) -> int:
        return len(self._assets())

    def is_supported(self, asset: str) -> bool:
        return self._asset(normalize_address(asset)) is not None

    def asset_decimals(self, asset: str) -> int:
        asset = normalize_address(asset)
        if asset == STANDARD_ASSET:
            return STANDARD_DECIMALS
        record = self._asset(asset)
        if record is None:
            raise ValidationError("LIQUID_ORACLE: asset not found")
        return record.decimals

    @transactional
    def add_supported_asset(self, caller: str, asset: str) -> None:
        self.access.check_role(ASSET_MANAGER_ROLE, caller)
        asset = normalize_address(asset)
        if asset == STANDARD_ASSET or self._asset(asset) is not None:
            raise ValidationError("LIQUID_ORACLE: asset already exists")

        decimals = self.tokens.decimals(asset)
        position = self.get_supported_assets_num()
        self.session.add(
            SupportedAsset(
                liquid_id=self.liquid.id, address=asset, decimals=decimals, position=position
            )
        )
        self.emit("AssetAdded", asset=asset, decimals=decimals)

    @transactional
    def remove_supported_asset(self, caller: str, asset: str) -> None:
        self.access.check_role(ASSET_MANAGER_ROLE, caller)
        asset = normalize_address(asset)
        record = self._asset(asset)
        if record is None:
            raise ValidationError("LIQUID_ORACLE: asset not found")

        self.session.delete(record)
        self.session.flush()
        for position, remaining in enumerate(self._assets()):
            remaining.position = position
            self.session.add(remaining)
        self.emit("AssetRemoved", asset=asset)

    @transactional
    def update_prices(self, caller: str, prices: List[int]) -> None:
        self.access.check_role(PRICE_UPDATER_ROLE, caller)
        assets = self._assets()
        if len(prices) != len(assets) + 1:
            raise ValidationError("LIQUID_ORACLE: invalid input length")

        state = self.state
        now = self.clock.now()
        if state.last_price_update and now - state.last_price_update < state.minimum_update_interval:
            raise TimingError("LIQUID_ORACLE: update too frequently")
        if any(int(price) <= 0 for price in prices):
            raise ValidationError("LIQUID_ORACLE: invalid price")

        for record, price in zip(assets, prices):
            record.price = int(price)
            self.session.add(record)
        state.standard_price = int(prices[-1])
        state.last_price_update = now
        self.session.add(state)
        self.emit(
            "PricesUpdated",
            assets=[a.address for a in assets] + [STANDARD_ASSET],
            prices=[int(p) for p in prices],
        )

    @transactional
    def set_price_updater(self, caller: str, account: str, enabled: bool) -> bool:
        return self.access.set_role(caller, PRICE_UPDATER_ROLE, account, enabled)

    @transactional
    def set_asset_manager(self, caller: str, account: str, enabled: bool) -> bool:
        return self.access.set_role(caller, ASSET_MANAGER_ROLE, account, enabled)

    @transactional
    def set_minimum_update_interval(self, caller: str, interval: int) -> None:
        self.access.check_role(DEFAULT_ADMIN_ROLE, caller)
        if interval < 0:
            raise ValidationError("LIQUID_ORACLE: invalid interval")
        state = self.state
        state.minimum_update_interval = interval
        self.session.add(state)
        self.emit("MinimumUpdateIntervalSet", interval=interval)

    # Views

    def asset_price_to_share(self, asset: str) -> int:
        asset = normalize_address(asset)
        if asset == STANDARD_ASSET:
            price = self.state.standard_price
        else:
            record = self._asset(asset)
            if record is None:
                raise ValidationError("LIQUID_ORACLE: asset not found")
            price = record.price
        if not price:
            raise ValidationError("LIQUID_ORACLE: price not set")
        return price

    def share_price_to_asset(self, asset: str) -> int:
        return calculate_price.invert_price(self.asset_price_to_share(asset))

    def asset_to_share(self, asset: str, amount: int) -> int:
        return calculate_price.asset_to_share(amount, self.asset_price_to_share(asset))

    def share_to_asset(self, asset: str, shares: int) -> int:
        return calculate_price.share_to_asset(shares, self.asset_price_to_share(asset))

    def fetch_share_standard_price(self) -> int:
        """Share price in standard asset terms, 36 decimals."""
        return self.share_price_to_asset(STANDARD_ASSET)

    def fetch_assets_prices_all(self) -> List[int]:
        return [self.asset_price_to_share(a) for a in self.get_supported_assets()] + [
            self.asset_price_to_share(STANDARD_ASSET)
        ]

    def fetch_share_prices_all(self) -> List[int]:
        return [calculate_price.invert_price(p) for p in self.fetch_assets_prices_all()]

