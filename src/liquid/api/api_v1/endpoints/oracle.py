from fastapi import APIRouter

from liquid import schemas
from liquid.api.api_v1.deps import CallerDep, ContractsDep
from liquid.core.constants import STANDARD_ASSET

router = APIRouter()


@router.get("", response_model=schemas.OracleInfo)
async def get_oracle(contracts: ContractsDep):
    oracle = contracts.oracle
    return schemas.OracleInfo(
        standard_asset=STANDARD_ASSET,
        supported_assets=oracle.get_supported_assets(),
        minimum_update_interval=oracle.minimum_update_interval,
        last_price_update=oracle.last_price_update,
    )


@router.post("/assets", response_model=list[str])
async def add_supported_asset(body: schemas.AssetRequest, contracts: ContractsDep, caller: CallerDep):
    contracts.oracle.add_supported_asset(caller, body.asset)
    return contracts.oracle.get_supported_assets()


@router.delete("/assets/{asset}", response_model=list[str])
async def remove_supported_asset(asset: str, contracts: ContractsDep, caller: CallerDep):
    contracts.oracle.remove_supported_asset(caller, asset)
    return contracts.oracle.get_supported_assets()


@router.get("/prices", response_model=schemas.Prices)
async def get_prices(contracts: ContractsDep):
    oracle = contracts.oracle
    return schemas.Prices(
        assets=oracle.get_supported_assets() + [STANDARD_ASSET],
        prices=oracle.fetch_assets_prices_all(),
        share_prices=oracle.fetch_share_prices_all(),
    )


@router.post("/prices", response_model=schemas.Prices)
async def update_prices(body: schemas.PricesUpdate, contracts: ContractsDep, caller: CallerDep):
    contracts.oracle.update_prices(caller, body.prices)
    return await get_prices(contracts)


@router.get("/share-standard-price", response_model=schemas.SharePrice)
async def fetch_share_standard_price(contracts: ContractsDep):
    return schemas.SharePrice(standard_price=contracts.oracle.fetch_share_standard_price())


@router.get("/asset-to-share", response_model=schemas.Conversion)
async def asset_to_share(asset: str, amount: int, contracts: ContractsDep):
    return schemas.Conversion(
        asset=asset, amount=amount, result=contracts.oracle.asset_to_share(asset, amount)
    )


@router.get("/share-to-asset", response_model=schemas.Conversion)
async def share_to_asset(asset: str, shares: int, contracts: ContractsDep):
    return schemas.Conversion(
        asset=asset, amount=shares, result=contracts.oracle.share_to_asset(asset, shares)
    )


@router.post("/price-updaters", response_model=bool)
async def set_price_updater(body: schemas.RoleUpdate, contracts: ContractsDep, caller: CallerDep):
    return contracts.oracle.set_price_updater(caller, body.account, body.enabled)


@router.post("/asset-managers", response_model=bool)
async def set_asset_manager(body: schemas.RoleUpdate, contracts: ContractsDep, caller: CallerDep):
    return contracts.oracle.set_asset_manager(caller, body.account, body.enabled)


@router.post("/minimum-update-interval", response_model=schemas.OracleInfo)
async def set_minimum_update_interval(
    body: schemas.IntervalUpdate, contracts: ContractsDep, caller: CallerDep
):
    contracts.oracle.set_minimum_update_interval(caller, body.interval)
    return await get_oracle(contracts)
