from typing import List

from fastapi import APIRouter

from liquid import schemas
from liquid.api.api_v1.deps import CallerDep, ContractsDep
from liquid.utils.bytes_bitwise import to_hex

router = APIRouter()


def _strategy(index: int, strategy) -> schemas.Strategy:
    return schemas.Strategy(
        index=index,
        target=strategy.target,
        mask=strategy.mask,
        restrict=strategy.restrict,
        description=strategy.description,
    )


@router.get("", response_model=schemas.VaultInfo)
async def get_vault(contracts: ContractsDep):
    vault = contracts.vault
    return schemas.VaultInfo(
        name=vault.name,
        symbol=vault.symbol,
        decimals=vault.decimals,
        total_supply=vault.total_supply(),
        cashier=vault.cashier,
        fee_splitter=vault.fee_splitter,
    )


@router.get("/balances/{holder}", response_model=schemas.ShareBalance)
async def balance_of(holder: str, contracts: ContractsDep):
    return schemas.ShareBalance(holder=holder, balance=contracts.vault.balance_of(holder))


@router.post("/transfer", response_model=schemas.ShareBalance)
async def transfer(body: schemas.ShareTransfer, contracts: ContractsDep, caller: CallerDep):
    contracts.vault.transfer(caller, body.to, body.amount)
    return schemas.ShareBalance(holder=caller, balance=contracts.vault.balance_of(caller))


@router.get("/assets/{asset}", response_model=schemas.AssetBalance)
async def asset_balance(asset: str, contracts: ContractsDep):
    return schemas.AssetBalance(asset=asset, balance=contracts.vault.asset_balance(asset))


@router.post("/liquidity/deposit", response_model=schemas.AssetBalance)
async def deposit_liquidity_directly(
    body: schemas.LiquidityMove, contracts: ContractsDep, caller: CallerDep
):
    contracts.vault.deposit_liquidity_directly(caller, body.asset, body.amount)
    return await asset_balance(body.asset, contracts)


@router.post("/liquidity/withdraw", response_model=schemas.AssetBalance)
async def withdraw_liquidity_directly(
    body: schemas.LiquidityMove, contracts: ContractsDep, caller: CallerDep
):
    contracts.vault.withdraw_liquidity_directly(caller, body.asset, body.amount)
    return await asset_balance(body.asset, contracts)


@router.post("/liquidity-managers", response_model=bool)
async def set_liquidity_manager(body: schemas.RoleUpdate, contracts: ContractsDep, caller: CallerDep):
    return contracts.vault.set_liquidity_manager(caller, body.account, body.enabled)


@router.get("/strategies", response_model=List[schemas.Strategy])
async def get_strategies(contracts: ContractsDep):
    vault = contracts.vault
    return [_strategy(i, vault.strategies(i)) for i in range(vault.strategies_length())]


@router.post("/strategies", response_model=schemas.Strategy)
async def add_strategy(body: schemas.StrategyCreate, contracts: ContractsDep, caller: CallerDep):
    strategy = contracts.vault.add_strategy(
        caller, body.target, body.mask, body.restrict, body.description
    )
    return _strategy(strategy.position, strategy)


@router.delete("/strategies/{strategy_index}", response_model=List[schemas.Strategy])
async def remove_strategy(strategy_index: int, contracts: ContractsDep, caller: CallerDep):
    contracts.vault.remove_strategy(caller, strategy_index)
    return await get_strategies(contracts)


@router.post("/strategies/{strategy_index}/execute", response_model=schemas.StrategyResult)
async def execute_strategy(
    strategy_index: int, body: schemas.StrategyExecute, contracts: ContractsDep, caller: CallerDep
):
    result = contracts.vault.execute_strategy(caller, strategy_index, body.data)
    return schemas.StrategyResult(index=strategy_index, result=to_hex(result))
