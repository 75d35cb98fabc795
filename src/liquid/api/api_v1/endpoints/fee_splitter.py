from fastapi import APIRouter

from liquid import schemas
from liquid.api.api_v1.deps import CallerDep, ContractsDep

router = APIRouter()


@router.get("", response_model=schemas.FeeSplitterInfo)
async def get_fee_splitter(contracts: ContractsDep):
    splitter = contracts.fee_splitter
    return schemas.FeeSplitterInfo(
        vanilla_to=splitter.vanilla_to,
        third_party_to=splitter.third_party_to,
        third_party_ratio=splitter.third_party_ratio,
    )


@router.post("/fee-split-managers", response_model=bool)
async def set_fee_split_manager(body: schemas.RoleUpdate, contracts: ContractsDep, caller: CallerDep):
    return contracts.fee_splitter.set_fee_split_manager(caller, body.account, body.enabled)


@router.post("/vanilla-to", response_model=schemas.FeeSplitterInfo)
async def set_vanilla_to(body: schemas.ReceiverUpdate, contracts: ContractsDep, caller: CallerDep):
    contracts.fee_splitter.set_vanilla_to(caller, body.receiver)
    return await get_fee_splitter(contracts)


@router.post("/third-party-to", response_model=schemas.FeeSplitterInfo)
async def set_third_party_to(body: schemas.ReceiverUpdate, contracts: ContractsDep, caller: CallerDep):
    contracts.fee_splitter.set_third_party_to(caller, body.receiver)
    return await get_fee_splitter(contracts)


@router.post("/third-party-ratio", response_model=schemas.FeeSplitterInfo)
async def set_third_party_ratio(body: schemas.RatioUpdate, contracts: ContractsDep, caller: CallerDep):
    contracts.fee_splitter.set_third_party_ratio(caller, body.ratio)
    return await get_fee_splitter(contracts)
