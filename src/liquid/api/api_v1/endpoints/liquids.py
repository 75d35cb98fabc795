from typing import List

from fastapi import APIRouter, Query

from liquid import schemas
from liquid.api.api_v1.deps import ContractsDep, FactoryDep, SessionDep
from liquid.core.exceptions import ValidationError
from liquid.services.access_control import resolve_role
from liquid.services.events import get_events

router = APIRouter()


@router.get("/", response_model=List[schemas.Liquid])
async def get_all_liquids(factory: FactoryDep):
    return [schemas.Liquid.model_validate(liquid) for liquid in factory.list_liquids()]


@router.post("/", response_model=schemas.Liquid)
async def deploy_liquid(body: schemas.LiquidCreate, factory: FactoryDep):
    contracts = factory.deploy_liquid(body.name, body.symbol, body.owner)
    return schemas.Liquid.model_validate(contracts.liquid)


@router.get("/count", response_model=int)
async def get_liquids_num(factory: FactoryDep):
    return factory.get_liquids_num()


@router.get("/{index}", response_model=schemas.Liquid)
async def get_liquid(contracts: ContractsDep):
    return schemas.Liquid.model_validate(contracts.liquid)


@router.get("/{index}/events", response_model=List[schemas.Event])
async def get_liquid_events(
    contracts: ContractsDep,
    session: SessionDep,
    name: str | None = Query(None),
):
    liquid = contracts.liquid
    addresses = {
        liquid.oracle_address,
        liquid.vault_address,
        liquid.cashier_address,
        liquid.fee_splitter_address,
    }
    return [
        schemas.Event.model_validate(e)
        for e in get_events(session, name=name)
        if e.contract in addresses
    ]


@router.get("/{index}/roles/{component}/{role}/{account}", response_model=schemas.RoleMembership)
async def has_role(contracts: ContractsDep, component: str, role: str, account: str):
    components = {
        "oracle": contracts.oracle,
        "vault": contracts.vault,
        "cashier": contracts.cashier,
        "fee-splitter": contracts.fee_splitter,
    }
    if component not in components:
        raise ValidationError(f"unknown component {component}")
    target = components[component]
    role_hash = resolve_role(role)
    return schemas.RoleMembership(
        contract=target.address,
        role=role_hash,
        account=account,
        has_role=target.has_role(role_hash, account),
    )
