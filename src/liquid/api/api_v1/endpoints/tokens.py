from typing import List

from fastapi import APIRouter, HTTPException, status

from liquid import schemas
from liquid.api.api_v1.deps import CallerDep, TokensDep
from liquid.core.config import settings

router = APIRouter()


@router.get("/", response_model=List[schemas.Token])
async def get_all_tokens(tokens: TokensDep):
    return [schemas.Token.model_validate(t) for t in tokens.list_tokens()]


@router.post("/", response_model=schemas.Token)
async def register_token(body: schemas.TokenCreate, tokens: TokensDep):
    tokens.register_token(body.address, body.name, body.symbol, body.decimals)
    return schemas.Token.model_validate(tokens.get_token(body.address))


@router.get("/{token}/balances/{holder}", response_model=int)
async def balance_of(token: str, holder: str, tokens: TokensDep):
    return tokens.balance_of(token, holder)


@router.post("/{token}/mint", response_model=int)
async def mint(token: str, body: schemas.TokenAmount, tokens: TokensDep):
    # faucet for local and staging environments
    if settings.is_production:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Minting is disabled")
    tokens.mint(token, body.account, body.amount)
    return tokens.balance_of(token, body.account)


@router.post("/{token}/approve", response_model=int)
async def approve(token: str, body: schemas.TokenAmount, tokens: TokensDep, caller: CallerDep):
    tokens.approve(token, caller, body.account, body.amount)
    return tokens.allowance(token, caller, body.account)


@router.post("/{token}/transfer", response_model=int)
async def transfer(token: str, body: schemas.TokenAmount, tokens: TokensDep, caller: CallerDep):
    tokens.transfer(token, caller, body.account, body.amount)
    return tokens.balance_of(token, caller)
