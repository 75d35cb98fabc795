from fastapi import APIRouter

from liquid.api.api_v1.endpoints import (
    cashier,
    fee_splitter,
    liquids,
    oracle,
    tokens,
    vault,
)

api_router = APIRouter()

api_router.include_router(
    liquids.router, prefix="/liquids", tags=["liquids"]
)
api_router.include_router(
    oracle.router, prefix="/liquids/{index}/oracle", tags=["oracle"]
)
api_router.include_router(
    vault.router, prefix="/liquids/{index}/vault", tags=["vault"]
)
api_router.include_router(
    cashier.router, prefix="/liquids/{index}/cashier", tags=["cashier"]
)
api_router.include_router(
    fee_splitter.router, prefix="/liquids/{index}/fee-splitter", tags=["fee-splitter"]
)
api_router.include_router(
    tokens.router, prefix="/tokens", tags=["tokens"]
)
api_router.redirect_slashes = False
