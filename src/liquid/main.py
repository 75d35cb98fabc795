import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from liquid.api.api_v1.api import api_router
from liquid.core.config import settings
from liquid.core.exceptions import LiquidError

logger = logging.getLogger(__name__)

STATUS_BY_CATEGORY = {
    "authorization": 403,
    "validation": 400,
    "timing": 409,
    "paused": 409,
    "liquidity": 422,
}

app = FastAPI(
    title=settings.PROJECT_NAME, openapi_url=f"{settings.API_V1_STR}/openapi.json"
)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:4000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(LiquidError)
async def liquid_exception_handler(request: Request, exc: LiquidError):
    return JSONResponse(
        status_code=STATUS_BY_CATEGORY.get(exc.category, 400),
        content={"error": exc.category, "reason": exc.reason},
    )


@app.exception_handler(Exception)
async def exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": str(exc)},
    )


app.include_router(api_router, prefix=settings.API_V1_STR)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8001)
