import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from staketracker.api.accounts import router as accounts_router
from staketracker.api.cashouts import router as cashouts_router
from staketracker.api.deps import require_api_key
from staketracker.api.leaderboard import router as leaderboard_router
from staketracker.config import settings
from staketracker.container import Container

logger = logging.getLogger("staketracker.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = Container()
    app.state.container = container
    yield
    await container.http_client().close()
    engine = container.engine()
    await engine.dispose()


app = FastAPI(title="StakeTracker", version="0.1.0", lifespan=lifespan)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    logger.error("Unhandled error on %s %s:\n%s", request.method, request.url.path, "".join(tb))
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

guarded = [Depends(require_api_key)]
app.include_router(cashouts_router, dependencies=guarded)
app.include_router(accounts_router, dependencies=guarded)
app.include_router(leaderboard_router, dependencies=guarded)


@app.get("/")
async def root():
    return {"ok": True, "service": "stake-tracker-api"}


@app.get("/health")
async def health():
    return {"ok": True}
