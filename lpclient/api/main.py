"""FastAPI application exposing the pool client's action set.

The service is meant to run on the user's machine next to their wallet;
it holds exactly one session in memory and persists nothing.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from lpclient.api.endpoints import router
from lpclient.client import get_default_client
from lpclient.commands import Connect
from lpclient.config import ClientConfig

logger = structlog.get_logger()

CONFIG = ClientConfig.from_env()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Connect the wallet once at startup when auto-connect is enabled."""
    if CONFIG.auto_connect:
        try:
            client = get_default_client()
        except Exception:
            logger.exception("client_setup_failed")
        else:
            result = await client.dispatch(Connect())
            logger.info(
                "auto_connect_finished", status=result.status.value, error=result.error_detail
            )
    yield


app = FastAPI(
    title="Liquidity Pool Client",
    description="Wallet session and transaction orchestration for a two-token liquidity pool",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok"}


def configure_logging(debug: bool) -> None:
    log_level = logging.DEBUG if debug else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )


def run() -> None:
    """Run the pool client API server.

    Configuration via LPCLIENT_* environment variables, see ClientConfig.from_env.
    """
    configure_logging(CONFIG.debug)
    uvicorn.run(
        "lpclient.api.main:app",
        host=CONFIG.host,
        port=CONFIG.port,
        reload=CONFIG.debug,
    )


if __name__ == "__main__":
    run()
