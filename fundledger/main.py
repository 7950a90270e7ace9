"""Main application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from sqlalchemy.engine import Engine

from fundledger.api.errors import register_error_handlers
from fundledger.api.ledger import router as ledger_router
from fundledger.models import Base
from fundledger.services.config import get_app_config
from fundledger.services.logging import setup_server_logging
from fundledger.services.seeding import seed_defaults

logger = logging.getLogger(__name__)


def init_database(bind: Engine) -> None:
    """Create missing tables and seed default rows."""
    from sqlalchemy.orm import Session

    Base.metadata.create_all(bind)
    with Session(bind) as session:
        seed_defaults(session)
    logger.info("Database ready")


def create_app(init_db: bool = True) -> FastAPI:
    """Build the FastAPI application.

    Args:
        init_db: Create tables and seed defaults on startup
    """

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        if init_db:
            from fundledger.services import engine

            init_database(engine)
        yield

    app = FastAPI(title="Festa Fund Ledger", lifespan=lifespan)
    register_error_handlers(app)
    app.include_router(ledger_router)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


def main() -> None:
    """Run the API server with uvicorn."""
    load_dotenv()
    config = get_app_config()
    setup_server_logging(config.log_file, config.log_level)

    logger.info(f"Starting Uvicorn server on {config.host}:{config.port}...")
    uvicorn.run(create_app(), host=config.host, port=config.port, log_level="info")


if __name__ == "__main__":
    main()
