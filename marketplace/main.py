# marketplace/main.py
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import uvicorn

from marketplace.api import ROUTERS
from marketplace.data.database import init_db, make_engine, make_session_factory
from marketplace.repos.database_storage import DatabaseStorage
from marketplace.repos.memory_storage import MemStorage
from marketplace.services.gemini_client import GeminiClient
from marketplace.services.paystack_client import PaystackClient
from marketplace.utils.logging import get_logger
from marketplace.utils.settings import DATABASE_URL, PAYSTACK_SECRET_KEY, SEED_DATA, STORAGE_BACKEND

logger = get_logger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # walidacja body/query => 400, zanim cokolwiek zostanie zapisane
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def _init_storage(app: FastAPI, backend: str, database_url: str | None = None) -> None:
    if backend == "memory":
        logger.info("Using in-memory storage (dev/test only, nothing is persisted)")
        app.state.memory_storage = MemStorage()
        app.state.session_factory = None
        app.state.engine = None
        return

    if backend != "database":
        raise ValueError(f"Unknown storage backend: {backend}")

    # engine dopiero tutaj, import modulu nie laczy sie z baza
    engine = make_engine(database_url or DATABASE_URL)

    logger.info("Initializing database tables")
    try:
        init_db(engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise

    app.state.memory_storage = None
    app.state.session_factory = make_session_factory(engine)
    app.state.engine = engine


def _seed(app: FastAPI) -> None:
    from marketplace.data.seed import seed_data

    if app.state.memory_storage is not None:
        seed_data(app.state.memory_storage)
        return

    db = app.state.session_factory()
    try:
        seed_data(DatabaseStorage(db))
    finally:
        db.close()


def create_app(
    storage_backend: str | None = None,
    seed: bool = SEED_DATA,
    database_url: str | None = None,
) -> FastAPI:
    app = FastAPI(
        title="Marketplace API",
        version="1.0.0",
    )

    _init_storage(app, storage_backend or STORAGE_BACKEND, database_url)
    app.state.ai_client = GeminiClient()
    # bez klucza Paystack dzialamy w trybie dev (lokalny redirect)
    app.state.payment_gateway = PaystackClient() if PAYSTACK_SECRET_KEY else None

    if seed:
        _seed(app)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include routers
    for router in ROUTERS:
        app.include_router(router)

    return app


if __name__ == "__main__":
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
