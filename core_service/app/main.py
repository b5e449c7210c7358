# core_service/app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.database import CoreBase, core_engine
from shared.helpers.exception_handler import setup_exception_handlers
from shared.wrappers.request_logging_middleware import RequestTimingMiddleware
from .routers import categoryrouter, personrouter, productrouter, userrouter
from . import models  # noqa: F401  registers every table on CoreBase

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s]: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables
    CoreBase.metadata.create_all(bind=core_engine)
    logger.info("Catalog store ready")
    yield


# This MUST exist for uvicorn
app = FastAPI(title="Pettech Core Service", lifespan=lifespan)

origins = [
    "http://localhost:8080",
    "http://127.0.0.1:3030"
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestTimingMiddleware)

# Register exception handlers
setup_exception_handlers(app)

# Routers
app.include_router(userrouter.router)
app.include_router(personrouter.router)
app.include_router(categoryrouter.router)
app.include_router(productrouter.router)


@app.get("/health")
def health():
    return {"status": "healthy"}
