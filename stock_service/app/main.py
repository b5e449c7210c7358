# stock_service/app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.helpers.exception_handler import setup_exception_handlers
from shared.wrappers.request_logging_middleware import RequestTimingMiddleware
from .core.database import stock_db
from .router import stock_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s]: %(message)s"
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # fails startup instead of the first request when Mongo is unreachable
    stock_db.connect()
    yield
    stock_db.close()


app = FastAPI(title="Pettech Stock Service", lifespan=lifespan)

origins = [
    "http://localhost:8080",
    "http://127.0.0.1:3000"
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

app.include_router(stock_router.router)


@app.get("/health")
def health():
    return {"status": "healthy" if stock_db.is_ready else "starting"}
