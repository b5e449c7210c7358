from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from shared.core.config import CORE_DATABASE_URL

CoreBase = declarative_base()

POOL_SIZE = 5
MAX_OVERFLOW = 5

# Catalog DB
core_engine = create_engine(
    CORE_DATABASE_URL,
    pool_pre_ping=True,
    pool_recycle=300,
    pool_size=POOL_SIZE,          # max idle connections
    max_overflow=MAX_OVERFLOW,      # max temporary extra connections
    pool_timeout=30       # wait time before failing
)
CoreSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=core_engine)


# Dependency


def get_core_db():
    db = CoreSessionLocal()
    try:
        yield db
    finally:
        db.close()
