# spool_inventory/core/db.py

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from spool_inventory.core.config import DATABASE_URL, DB_ECHO

# =====================================================
# BASE
# =====================================================
Base = declarative_base()

# =====================================================
# ENGINE
# =====================================================
engine = create_async_engine(
    DATABASE_URL,
    echo=DB_ECHO,
    future=True,
    connect_args={"check_same_thread": False},
)

# =====================================================
# SESSION
# =====================================================
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)

# =====================================================
# DEPENDENCY
# =====================================================
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session

# =====================================================
# MODEL IMPORT
# =====================================================
import spool_inventory.models  # noqa

# =====================================================
# AUTO CREATE TABLES
# =====================================================
async def init_models():
    # The store is client-owned; there is no migration tool, the single
    # table is created on first start in every environment.
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
