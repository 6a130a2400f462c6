"""Dependency injection: query services bound to the session factory."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.db.base import get_session_factory
from app.services.customer_query import CustomerQueryEngine
from app.services.order_query import OrderQueryService


def get_customer_engine(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> CustomerQueryEngine:
    return CustomerQueryEngine(session_factory)


def get_order_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> OrderQueryService:
    return OrderQueryService(session_factory)
