"""Shared fixtures: a file-backed SQLite store and an ASGI test client."""

from datetime import datetime, timedelta, timezone

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from app.db.base import get_session_factory, init_models
from app.main import app
from app.models.customer import Customer
from app.models.order import Order, OrderStatus

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_models(engine)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


async def seed(session_factory, order_counts: dict[int, int], statuses=None, orphan_orders: int = 0):
    """Insert one customer per key with the given number of orders.

    Order ids are allocated sequentially and every order is one minute newer than
    the previous one. ``orphan_orders`` adds orders pointing at a missing customer.
    """
    statuses = statuses or list(OrderStatus)
    next_order_id = 1
    async with session_factory() as session:
        for customer_id, count in order_counts.items():
            session.add(
                Customer(
                    id=customer_id,
                    first_name=f"First{customer_id}",
                    last_name=f"Last{customer_id}",
                    email=f"customer{customer_id}@example.com",
                    gender="F",
                    created_at=BASE_TIME,
                )
            )
            for _ in range(count):
                session.add(
                    Order(
                        order_id=next_order_id,
                        user_id=customer_id,
                        status=statuses[next_order_id % len(statuses)],
                        num_of_item=1,
                        created_at=BASE_TIME + timedelta(minutes=next_order_id),
                    )
                )
                next_order_id += 1
        for _ in range(orphan_orders):
            session.add(
                Order(
                    order_id=next_order_id,
                    user_id=999_999,
                    status=OrderStatus.PENDING,
                    num_of_item=2,
                    created_at=BASE_TIME + timedelta(minutes=next_order_id),
                )
            )
            next_order_id += 1
        await session.commit()


@pytest_asyncio.fixture
async def client(session_factory):
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def scenario_counts():
    """Three customers with order counts [0, 3, 0]."""
    return {1: 0, 2: 3, 3: 0}


@pytest.fixture
def seed_store(session_factory):
    async def _seed(order_counts: dict[int, int], **kwargs):
        await seed(session_factory, order_counts, **kwargs)

    return _seed
