import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from notifyhub.models import Base
from notifyhub.sources import SqlNotificationStore


@pytest_asyncio.fixture
async def db(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest.mark.asyncio
async def test_unknown_user_has_no_channel(db):
    store = SqlNotificationStore(db)

    assert await store.get_setting("nobody") is None
    assert await store.get_notification_mode("nobody") == {}


@pytest.mark.asyncio
async def test_set_then_get(db):
    store = SqlNotificationStore(db)
    info = {"type": "bark", "barkPush": "k"}

    setting = await store.set_notification_mode("alice", info)

    assert setting.user_id == "alice"
    assert setting.updated_at is not None
    assert await store.get_notification_mode("alice") == info


@pytest.mark.asyncio
async def test_set_replaces_existing(db):
    store = SqlNotificationStore(db)
    await store.set_notification_mode("alice", {"type": "bark", "barkPush": "k"})

    await store.set_notification_mode("alice", {"type": "lark", "fskey": "f"})

    assert await store.get_notification_mode("alice") == {"type": "lark", "fskey": "f"}
