from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from notifyhub.config import settings

engine = create_async_engine(settings.database_url, echo=settings.debug)
async_session = async_sessionmaker(engine, expire_on_commit=False)


async def get_db():
    async with async_session() as session:
        yield session
