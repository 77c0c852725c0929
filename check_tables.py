import asyncio
from sqlalchemy import inspect
from eventhub.core.config import get_settings
from eventhub.core.database import DatabaseSessionManager


async def list_tables():
    settings = get_settings()
    session_manager = DatabaseSessionManager(settings.DATABASE_URL)
    await session_manager.init(create_tables=False)
    try:
        async with session_manager.engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        print("✅ Tables in database:", tables)
    finally:
        await session_manager.close()

asyncio.run(list_tables())
