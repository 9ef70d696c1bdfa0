#!/usr/bin/env python3
"""
Database Reset Script
Drop and recreate every admission table in PostgreSQL

Notes:
- This script only resets the schema, it does not seed data
- To seed demo data, run `python -m script.seed_data`
"""

import asyncio

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import Base, create_db_and_tables, get_engine


async def drop_all_tables() -> None:
    # Registers every model on Base.metadata
    import src.service.admission.driven_adapter.model  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    print(f'   ✅ Dropped {len(Base.metadata.tables)} tables')


async def main() -> None:
    print('🔄 Starting database reset...')
    print(f'Database: {settings.POSTGRES_SERVER}:{settings.POSTGRES_PORT}/{settings.POSTGRES_DB}')
    print('=' * 50)

    try:
        print('🗑️ Dropping tables...')
        await drop_all_tables()

        print('🏗️ Creating tables...')
        await create_db_and_tables()
        print('   ✅ Tables created')

        print('=' * 50)
        print('✅ Database reset completed!')
        print('💡 To seed demo data, run: python -m script.seed_data')
    except Exception as e:
        print(f'❌ Reset failed: {e}')
        raise SystemExit(1)
    finally:
        await get_engine().dispose()


if __name__ == '__main__':
    asyncio.run(main())
