#!/usr/bin/env python3
"""
Database Reset Script
Drop and recreate every booking engine table

Notes:
- This script only resets database structure, does not seed test data
- To seed test data, run `python -m script.seed_data`
"""

import asyncio

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import (
    Base,
    create_db_and_tables,
    dispose_engine,
    get_engine,
)


async def drop_all_tables() -> None:
    # Register every model on Base.metadata before drop_all
    import src.service.booking.driven_adapter.model  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    print(f'   ✅ Dropped tables: {", ".join(sorted(Base.metadata.tables))}')


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
        print('💡 To seed test data, run: python -m script.seed_data')
    except Exception as e:
        print(f'❌ Reset failed: {e}')
        raise SystemExit(1)
    finally:
        await dispose_engine()


if __name__ == '__main__':
    asyncio.run(main())
