"""
Migration environment for the booking schema.

Migrations run over the synchronous DATABASE_URL_SYNC (psycopg2); the
application itself uses the asyncpg URL. ``alembic upgrade head --sql``
renders the DDL instead of applying it.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from hotel_booking import models  # noqa: F401
from hotel_booking.core.config import get_settings
from hotel_booking.db.base import Base

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)

DATABASE_URL = get_settings().DATABASE_URL_SYNC

# The CHECK constraints on rooms.occupied and the unique booking per user
# live in Base.metadata, so autogenerate sees them too.
MIGRATION_OPTIONS = {
    "target_metadata": Base.metadata,
    "compare_type": True,
}


def render_sql() -> None:
    context.configure(
        url=DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **MIGRATION_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def apply_to_database() -> None:
    engine = create_engine(DATABASE_URL, poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            context.configure(connection=connection, **MIGRATION_OPTIONS)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    render_sql()
else:
    apply_to_database()
