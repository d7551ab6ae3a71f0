"""
Alembic migration environment for the Reading List API.

The database URL comes from DATABASE_URL (application settings), never from
alembic.ini, so migrations always target the same database as the API.

Schema history:
    3f2a9c1d7b40  user, registration_key, book, reading_list,
                  reading_list_matrix and the lu_book_status lookup
                  (seeded with to-read / reading / finished)

Typical commands:
    alembic upgrade head                             # create or update the schema
    alembic upgrade head --sql > schema.sql          # offline: print the SQL
    alembic revision --autogenerate -m "message"     # after changing a model
    alembic downgrade -1
"""

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

from reading_list_api.config import get_settings
from reading_list_api.database import Base
import reading_list_api.models  # noqa: F401 - registers every table for autogenerate

settings = get_settings()

config = context.config
config.set_main_option("sqlalchemy.url", settings.database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def is_sqlite(url: str) -> bool:
    # SQLite cannot ALTER most constraints in place; batch mode recreates the table
    return url.startswith("sqlite")


def run_migrations_offline() -> None:
    """Emit the migration SQL to stdout instead of executing it."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        render_as_batch=is_sqlite(url),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply the migrations over a live connection."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=is_sqlite(str(connection.engine.url)),
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
