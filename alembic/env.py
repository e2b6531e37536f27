"""
Alembic Environment

Migrations for the BookStore schema (authors, books, users).

The database URL comes from app.config (DATABASE_URL), never from
alembic.ini, so migrations always target the same database as the API.

SQLite (local development) cannot ALTER most constraints in place;
render_as_batch makes autogenerate emit batch operations that copy the
table instead. PostgreSQL ignores the flag.

COMMANDS:
- alembic upgrade head                           # Apply all migrations
- alembic revision --autogenerate -m "message"  # Create migration from models
- alembic upgrade head --sql                     # Print SQL without connecting
"""

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

from app.config import get_settings
from app.database import Base
from app.models import Author, Book, User  # noqa: F401 - registers tables on Base.metadata

config = context.config
database_url = get_settings().database_url
config.set_main_option("sqlalchemy.url", database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# Options shared by offline and online runs
configure_options = {
    "target_metadata": target_metadata,
    "compare_type": True,
    "render_as_batch": database_url.startswith("sqlite"),
}


def run_migrations_offline() -> None:
    """Emit migration SQL to stdout (alembic ... --sql)."""
    context.configure(
        url=database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **configure_options,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations over a live, unpooled connection."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, **configure_options)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
