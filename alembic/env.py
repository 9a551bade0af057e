# alembic/env.py
import os
import sys
from logging.config import fileConfig

from alembic import context

# --- Make 'app.' imports work when running Alembic from the project root ---
cwd = os.getcwd()
if cwd not in sys.path:
    sys.path.insert(0, cwd)

# app settings load .env, so migrations hit the same DATABASE_URL as the API
from app.db.base import Base
from app.db.session import engine
from app import models  # noqa: F401  populates Base.metadata

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

config.set_main_option("sqlalchemy.url", engine.url.render_as_string(hide_password=False))

target_metadata = Base.metadata
IS_SQLITE = engine.url.get_backend_name() == "sqlite"


def include_object(object, name, type_, reflected, compare_to):
    # never autogenerate DROPs for tables/indexes that exist only in the database
    if type_ == "table" and name == "alembic_version":
        return False
    if reflected and compare_to is None:
        return type_ not in {"table", "index", "unique_constraint", "foreign_key"}
    return True


def skip_empty_revisions(context, revision, directives):
    if getattr(context.config.cmd_opts, "autogenerate", False) and directives[0].upgrade_ops.is_empty():
        directives[:] = []


OPTIONS = dict(
    target_metadata=target_metadata,
    compare_type=True,
    compare_server_default=True,
    include_object=include_object,
    render_as_batch=IS_SQLITE,  # SQLite has no real ALTER TABLE
    process_revision_directives=skip_empty_revisions,
)


def run_migrations_offline():
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_on(connection):
    context.configure(connection=connection, **OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    # callers (tests, scripts) may hand over an open connection
    connection = config.attributes.get("connection")
    if connection is not None:
        _run_on(connection)
        return
    with engine.connect() as connection:
        _run_on(connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
