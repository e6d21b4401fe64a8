from logging.config import fileConfig

from alembic import context

from app import models  # noqa: F401  регистрирует таблицы в Base.metadata
from app.database import Base, engine

config = context.config

# При запуске из CLI настраиваем логирование по alembic.ini
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def _run(connection):
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        # SQLite не умеет ALTER большинства конструкций
        render_as_batch=connection.dialect.name == "sqlite",
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline():
    context.configure(
        url=str(engine.url),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    # apply_migrations передаёт уже открытое соединение
    connection = config.attributes.get("connection")
    if connection is not None:
        _run(connection)
        return

    with engine.connect() as connection:
        _run(connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
