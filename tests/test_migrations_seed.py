import os
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, func, inspect, select
from sqlalchemy.orm import sessionmaker

from app.boudoir.core.config import settings
from app.boudoir.db.models import Category, User
from app.boudoir.db.seed import DEFAULT_CATEGORIES, run_seed


def _run_migrations(database_url: str):
    os.environ["DATABASE_URL"] = database_url
    config = Config("alembic.ini")
    config.set_main_option("sqlalchemy.url", database_url)
    command.upgrade(config, "head")


def test_migrations_apply(tmp_path: Path):
    db_path = tmp_path / "migrations.db"
    database_url = f"sqlite+pysqlite:///{db_path}"
    _run_migrations(database_url)

    engine = create_engine(database_url, future=True)
    inspector = inspect(engine)
    tables = set(inspector.get_table_names())

    for table in (
        "users",
        "categories",
        "articles",
        "payments",
        "favorites",
        "follows",
        "notifications",
        "moderation_logs",
        "user_activities",
        "reports",
    ):
        assert table in tables

    indexes = [index["name"] for index in inspector.get_indexes("articles")]
    assert "ix_articles_status_available" in indexes
    engine.dispose()


def test_seed_is_idempotent(tmp_path: Path):
    db_path = tmp_path / "seed.db"
    database_url = f"sqlite+pysqlite:///{db_path}"
    _run_migrations(database_url)

    engine = create_engine(database_url, future=True)
    SessionLocal = sessionmaker(bind=engine, future=True)

    with SessionLocal() as db:
        run_seed(db)
        run_seed(db)

        category_count = db.execute(select(func.count()).select_from(Category)).scalar_one()
        admins = db.execute(select(User).where(User.role == "ADMIN")).scalars().all()

    assert category_count == len(DEFAULT_CATEGORIES)
    assert len(admins) == 1
    assert admins[0].email == settings.ADMIN_EMAIL.lower()
    engine.dispose()
