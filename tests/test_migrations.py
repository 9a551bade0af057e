"""
Alembic migrations build the same schema as the models.
"""
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from app.db.base import Base

ROOT = Path(__file__).resolve().parents[1]


def _upgrade(url):
    eng = create_engine(url)
    cfg = Config()
    cfg.set_main_option("script_location", str(ROOT / "alembic"))
    with eng.begin() as conn:
        cfg.attributes["connection"] = conn
        command.upgrade(cfg, "head")
    return eng


def test_upgrade_head_matches_models(tmp_path):
    eng = _upgrade(f"sqlite:///{tmp_path / 'migrated.db'}")
    insp = inspect(eng)

    tables = set(insp.get_table_names())
    assert set(Base.metadata.tables) <= tables
    assert "alembic_version" in tables

    for table in Base.metadata.sorted_tables:
        columns = {c["name"] for c in insp.get_columns(table.name)}
        assert columns == {c.name for c in table.columns}, table.name

        indexes = {ix["name"] for ix in insp.get_indexes(table.name)}
        assert indexes == {ix.name for ix in table.indexes}, table.name

        foreign = {fk["referred_table"] for fk in insp.get_foreign_keys(table.name)}
        assert foreign == {fk.column.table.name for fk in table.foreign_keys}, table.name

    eng.dispose()


def test_upgrade_is_rerunnable_on_existing_schema(tmp_path):
    url = f"sqlite:///{tmp_path / 'existing.db'}"
    eng = create_engine(url)
    Base.metadata.create_all(bind=eng)
    eng.dispose()

    eng = _upgrade(url)

    with eng.connect() as conn:
        version = conn.exec_driver_sql("SELECT version_num FROM alembic_version").scalar()
    assert version == "0001_initial_schema"
    eng.dispose()
