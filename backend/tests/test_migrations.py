"""Tests that the Alembic schema matches the ORM models."""

import importlib.util
from pathlib import Path

import pytest
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool

from kiosk_menu.db.base import Base
from kiosk_menu.models import *  # noqa: F401,F403

VERSIONS_DIR = Path(__file__).resolve().parents[1] / "alembic" / "versions"


def _load_revision(filename):
    spec = importlib.util.spec_from_file_location(filename[:-3], VERSIONS_DIR / filename)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


def _run(engine, step):
    with engine.begin() as conn:
        ctx = MigrationContext.configure(conn)
        with Operations.context(ctx):
            step()


REVISIONS = ["001_kiosk_menu_schema.py", "002_product_option_groups.py"]


class TestMigrations:
    def test_revisions_form_a_chain(self):
        modules = [_load_revision(name) for name in REVISIONS]
        assert modules[0].down_revision is None
        for previous, current in zip(modules, modules[1:]):
            assert current.down_revision == previous.revision

    def test_upgrade_matches_models(self, engine):
        for name in REVISIONS:
            _run(engine, _load_revision(name).upgrade)

        inspector = inspect(engine)
        assert set(inspector.get_table_names()) == set(Base.metadata.tables)
        for name, table in Base.metadata.tables.items():
            migrated = {col["name"] for col in inspector.get_columns(name)}
            assert migrated == {col.name for col in table.columns}, name

    def test_downgrade_drops_everything(self, engine):
        modules = [_load_revision(name) for name in REVISIONS]
        for module in modules:
            _run(engine, module.upgrade)
        for module in reversed(modules):
            _run(engine, module.downgrade)

        assert inspect(engine).get_table_names() == []

    def test_option_tables_are_added_by_second_revision(self, engine):
        _run(engine, _load_revision(REVISIONS[0]).upgrade)
        assert "option_groups" not in inspect(engine).get_table_names()

        _run(engine, _load_revision(REVISIONS[1]).upgrade)
        assert {"option_groups", "option_choices", "product_option_groups"} <= set(
            inspect(engine).get_table_names()
        )
