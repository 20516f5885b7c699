from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect


def _make_alembic_config(database_url: str) -> Config:
    """Return an Alembic config pointing at the repository migrations.

    Built without alembic.ini so its logging section does not replace the
    test logging configuration.
    """
    repo_root = Path(__file__).resolve().parents[2]
    cfg = Config()
    cfg.set_main_option("script_location", str(repo_root / "migrations"))
    cfg.attributes["database_url"] = database_url
    return cfg


def test_alembic_upgrade_and_downgrade_cycle(tmp_path) -> None:
    """Migrations upgrade base→head, create the constraint indexes and downgrade cleanly."""
    database_url = f"sqlite:///{tmp_path / 'registry.db'}"
    cfg = _make_alembic_config(database_url)

    command.upgrade(cfg, "head")
    engine = create_engine(database_url)
    try:
        inspector = inspect(engine)
        assert {"clients", "addresses", "phone_numbers", "email_addresses"} <= set(inspector.get_table_names())
        phone_indexes = {ix["name"]: ix for ix in inspector.get_indexes("phone_numbers")}
        assert phone_indexes["uq_phone_numbers_one_principal"]["unique"]
        email_indexes = {ix["name"] for ix in inspector.get_indexes("email_addresses")}
        assert "uq_email_addresses_one_principal" in email_indexes

        command.downgrade(cfg, "base")
        inspector = inspect(engine)
        assert "clients" not in inspector.get_table_names()

        command.upgrade(cfg, "head")
    finally:
        engine.dispose()
