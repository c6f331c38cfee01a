"""Unit tests for src/db/database.py"""

from unittest.mock import patch

from sqlalchemy.orm import Session

from src.db import database


def test_get_db_yields_and_closes_a_session() -> None:
    generator = database.get_db()
    session = next(generator)
    assert isinstance(session, Session)

    with patch.object(session, "close") as close:
        generator.close()
    close.assert_called_once()


def test_init_db_configures_logging_and_creates_tables() -> None:
    with (
        patch.object(database, "configure_logging") as configure_logging,
        patch.object(database.Base.metadata, "create_all") as create_all,
    ):
        database.init_db()
    configure_logging.assert_called_once_with(database.settings.log_level)
    create_all.assert_called_once_with(bind=database.engine)
