"""
conftest.py - fixtures partagées

- une base SQLite neuve par test (tmp_path), migrée
- make_account: provisionne un compte et force ses champs
"""
import pytest

from coinbot.core.db import base
from coinbot.core.db.migrations import migrate_if_needed

from tests.helpers import make_account as _make_account


@pytest.fixture(autouse=True)
def db(tmp_path):
    base.use_database(str(tmp_path / "test.db"))
    con = base.get_conn()
    migrate_if_needed(con)
    yield con
    base.close_conn()


@pytest.fixture
def make_account():
    return _make_account
