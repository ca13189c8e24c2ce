# coinbot/core/db/base.py
from __future__ import annotations
import logging, os, sqlite3, threading
from contextlib import contextmanager

from coinbot.core.config import settings
from coinbot.core.errors import InternalFailure

log = logging.getLogger(__name__)

DB_PATH = os.path.join(os.path.abspath(settings.data_dir), settings.db_file)

_tls = threading.local()

def _connect(path: str) -> sqlite3.Connection:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    con = sqlite3.connect(path, check_same_thread=False, isolation_level=None, timeout=5.0)
    con.row_factory = sqlite3.Row
    for pragma in ("journal_mode=WAL", "foreign_keys=ON", "synchronous=NORMAL", "busy_timeout=5000"):
        con.execute(f"PRAGMA {pragma};")
    log.debug("Connexion SQLite ouverte: %s (%s)", path, threading.current_thread().name)
    return con

def get_conn() -> sqlite3.Connection:
    # une connexion par thread, rouverte si le fichier courant a changé
    con = getattr(_tls, "con", None)
    if con is not None and getattr(_tls, "path", None) != DB_PATH:
        close_conn()
        con = None
    if con is None:
        con = _connect(DB_PATH)
        _tls.con, _tls.path = con, DB_PATH
    return con

def close_conn() -> None:
    con = getattr(_tls, "con", None)
    if con is not None:
        con.close()
    _tls.con = _tls.path = None

def use_database(path: str) -> None:
    """Bascule le fichier DB (tests, outils). Ferme la connexion du thread courant."""
    global DB_PATH
    close_conn()
    DB_PATH = os.path.abspath(path)

@contextmanager
def atomic(con=None, immediate=True):
    # Déjà dans une transaction: on la rejoint, le commit/rollback reste à l'appelant.
    con = con or get_conn()
    if con.in_transaction:
        yield con
        return
    # IMMEDIATE = verrou d'écriture pris dès le BEGIN, donc lecture→écriture sérialisée
    con.execute("BEGIN IMMEDIATE;" if immediate else "BEGIN;")
    try:
        yield con
        con.execute("COMMIT;")
    except BaseException:
        con.execute("ROLLBACK;")
        raise

def run_in_transaction(fn, *args, **kwargs):
    """Exécute ``fn(con, *args, **kwargs)`` dans une seule transaction.

    Les refus métier remontent tels quels; une erreur sqlite, ou un entier
    hors de l'INTEGER 64 bits de SQLite, devient ``InternalFailure`` (après rollback).
    """
    try:
        with atomic() as con:
            return fn(con, *args, **kwargs)
    except (sqlite3.Error, OverflowError) as e:
        log.exception("Transaction %s annulée", getattr(fn, "__name__", fn))
        raise InternalFailure(str(e)) from e

def current_db_path() -> str:
    return DB_PATH
