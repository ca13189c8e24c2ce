import logging

from . import v0001_base, v0002_ledger, v0003_idx

log = logging.getLogger(__name__)

def migrate_if_needed(con):
    (ver,) = con.execute("PRAGMA user_version").fetchone()
    ver = int(ver or 0)
    start = ver

    if ver < 1:
        v0001_base.apply(con); con.execute("PRAGMA user_version=1"); ver = 1
    if ver < 2:
        v0002_ledger.apply(con); con.execute("PRAGMA user_version=2"); ver = 2
    if ver < 3:
        v0003_idx.apply(con); con.execute("PRAGMA user_version=3"); ver = 3

    if ver != start:
        log.info("Schéma migré: v%d -> v%d", start, ver)
    return ver
