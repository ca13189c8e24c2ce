# coinbot/core/app.py
from __future__ import annotations
import asyncio, logging

from .config import settings
from .db.base import get_conn, current_db_path
from .db.migrations import migrate_if_needed
from .housekeeping import Housekeeper

log = logging.getLogger("coinbot")

def init_db() -> int:
    return migrate_if_needed(get_conn())

async def _serve():
    task = Housekeeper.start()
    try:
        await task
    finally:
        Housekeeper.stop()

def run():
    logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(message)s")

    # 1) Migrations au boot
    ver = init_db()
    log.info("DB prête: %s (schéma v%d)", current_db_path(), ver)

    # 2) Ménage périodique; le moteur lui-même est appelé par la couche commandes
    try:
        asyncio.run(_serve())
    except KeyboardInterrupt:
        log.info("Arrêt demandé")
