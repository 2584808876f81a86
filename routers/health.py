# routers/health.py
from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import APIRouter, HTTPException
from sqlalchemy import text
from sqlalchemy.engine import Connection

from alembic.config import Config
from alembic.script import ScriptDirectory
from db import engine

logger = logging.getLogger("mathbuddy.health")

router = APIRouter(prefix="/health", tags=["health"])

ALEMBIC_INI = os.getenv("ALEMBIC_CONFIG", "alembic.ini")


@router.get("/db")
def health_db():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("health_db_failed err=%s", type(e).__name__)
        raise HTTPException(status_code=500, detail=f"db_error: {type(e).__name__}: {e}")
    return {"ok": True}


def _alembic_heads() -> list[str]:
    script = ScriptDirectory.from_config(Config(ALEMBIC_INI))
    return list(script.get_heads())


def _db_revision(conn: Connection) -> Optional[str]:
    # a database built with create_all() has no alembic_version table
    try:
        return conn.execute(text("SELECT version_num FROM alembic_version")).scalar_one_or_none()
    except Exception:
        return None


@router.get("/migrations")
def health_migrations():
    heads: list[str] = []
    try:
        heads = _alembic_heads()
    except Exception as e:
        logger.warning("alembic_heads_unavailable ini=%s err=%s", ALEMBIC_INI, e)

    db_ver = None
    try:
        with engine.connect() as conn:
            db_ver = _db_revision(conn)
    except Exception as e:
        return {
            "ok": False,
            "error": f"db_connect_failed: {e}",
            "code_heads": heads,
            "db_version": db_ver,
        }

    synced = db_ver in heads if heads else False
    return {"ok": synced, "synced": synced, "db_version": db_ver, "code_heads": heads}
