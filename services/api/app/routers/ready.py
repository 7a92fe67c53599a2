import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.deps import get_db
from app.infra.redis_client import get_redis

router = APIRouter()
logger = logging.getLogger("pantryplan.ready")


@router.get("/ready")
async def ready(db: Session = Depends(get_db)):
    db_ok = False
    try:
        db.execute(text("SELECT 1"))
        db_ok = True
    except SQLAlchemyError as e:
        logger.warning("Database not ready: %s", e)

    redis_ok = False
    try:
        r = await get_redis()
        await r.ping()
        redis_ok = True
    except Exception as e:
        logger.warning("Redis not ready: %s", e)
    return {"ok": db_ok, "db_ok": db_ok, "redis_ok": redis_ok}
