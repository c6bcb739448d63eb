from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlmodel import Session

from catalog_api.core.config import settings
from catalog_api.db.session import get_db

router = APIRouter()


@router.get("", response_model=dict[str, Any])
def health_check(db: Session = Depends(get_db)) -> Any:
    """
    Liveness and store reachability.

    A store failure propagates to the store error handler (503).
    """
    db.connection().execute(text("SELECT 1"))
    return {"status": "ok", "database": "ok", "version": settings.VERSION}
