from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from biztime.core.db import get_db, ping

router = APIRouter()


@router.get("/health")
def health(db: Session = Depends(get_db)):
    if ping(db.get_bind()):
        return {"status": "ok", "database": "ok"}
    return JSONResponse(status_code=503, content={"status": "degraded", "database": "unavailable"})
