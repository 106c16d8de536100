# inventario_api/api/v1/routers/health.py
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from inventario_api.db.session import get_db

router = APIRouter(tags=["Health Check"])


@router.get("/health", summary="Estado del servicio y la base de datos")
def health(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"status": "healthy", "database": "ok"}
