from contextlib import asynccontextmanager
from fastapi import FastAPI
from sqlalchemy.orm import Session

from inventario_api.models import Base
from inventario_api.db.session import engine
from inventario_api.db.init_db import create_default_roles_and_admin
from inventario_api.utils.logger import logger
from inventario_api.core.config import settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Maneja startup/shutdown de la app.

    En desarrollo crea las tablas directamente; en otros entornos el esquema
    lo administra alembic.
    """
    logger.info(" Iniciando aplicación Inventario de Activos...")

    if settings.environment == "development":
        Base.metadata.create_all(bind=engine)

    session = Session(bind=engine)
    try:
        create_default_roles_and_admin(session)
    finally:
        session.close()

    yield

    # --- Shutdown ---
    engine.dispose()
    logger.info(" Aplicación detenida")
