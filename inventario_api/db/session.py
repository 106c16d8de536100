# inventario_api/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from inventario_api.core.config import settings
from typing import Generator

engine = create_engine(settings.database_url, pool_pre_ping=True, future=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator:
    """
    Dependency que provee una sesión de base de datos.
    Se cierra automáticamente después de cada request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
