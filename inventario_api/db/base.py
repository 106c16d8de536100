# inventario_api/db/base.py
import uuid

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def generar_uuid() -> str:
    """Default de claves primarias: UUID4 como texto (portable PostgreSQL/SQLite)."""
    return str(uuid.uuid4())
