from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from inventario_api.db.base import Base, generar_uuid
from inventario_api.utils.fechas import FechaHelper


class Responsable(Base):
    """Persona a cargo de los activos de un área."""

    __tablename__ = "responsables"

    id = Column(String(36), primary_key=True, default=generar_uuid)
    area_id = Column(String(36), ForeignKey("areas.id", ondelete="CASCADE"), nullable=False, index=True)
    # Código compuesto "{cod_area}-{n}"
    cod_responsable = Column(String(120), nullable=False, unique=True, index=True)
    nombre = Column(String(255), nullable=False)
    dni = Column(String(20), nullable=True)
    cargo = Column(String(150), nullable=True)
    creado_en = Column(DateTime(timezone=True), default=FechaHelper.ahora_utc, server_default=func.now())

    area_rel = relationship("Area", back_populates="responsables", lazy="joined")
