from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from inventario_api.db.base import Base, generar_uuid
from inventario_api.utils.fechas import FechaHelper


class Area(Base):
    __tablename__ = "areas"

    id = Column(String(36), primary_key=True, default=generar_uuid)
    sucursal_id = Column(String(36), ForeignKey("sucursales.id", ondelete="CASCADE"), nullable=False, index=True)
    # "{cod_sucursal}-{n}"
    cod_area = Column(String(100), nullable=False, unique=True, index=True)
    area = Column(String(255), nullable=False)
    creado_en = Column(DateTime(timezone=True), default=FechaHelper.ahora_utc, server_default=func.now())

    sucursal = relationship("Sucursal", back_populates="areas", lazy="joined")
    responsables = relationship("Responsable", back_populates="area_rel", lazy="select")
