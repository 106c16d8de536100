from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from inventario_api.db.base import Base, generar_uuid
from inventario_api.utils.fechas import FechaHelper


class Sucursal(Base):
    __tablename__ = "sucursales"

    id = Column(String(36), primary_key=True, default=generar_uuid)
    proyecto_id = Column(String(36), ForeignKey("proyectos.id", ondelete="CASCADE"), nullable=False, index=True)
    # "{cod_proyecto}-{n}"
    cod_sucursal = Column(String(80), nullable=False, unique=True, index=True)
    nombre_sucursal = Column(String(255), nullable=False)
    departamento = Column(String(100), nullable=True)
    provincia = Column(String(100), nullable=True)
    distrito = Column(String(100), nullable=True)
    direccion = Column(String(500), nullable=True)
    creado_en = Column(DateTime(timezone=True), default=FechaHelper.ahora_utc, server_default=func.now())

    proyecto = relationship("Proyecto", back_populates="sucursales", lazy="joined")
    areas = relationship("Area", back_populates="sucursal", lazy="select")
