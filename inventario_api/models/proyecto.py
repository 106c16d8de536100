from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from inventario_api.db.base import Base, generar_uuid
from inventario_api.utils.fechas import FechaHelper


class Proyecto(Base):
    __tablename__ = "proyectos"

    id = Column(String(36), primary_key=True, default=generar_uuid)
    cod_proyecto = Column(String(50), nullable=False, unique=True, index=True)
    empresa = Column(String(255), nullable=False)
    razon_social = Column(String(255), nullable=True)
    situacion = Column(String(50), nullable=True)
    creado_en = Column(DateTime(timezone=True), default=FechaHelper.ahora_utc, server_default=func.now())

    sucursales = relationship("Sucursal", back_populates="proyecto", lazy="select")
    usuarios = relationship("Usuario", back_populates="proyecto", lazy="select")

    def __repr__(self) -> str:
        return f"<Proyecto(cod_proyecto={self.cod_proyecto}, empresa={self.empresa})>"
