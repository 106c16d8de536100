# inventario_api/models/auditoria_ubicacion.py

from sqlalchemy import Column, String, Numeric, DateTime, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship
from inventario_api.db.base import Base, generar_uuid
from inventario_api.utils.fechas import FechaHelper


class RegistroAuditoriaUbicacion(Base):
    """
    Bitácora GPS de registros y correcciones de activos.

    Solo se insertan filas; la aplicación nunca las modifica ni elimina.
    """

    __tablename__ = "registro_auditoria_ubicacion"

    id = Column(String(36), primary_key=True, default=generar_uuid)
    inventario_nuevo_id = Column(
        String(36),
        ForeignKey("inventario_nuevo.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    user_id = Column(String(36), ForeignKey("usuarios.id", ondelete="RESTRICT"), nullable=False, index=True)
    lat = Column(Numeric(10, 7), nullable=False)
    lng = Column(Numeric(10, 7), nullable=False)
    # Resolución de microsegundos para ordenar eventos del mismo segundo
    timestamp = Column(DateTime, default=FechaHelper.ahora_utc, nullable=False)
    device_info = Column(JSON, nullable=True)

    inventario_nuevo = relationship("InventarioNuevo")
    usuario = relationship("Usuario", lazy="joined")

    __table_args__ = (
        Index("idx_auditoria_usuario_fecha", "user_id", "timestamp"),
    )
