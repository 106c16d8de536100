# inventario_api/models/inventario_nuevo.py
"""
Modelo InventarioNuevo - activos confirmados en campo.

Un registro nace de la conciliación contra el inventario histórico
(`inventario_origen_id` informado) o como sobrante (`inventario_origen_id`
nulo). Los códigos generados `cod_etiqueta` y `cod_af_inventario` son
únicos e inmutables.
"""


from sqlalchemy import Column, String, Text, Boolean, DateTime, Enum, ForeignKey, UniqueConstraint, Index
from sqlalchemy.sql import func, expression
from sqlalchemy.orm import relationship
from inventario_api.db.base import Base, generar_uuid
from inventario_api.utils.fechas import FechaHelper
from inventario_api.models.inventario import (
    TipoActivoFijo,
    ActivoEstado,
    RegistroInventario,
    valores_enum,
)


class InventarioNuevo(Base):
    __tablename__ = "inventario_nuevo"

    # ==================== PRIMARY KEY ====================
    id = Column(String(36), primary_key=True, default=generar_uuid)

    # ==================== UBICACIÓN ORGANIZACIONAL ====================
    cod_proyecto = Column(String(50), nullable=False, index=True)
    cod_sucursal = Column(String(80), nullable=False, index=True)
    cod_area = Column(String(100), nullable=False, index=True)

    # ==================== CÓDIGOS ====================
    cod_af_inventario = Column(String(30), nullable=False, comment="AF-YYYYMMDD-NNNN, generado")
    cod_patrimonial = Column(String(100), nullable=True, index=True)
    cod_etiqueta = Column(String(10), nullable=False, comment="YYMMDDNNNN, generado e inmutable")

    # ==================== DESCRIPCIÓN ====================
    descripcion = Column(Text, nullable=False)
    tipo_activo_fijo = Column(
        Enum(TipoActivoFijo, name="tipo_activo_fijo", values_callable=valores_enum, native_enum=False, length=60),
        nullable=False
    )
    estado = Column(
        Enum(ActivoEstado, name="activo_estado", values_callable=valores_enum, native_enum=False, length=60),
        nullable=True
    )
    cod_responsable = Column(String(120), nullable=False)
    compuesto = Column(Boolean, default=False, server_default=expression.false(), nullable=False)
    detalle_compuesto = Column(Text, nullable=True)
    observaciones = Column(Text, nullable=True)

    registro_inventario = Column(
        Enum(RegistroInventario, name="registro_inventario", values_callable=valores_enum, native_enum=False, length=60),
        nullable=False,
        default=RegistroInventario.AF_CONCILIADO
    )

    # ==================== TRAZABILIDAD ====================
    creado_por = Column(String(36), ForeignKey("usuarios.id", ondelete="RESTRICT"), nullable=False, index=True)
    inventario_origen_id = Column(
        String(36),
        ForeignKey("inventario.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
        comment="NULL = activo sobrante"
    )
    creado_en = Column(DateTime(timezone=True), default=FechaHelper.ahora_utc, server_default=func.now(), nullable=False)

    # ==================== RELACIONES ====================
    inventario_origen = relationship("Inventario", back_populates="inventarios_nuevos", lazy="joined")
    creador = relationship("Usuario", lazy="select")

    mobiliario = relationship(
        "Mobiliario",
        back_populates="inventario_nuevo",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin"
    )
    equipo_informatico = relationship(
        "EquipoInformatico",
        back_populates="inventario_nuevo",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin"
    )
    vehiculo = relationship(
        "Vehiculo",
        back_populates="inventario_nuevo",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin"
    )

    auditorias = relationship(
        "RegistroAuditoriaUbicacion",
        order_by="RegistroAuditoriaUbicacion.timestamp.desc()",
        lazy="select",
        viewonly=True
    )

    __table_args__ = (
        UniqueConstraint("cod_etiqueta", name="uq_inventario_nuevo_cod_etiqueta"),
        UniqueConstraint("cod_af_inventario", name="uq_inventario_nuevo_cod_af_inventario"),
        Index("idx_inventario_nuevo_proyecto_creado", "cod_proyecto", "creado_en"),
    )

    @property
    def datos_especificos(self):
        """Fila de atributos propia de la categoría del activo (o None)."""
        if self.tipo_activo_fijo == TipoActivoFijo.MOBILIARIO:
            return self.mobiliario
        if self.tipo_activo_fijo == TipoActivoFijo.EQUIPOS_INFORMATICOS:
            return self.equipo_informatico
        if self.tipo_activo_fijo == TipoActivoFijo.VEHICULOS:
            return self.vehiculo
        return None

    def __repr__(self) -> str:
        return f"<InventarioNuevo(id={self.id}, cod_etiqueta={self.cod_etiqueta}, tipo={self.tipo_activo_fijo})>"
