# inventario_api/models/inventario.py
"""
Modelo Inventario - inventario histórico importado.

Cada fila proviene de la carga inicial de la data legada. Después de la
importación solo cambian `encontrado` y `cod_af_inventario`, y únicamente
los modifica la conciliación al registrar un activo nuevo vinculado.
"""

import enum

from sqlalchemy import Column, String, Text, Date, Numeric, Boolean, DateTime, Enum, Index
from sqlalchemy.sql import func, expression
from sqlalchemy.orm import relationship
from inventario_api.db.base import Base, generar_uuid
from inventario_api.utils.fechas import FechaHelper


class TipoActivoFijo(str, enum.Enum):
    MOBILIARIO = "Mobiliario"
    EQUIPOS_INFORMATICOS = "Equipos Informaticos"
    VEHICULOS = "Vehiculos"


class ActivoEstado(str, enum.Enum):
    BUENO = "BUENO"
    REGULAR_BUENO = "REGULAR_BUENO"
    REGULAR_MALO = "REGULAR_MALO"
    MALO = "MALO"


class RegistroInventario(str, enum.Enum):
    AF_CONCILIADO = "AF Conciliado"
    NUEVO_AF = "Nuevo AF"
    AF_NO_ENCONTRADO = "AF con código patrimonial no encontrado en la data"
    AF_MAL_ESTADO = "AF con código patrimonial en mal estado"


class EstadoReporte(str, enum.Enum):
    FALTANTE = "FALTANTE"
    ENCONTRADO = "ENCONTRADO"


def valores_enum(enum_cls):
    """Persiste el `value` del enum (p. ej. "Equipos Informaticos") en lugar del nombre.

    Los enums viven en código; en base de datos las columnas son VARCHAR.
    """
    return [m.value for m in enum_cls]


class Inventario(Base):
    __tablename__ = "inventario"

    # ==================== PRIMARY KEY ====================
    id = Column(String(36), primary_key=True, default=generar_uuid)

    # ==================== UBICACIÓN ORGANIZACIONAL ====================
    cod_proyecto = Column(String(50), nullable=True, index=True)
    cod_sucursal = Column(String(80), nullable=True, index=True)
    cod_area = Column(String(100), nullable=True, index=True)

    # ==================== CÓDIGOS LEGADOS ====================
    cod_af = Column(String(100), nullable=True, comment="Código de activo fijo en la data legada")
    cod_patrimonial = Column(String(100), nullable=True, index=True)
    cod_etiqueta = Column(String(100), nullable=True, index=True, comment="Código de barras de la etiqueta legada")

    # ==================== DESCRIPCIÓN ====================
    descripcion = Column(Text, nullable=False)
    tipo_activo_fijo = Column(
        Enum(TipoActivoFijo, name="tipo_activo_fijo", values_callable=valores_enum, native_enum=False, length=60),
        nullable=True
    )
    material = Column(String(100), nullable=True)
    marca = Column(String(100), nullable=True)
    modelo = Column(String(100), nullable=True)
    serie = Column(String(100), nullable=True)
    color = Column(String(50), nullable=True)
    largo = Column(Numeric(10, 2), nullable=True)
    ancho = Column(Numeric(10, 2), nullable=True)
    profundo = Column(Numeric(10, 2), nullable=True)
    pulgadas = Column(Numeric(10, 2), nullable=True)
    estado = Column(
        Enum(ActivoEstado, name="activo_estado", values_callable=valores_enum, native_enum=False, length=60),
        nullable=True
    )
    cod_responsable = Column(String(120), nullable=True)
    ubicacion = Column(String(255), nullable=True)
    compuesto = Column(Boolean, default=False, server_default=expression.false(), nullable=False)
    detalle_compuesto = Column(Text, nullable=True)

    # ==================== CONCILIACIÓN ====================
    encontrado = Column(
        Boolean,
        default=False,
        server_default=expression.false(),
        nullable=False,
        comment="True una vez conciliado con un activo de inventario_nuevo"
    )
    cod_af_inventario = Column(
        String(30),
        nullable=True,
        comment="Código AF generado al conciliar (AF-YYYYMMDD-NNNN)"
    )

    # ==================== DATOS CONTABLES ====================
    cta_contable = Column(String(50), nullable=True)
    guia_remision = Column(String(50), nullable=True)
    cod_factura = Column(String(50), nullable=True)
    fecha_compra = Column(Date, nullable=True)
    valor_activo = Column(Numeric(14, 2), nullable=True)

    observaciones1 = Column(Text, nullable=True)
    observaciones2 = Column(Text, nullable=True)
    observaciones3 = Column(Text, nullable=True)

    creado_en = Column(DateTime(timezone=True), default=FechaHelper.ahora_utc, server_default=func.now())

    # ==================== RELACIONES ====================
    inventarios_nuevos = relationship("InventarioNuevo", back_populates="inventario_origen", lazy="select")

    __table_args__ = (
        Index("idx_inventario_conciliacion", "cod_proyecto", "encontrado"),
    )

    def __repr__(self) -> str:
        return f"<Inventario(id={self.id}, cod_etiqueta={self.cod_etiqueta}, encontrado={self.encontrado})>"
