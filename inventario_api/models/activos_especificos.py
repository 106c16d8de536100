# inventario_api/models/activos_especificos.py
"""
Atributos por categoría de activo.

Tres tablas paralelas, cada una en relación 1:1 con `inventario_nuevo`
(FK única). La categoría del activo decide cuál de ellas aplica; cada
modelo la expone como atributo de clase `categoria` (no es una columna).
"""

from sqlalchemy import Column, String, Integer, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from inventario_api.db.base import Base, generar_uuid
from inventario_api.models.inventario import TipoActivoFijo


class Mobiliario(Base):
    __tablename__ = "mobiliario"
    categoria = TipoActivoFijo.MOBILIARIO

    id = Column(String(36), primary_key=True, default=generar_uuid)
    inventario_nuevo_id = Column(
        String(36),
        ForeignKey("inventario_nuevo.id", ondelete="CASCADE"),
        nullable=False,
        unique=True
    )
    marca = Column(String(100), nullable=True)
    modelo = Column(String(100), nullable=True)
    tipo = Column(String(100), nullable=True)
    material = Column(String(100), nullable=True)
    color = Column(String(50), nullable=True)
    largo = Column(Numeric(10, 2), nullable=True)
    ancho = Column(Numeric(10, 2), nullable=True)
    alto = Column(Numeric(10, 2), nullable=True)

    inventario_nuevo = relationship("InventarioNuevo", back_populates="mobiliario")


class EquipoInformatico(Base):
    __tablename__ = "equipos_informaticos"
    categoria = TipoActivoFijo.EQUIPOS_INFORMATICOS

    id = Column(String(36), primary_key=True, default=generar_uuid)
    inventario_nuevo_id = Column(
        String(36),
        ForeignKey("inventario_nuevo.id", ondelete="CASCADE"),
        nullable=False,
        unique=True
    )
    marca = Column(String(100), nullable=True)
    modelo = Column(String(100), nullable=True)
    tipo = Column(String(100), nullable=True)
    serie = Column(String(100), nullable=True)

    inventario_nuevo = relationship("InventarioNuevo", back_populates="equipo_informatico")


class Vehiculo(Base):
    __tablename__ = "vehiculos"
    categoria = TipoActivoFijo.VEHICULOS

    id = Column(String(36), primary_key=True, default=generar_uuid)
    inventario_nuevo_id = Column(
        String(36),
        ForeignKey("inventario_nuevo.id", ondelete="CASCADE"),
        nullable=False,
        unique=True
    )
    marca = Column(String(100), nullable=True)
    modelo = Column(String(100), nullable=True)
    tipo = Column(String(100), nullable=True)
    numero_motor = Column(String(100), nullable=True)
    numero_chasis = Column(String(100), nullable=True)
    placa = Column(String(20), nullable=True)
    anio = Column(Integer, nullable=True)

    inventario_nuevo = relationship("InventarioNuevo", back_populates="vehiculo")
