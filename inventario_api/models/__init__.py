from inventario_api.db.base import Base

# Importa modelos para que se registren en Base.metadata
from .role import Role
from .usuario import Usuario
from .refresh_token import RefreshToken
from .proyecto import Proyecto
from .sucursal import Sucursal
from .area import Area
from .responsable import Responsable
from .inventario import (
    Inventario,
    TipoActivoFijo,
    ActivoEstado,
    RegistroInventario,
    EstadoReporte,
)
from .inventario_nuevo import InventarioNuevo
from .activos_especificos import Mobiliario, EquipoInformatico, Vehiculo
from .auditoria_ubicacion import RegistroAuditoriaUbicacion

__all__ = [
    "Base",
    "Role",
    "Usuario",
    "RefreshToken",
    "Proyecto",
    "Sucursal",
    "Area",
    "Responsable",
    "Inventario",
    "TipoActivoFijo",
    "ActivoEstado",
    "RegistroInventario",
    "EstadoReporte",
    "InventarioNuevo",
    "Mobiliario",
    "EquipoInformatico",
    "Vehiculo",
    "RegistroAuditoriaUbicacion",
]
