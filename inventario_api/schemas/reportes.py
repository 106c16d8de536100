# inventario_api/schemas/reportes.py
from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional, List


class AgruparPor(str, Enum):
    PROYECTO = "proyecto"
    SUCURSAL = "sucursal"
    AREA = "area"


class Estadisticas(BaseModel):
    inventario_anterior: int = Field(..., description="Activos en la data histórica")
    inventario_actual: int = Field(..., description="Activos históricos conciliados")
    faltantes: int = Field(..., description="Históricos aún no encontrados")
    avance: int = Field(..., description="Porcentaje de conciliación (0-100)")
    sobrantes: int = Field(..., description="Activos nuevos sin origen histórico")
    total: int = Field(..., description="Conciliados + sobrantes")

    class Config:
        json_schema_extra = {
            "example": {
                "inventario_anterior": 50,
                "inventario_actual": 37,
                "faltantes": 13,
                "avance": 74,
                "sobrantes": 4,
                "total": 41
            }
        }


class EstadisticaAgrupada(Estadisticas):
    proyecto: Optional[str] = None
    sucursal: Optional[str] = None
    area: Optional[str] = None


class EstadisticasAgrupadas(BaseModel):
    estadisticas: List[EstadisticaAgrupada]
