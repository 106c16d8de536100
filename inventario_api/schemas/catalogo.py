# inventario_api/schemas/catalogo.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


# ==================== PROYECTOS ====================

class ProyectoCreate(BaseModel):
    cod_proyecto: str = Field(..., min_length=1, max_length=50, example="PRJ01")
    empresa: str = Field(..., min_length=1, max_length=255)
    razon_social: Optional[str] = Field(None, max_length=255)
    situacion: Optional[str] = Field(None, max_length=50, example="ACTIVO")


class ProyectoRead(ProyectoCreate):
    id: str
    creado_en: Optional[datetime] = None

    class Config:
        from_attributes = True


# ==================== SUCURSALES ====================

class SucursalCreate(BaseModel):
    proyecto_id: str
    nombre_sucursal: str = Field(..., min_length=1, max_length=255)
    departamento: Optional[str] = None
    provincia: Optional[str] = None
    distrito: Optional[str] = None
    direccion: Optional[str] = None


class SucursalRead(SucursalCreate):
    id: str
    cod_sucursal: str

    class Config:
        from_attributes = True


# ==================== ÁREAS ====================

class AreaCreate(BaseModel):
    sucursal_id: str
    area: str = Field(..., min_length=1, max_length=255)


class AreaRead(AreaCreate):
    id: str
    cod_area: str

    class Config:
        from_attributes = True


# ==================== RESPONSABLES ====================

class ResponsableCreate(BaseModel):
    area_id: str
    nombre: str = Field(..., min_length=1, max_length=255)
    dni: Optional[str] = Field(None, max_length=20)
    cargo: Optional[str] = Field(None, max_length=150)


class ResponsableRead(ResponsableCreate):
    id: str
    cod_responsable: str

    class Config:
        from_attributes = True
