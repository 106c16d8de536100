# inventario_api/schemas/inventario_nuevo.py
"""
Schemas del registro y la corrección de activos en campo.

El payload de registro lleva los datos comunes del activo, la ubicación GPS
obligatoria y, como máximo, uno de los tres bloques de atributos por
categoría (`mobiliario_fields`, `equipos_informaticos_fields`,
`vehiculos_fields`).
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Annotated, Literal, Optional, Union
from datetime import datetime

from inventario_api.models.inventario import TipoActivoFijo, ActivoEstado, RegistroInventario


# ==================== UBICACIÓN ====================

class DeviceInfo(BaseModel):
    platform: Optional[str] = None
    model: Optional[str] = None
    osVersion: Optional[str] = None
    appVersion: Optional[str] = None


class LocationData(BaseModel):
    lat: float = Field(..., ge=-90, le=90, example=-12.0464)
    lng: float = Field(..., ge=-180, le=180, example=-77.0428)
    device_info: Optional[Union[str, DeviceInfo]] = Field(
        None,
        alias="deviceInfo",
        description="Texto libre o {platform, model, osVersion, appVersion}"
    )

    class Config:
        populate_by_name = True


# ==================== ATRIBUTOS POR CATEGORÍA ====================

class MobiliarioFields(BaseModel):
    marca: Optional[str] = Field(None, max_length=100)
    modelo: Optional[str] = Field(None, max_length=100)
    tipo: Optional[str] = Field(None, max_length=100)
    material: Optional[str] = Field(None, max_length=100)
    color: Optional[str] = Field(None, max_length=50)
    largo: Optional[float] = Field(None, ge=0)
    ancho: Optional[float] = Field(None, ge=0)
    alto: Optional[float] = Field(None, ge=0)


class EquipoInformaticoFields(BaseModel):
    marca: Optional[str] = Field(None, max_length=100)
    modelo: Optional[str] = Field(None, max_length=100)
    tipo: Optional[str] = Field(None, max_length=100)
    serie: Optional[str] = Field(None, max_length=100)


class VehiculoFields(BaseModel):
    marca: Optional[str] = Field(None, max_length=100)
    modelo: Optional[str] = Field(None, max_length=100)
    tipo: Optional[str] = Field(None, max_length=100)
    numero_motor: Optional[str] = Field(None, max_length=100)
    numero_chasis: Optional[str] = Field(None, max_length=100)
    placa: Optional[str] = Field(None, max_length=20)
    anio: Optional[int] = Field(None, ge=1900, le=2100)


class _BloquesPorCategoria(BaseModel):
    mobiliario_fields: Optional[MobiliarioFields] = None
    equipos_informaticos_fields: Optional[EquipoInformaticoFields] = None
    vehiculos_fields: Optional[VehiculoFields] = None

    @model_validator(mode="after")
    def un_solo_bloque(self):
        enviados = [
            b for b in (self.mobiliario_fields, self.equipos_informaticos_fields, self.vehiculos_fields)
            if b is not None
        ]
        if len(enviados) > 1:
            raise ValueError("Solo se admite un bloque de atributos por categoría")
        return self

    def bloque_enviado(self):
        """Retorna (categoría, bloque) del bloque informado, o (None, None)."""
        if self.mobiliario_fields is not None:
            return TipoActivoFijo.MOBILIARIO, self.mobiliario_fields
        if self.equipos_informaticos_fields is not None:
            return TipoActivoFijo.EQUIPOS_INFORMATICOS, self.equipos_informaticos_fields
        if self.vehiculos_fields is not None:
            return TipoActivoFijo.VEHICULOS, self.vehiculos_fields
        return None, None


# ==================== PAYLOADS ====================

class RegisterFromExistingRequest(_BloquesPorCategoria):
    cod_proyecto: str = Field(..., min_length=1, max_length=50)
    cod_sucursal: str = Field(..., min_length=1, max_length=80)
    cod_area: str = Field(..., min_length=1, max_length=100)
    cod_patrimonial: Optional[str] = Field(None, max_length=100)
    descripcion: str = Field(..., min_length=1)
    tipo_activo_fijo: Optional[TipoActivoFijo] = None
    estado: Optional[ActivoEstado] = None
    cod_responsable: str = Field(..., min_length=1, max_length=120)
    compuesto: bool = False
    detalle_compuesto: Optional[str] = None
    observaciones: Optional[str] = None
    inventario_origen_id: Optional[str] = Field(None, description="Omitido = activo sobrante")
    location: LocationData

    class Config:
        json_schema_extra = {
            "example": {
                "cod_proyecto": "PRJ01",
                "cod_sucursal": "PRJ01-1",
                "cod_area": "PRJ01-1-2",
                "descripcion": "LAPTOP LENOVO THINKPAD",
                "tipo_activo_fijo": "Equipos Informaticos",
                "estado": "BUENO",
                "cod_responsable": "PRJ01-1-2-1",
                "inventario_origen_id": "0b8e5c1e-7a0d-4f0e-9d7b-0a6c3f1e2b11",
                "location": {"lat": -12.05, "lng": -77.03, "deviceInfo": "Android 14"},
                "equipos_informaticos_fields": {"marca": "LENOVO", "modelo": "T14", "serie": "PF3ABC12"}
            }
        }


class UpdateFromExistingRequest(_BloquesPorCategoria):
    """Corrección de un activo ya registrado; los campos omitidos conservan su valor."""
    cod_proyecto: Optional[str] = Field(None, min_length=1, max_length=50)
    cod_sucursal: Optional[str] = Field(None, min_length=1, max_length=80)
    cod_area: Optional[str] = Field(None, min_length=1, max_length=100)
    cod_patrimonial: Optional[str] = Field(None, max_length=100)
    descripcion: Optional[str] = Field(None, min_length=1)
    tipo_activo_fijo: Optional[TipoActivoFijo] = None
    estado: Optional[ActivoEstado] = None
    cod_responsable: Optional[str] = Field(None, min_length=1, max_length=120)
    compuesto: Optional[bool] = None
    detalle_compuesto: Optional[str] = None
    observaciones: Optional[str] = None
    inventario_origen_id: Optional[str] = None
    location: LocationData


# ==================== LECTURA ====================

class MobiliarioRead(BaseModel):
    categoria: Literal[TipoActivoFijo.MOBILIARIO] = TipoActivoFijo.MOBILIARIO
    id: str
    marca: Optional[str] = None
    modelo: Optional[str] = None
    tipo: Optional[str] = None
    material: Optional[str] = None
    color: Optional[str] = None
    largo: Optional[float] = None
    ancho: Optional[float] = None
    alto: Optional[float] = None

    class Config:
        from_attributes = True


class EquipoInformaticoRead(BaseModel):
    categoria: Literal[TipoActivoFijo.EQUIPOS_INFORMATICOS] = TipoActivoFijo.EQUIPOS_INFORMATICOS
    id: str
    marca: Optional[str] = None
    modelo: Optional[str] = None
    tipo: Optional[str] = None
    serie: Optional[str] = None

    class Config:
        from_attributes = True


class VehiculoRead(BaseModel):
    categoria: Literal[TipoActivoFijo.VEHICULOS] = TipoActivoFijo.VEHICULOS
    id: str
    marca: Optional[str] = None
    modelo: Optional[str] = None
    tipo: Optional[str] = None
    numero_motor: Optional[str] = None
    numero_chasis: Optional[str] = None
    placa: Optional[str] = None
    anio: Optional[int] = None

    class Config:
        from_attributes = True


ESQUEMAS_POR_CATEGORIA = {
    TipoActivoFijo.MOBILIARIO: MobiliarioRead,
    TipoActivoFijo.EQUIPOS_INFORMATICOS: EquipoInformaticoRead,
    TipoActivoFijo.VEHICULOS: VehiculoRead,
}

DatosEspecificos = Annotated[
    Union[MobiliarioRead, EquipoInformaticoRead, VehiculoRead],
    Field(discriminator="categoria"),
]


class InventarioNuevoRead(BaseModel):
    id: str
    cod_proyecto: str
    cod_sucursal: str
    cod_area: str
    cod_af_inventario: str
    cod_patrimonial: Optional[str] = None
    cod_etiqueta: str
    descripcion: str
    tipo_activo_fijo: TipoActivoFijo
    estado: Optional[ActivoEstado] = None
    cod_responsable: str
    compuesto: bool
    detalle_compuesto: Optional[str] = None
    observaciones: Optional[str] = None
    registro_inventario: RegistroInventario
    creado_por: str
    inventario_origen_id: Optional[str] = None
    creado_en: datetime

    class Config:
        from_attributes = True


class InventarioNuevoDetalle(InventarioNuevoRead):
    datos_especificos: Optional[DatosEspecificos] = None

    @field_validator("datos_especificos", mode="before")
    @classmethod
    def etiquetar_categoria(cls, valor):
        """Convierte la fila ORM de atributos al schema de su categoría."""
        if valor is None or isinstance(valor, (dict, BaseModel)):
            return valor
        return ESQUEMAS_POR_CATEGORIA[valor.categoria].model_validate(valor).model_dump()


class InventarioNuevoOperacionResponse(BaseModel):
    message: str
    inventario: InventarioNuevoDetalle
