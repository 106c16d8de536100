# inventario_api/schemas/inventario.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime

from inventario_api.models.inventario import TipoActivoFijo, ActivoEstado, EstadoReporte
from inventario_api.schemas.inventario_nuevo import InventarioNuevoDetalle, InventarioNuevoRead


class InventarioRead(BaseModel):
    id: str
    cod_proyecto: Optional[str] = None
    cod_sucursal: Optional[str] = None
    cod_area: Optional[str] = None
    cod_af: Optional[str] = None
    cod_patrimonial: Optional[str] = None
    cod_etiqueta: Optional[str] = None
    descripcion: str
    tipo_activo_fijo: Optional[TipoActivoFijo] = None
    material: Optional[str] = None
    marca: Optional[str] = None
    modelo: Optional[str] = None
    serie: Optional[str] = None
    color: Optional[str] = None
    largo: Optional[float] = None
    ancho: Optional[float] = None
    profundo: Optional[float] = None
    pulgadas: Optional[float] = None
    estado: Optional[ActivoEstado] = None
    cod_responsable: Optional[str] = None
    ubicacion: Optional[str] = None
    compuesto: bool = False
    detalle_compuesto: Optional[str] = None
    encontrado: bool
    cod_af_inventario: Optional[str] = None
    cta_contable: Optional[str] = None
    guia_remision: Optional[str] = None
    cod_factura: Optional[str] = None
    fecha_compra: Optional[date] = None
    valor_activo: Optional[float] = None
    observaciones1: Optional[str] = None
    observaciones2: Optional[str] = None
    observaciones3: Optional[str] = None
    creado_en: Optional[datetime] = None

    class Config:
        from_attributes = True


class InventarioDetalle(BaseModel):
    """Vista completa de un activo histórico para el escaneo en campo."""
    inventario: InventarioRead
    inventario_nuevo: Optional[InventarioNuevoDetalle] = None
    estado_actual: EstadoReporte
    estado_futuro: EstadoReporte


class MisRegistrosResponse(BaseModel):
    """Lo registrado por el usuario: históricos que concilió y sobrantes que dio de alta."""
    inventarios_encontrados: List[InventarioRead]
    inventarios_nuevos_sin_origen: List[InventarioNuevoRead]
    total: int


class BusquedaGeneralResponse(BaseModel):
    inventarios_base: List[InventarioRead]
    inventarios_nuevos_sin_origen: List[InventarioNuevoRead]
    total: int = Field(..., description="Elementos devueltos en esta página (ambas listas)")
