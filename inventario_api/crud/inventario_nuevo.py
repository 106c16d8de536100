# inventario_api/crud/inventario_nuevo.py
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import desc, or_
from sqlalchemy.orm import Session

from inventario_api.models.inventario_nuevo import InventarioNuevo
from inventario_api.utils.fechas import FechaHelper


def get_inventario_nuevo(db: Session, inventario_nuevo_id: str) -> Optional[InventarioNuevo]:
    return db.query(InventarioNuevo).filter(InventarioNuevo.id == inventario_nuevo_id).first()


def get_by_cod_etiqueta(db: Session, cod_etiqueta: str) -> Optional[InventarioNuevo]:
    return db.query(InventarioNuevo).filter(InventarioNuevo.cod_etiqueta == cod_etiqueta).first()


def get_by_inventario_origen(db: Session, inventario_id: str) -> Optional[InventarioNuevo]:
    return db.query(InventarioNuevo).filter(InventarioNuevo.inventario_origen_id == inventario_id).first()


def get_by_cod_af_inventario(db: Session, cod_af_inventario: str) -> Optional[InventarioNuevo]:
    return db.query(InventarioNuevo).filter(InventarioNuevo.cod_af_inventario == cod_af_inventario).first()


# -----------------------------------------------------
# Listar activos nuevos (paginado, con filtros opcionales)
# -----------------------------------------------------
def list_inventario_nuevo(
    db: Session,
    skip: int = 0,
    limit: int = 50,
    search: Optional[str] = None,
    cod_proyecto: Optional[str] = None,
    cod_sucursal: Optional[str] = None,
    cod_area: Optional[str] = None,
    estado: Optional[str] = None,
    creado_por: Optional[str] = None,
    fecha_desde: Optional[date] = None,
    fecha_hasta: Optional[date] = None,
) -> Tuple[List[InventarioNuevo], int]:
    """
    Retorna (página de registros, total que cumple los filtros).

    Orden: más recientes primero.
    """
    query = db.query(InventarioNuevo)

    if search:
        patron = f"%{search.strip()}%"
        query = query.filter(
            or_(
                InventarioNuevo.descripcion.ilike(patron),
                InventarioNuevo.cod_patrimonial.ilike(patron),
                InventarioNuevo.cod_etiqueta.ilike(patron),
            )
        )
    if cod_proyecto:
        query = query.filter(InventarioNuevo.cod_proyecto == cod_proyecto)
    if cod_sucursal:
        query = query.filter(InventarioNuevo.cod_sucursal == cod_sucursal)
    if cod_area:
        query = query.filter(InventarioNuevo.cod_area == cod_area)
    if estado:
        query = query.filter(InventarioNuevo.estado == estado)
    if creado_por:
        query = query.filter(InventarioNuevo.creado_por == creado_por)
    if fecha_desde:
        query = query.filter(InventarioNuevo.creado_en >= FechaHelper.inicio_dia_utc(fecha_desde))
    if fecha_hasta:
        query = query.filter(InventarioNuevo.creado_en <= FechaHelper.fin_dia_utc(fecha_hasta))

    total = query.count()
    registros = query.order_by(
        desc(InventarioNuevo.creado_en),
        desc(InventarioNuevo.cod_etiqueta)
    ).offset(skip).limit(limit).all()
    return registros, total


# -----------------------------------------------------
# Activos sobrantes (sin inventario origen)
# -----------------------------------------------------
def list_sobrantes(
    db: Session,
    creado_por: Optional[str] = None,
    cod_proyecto: Optional[str] = None,
    termino: Optional[str] = None,
    skip: int = 0,
    limit: Optional[int] = None,
) -> List[InventarioNuevo]:
    """Activos registrados sin inventario origen, más recientes primero."""
    query = db.query(InventarioNuevo).filter(InventarioNuevo.inventario_origen_id.is_(None))
    if creado_por:
        query = query.filter(InventarioNuevo.creado_por == creado_por)
    if cod_proyecto:
        query = query.filter(InventarioNuevo.cod_proyecto == cod_proyecto)
    if termino:
        patron = f"%{termino}%"
        query = query.filter(
            or_(
                InventarioNuevo.descripcion.ilike(patron),
                InventarioNuevo.cod_patrimonial.ilike(patron),
                InventarioNuevo.cod_etiqueta.ilike(patron),
            )
        )
    query = query.order_by(desc(InventarioNuevo.creado_en), desc(InventarioNuevo.cod_etiqueta)).offset(skip)
    if limit is not None:
        query = query.limit(limit)
    return query.all()
