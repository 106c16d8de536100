# inventario_api/crud/inventario.py
from typing import List, Optional

from sqlalchemy import desc, or_, select
from sqlalchemy.orm import Session

from inventario_api.models.inventario import Inventario
from inventario_api.models.inventario_nuevo import InventarioNuevo


def get_inventario(db: Session, inventario_id: str) -> Optional[Inventario]:
    return db.query(Inventario).filter(Inventario.id == inventario_id).first()


def get_by_cod_etiqueta(db: Session, cod_etiqueta: str) -> Optional[Inventario]:
    return db.query(Inventario).filter(Inventario.cod_etiqueta == cod_etiqueta).first()


def get_by_cod_patrimonial(db: Session, cod_patrimonial: str) -> Optional[Inventario]:
    return db.query(Inventario).filter(Inventario.cod_patrimonial == cod_patrimonial).first()


# -----------------------------------------------------
# Búsqueda libre (sin distinguir mayúsculas)
# -----------------------------------------------------
def buscar(db: Session, termino: str, limit: int = 20) -> List[Inventario]:
    patron = f"%{termino.strip()}%"
    return (
        db.query(Inventario)
        .filter(
            or_(
                Inventario.descripcion.ilike(patron),
                Inventario.marca.ilike(patron),
                Inventario.modelo.ilike(patron),
                Inventario.serie.ilike(patron),
                Inventario.cod_patrimonial.ilike(patron),
                Inventario.cod_etiqueta.ilike(patron),
            )
        )
        .order_by(Inventario.descripcion)
        .limit(limit)
        .all()
    )


# -----------------------------------------------------
# Búsqueda general paginada (escritorio)
# -----------------------------------------------------
def buscar_paginado(
    db: Session,
    termino: Optional[str] = None,
    cod_proyecto: Optional[str] = None,
    skip: int = 0,
    limit: int = 50,
) -> List[Inventario]:
    """Inventario histórico más reciente primero; `termino` filtra descripción y códigos."""
    query = db.query(Inventario)
    if cod_proyecto:
        query = query.filter(Inventario.cod_proyecto == cod_proyecto)
    if termino:
        patron = f"%{termino}%"
        query = query.filter(
            or_(
                Inventario.descripcion.ilike(patron),
                Inventario.cod_patrimonial.ilike(patron),
                Inventario.cod_etiqueta.ilike(patron),
            )
        )
    return query.order_by(desc(Inventario.creado_en), Inventario.id).offset(skip).limit(limit).all()


def encontrados_por_usuario(db: Session, usuario_id: str, cod_proyecto: Optional[str] = None) -> List[Inventario]:
    """Activos históricos conciliados con los códigos AF que registró `usuario_id`."""
    codigos = select(InventarioNuevo.cod_af_inventario).where(InventarioNuevo.creado_por == usuario_id)
    if cod_proyecto:
        codigos = codigos.where(InventarioNuevo.cod_proyecto == cod_proyecto)

    query = db.query(Inventario).filter(
        Inventario.encontrado.is_(True),
        Inventario.cod_af_inventario.in_(codigos),
    )
    if cod_proyecto:
        query = query.filter(Inventario.cod_proyecto == cod_proyecto)
    return query.order_by(desc(Inventario.creado_en), Inventario.id).all()
