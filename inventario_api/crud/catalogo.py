# inventario_api/crud/catalogo.py
"""
Acceso a datos de la estructura organizacional: proyectos, sucursales,
áreas y responsables.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from inventario_api.models.area import Area
from inventario_api.models.proyecto import Proyecto
from inventario_api.models.responsable import Responsable
from inventario_api.models.sucursal import Sucursal


def get_proyecto(db: Session, proyecto_id: str) -> Optional[Proyecto]:
    return db.query(Proyecto).filter(Proyecto.id == proyecto_id).first()


def get_proyecto_by_codigo(db: Session, cod_proyecto: str) -> Optional[Proyecto]:
    return db.query(Proyecto).filter(Proyecto.cod_proyecto == cod_proyecto).first()


def list_proyectos(db: Session) -> List[Proyecto]:
    return db.query(Proyecto).order_by(Proyecto.cod_proyecto).all()


def get_sucursal(db: Session, sucursal_id: str) -> Optional[Sucursal]:
    return db.query(Sucursal).filter(Sucursal.id == sucursal_id).first()


def list_sucursales(db: Session, proyecto_id: Optional[str] = None) -> List[Sucursal]:
    query = db.query(Sucursal)
    if proyecto_id:
        query = query.filter(Sucursal.proyecto_id == proyecto_id)
    return query.order_by(Sucursal.cod_sucursal).all()


def get_area(db: Session, area_id: str) -> Optional[Area]:
    return db.query(Area).filter(Area.id == area_id).first()


def list_areas(db: Session, sucursal_id: Optional[str] = None) -> List[Area]:
    query = db.query(Area)
    if sucursal_id:
        query = query.filter(Area.sucursal_id == sucursal_id)
    return query.order_by(Area.cod_area).all()


def list_responsables(db: Session, area_id: Optional[str] = None) -> List[Responsable]:
    query = db.query(Responsable)
    if area_id:
        query = query.filter(Responsable.area_id == area_id)
    return query.order_by(Responsable.cod_responsable).all()


def create(db: Session, obj):
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj
