from pydantic import BaseModel, Field
from typing import Optional, List, Generic, TypeVar


class ErrorResponse(BaseModel):
    detail: str
    code: Optional[str] = None


class MensajeResponse(BaseModel):
    message: str


# SCHEMAS PARA PAGINACIÓN

class PaginationMetadata(BaseModel):
    """Metadata de paginación"""
    total: int = Field(..., description="Total de registros que cumplen los filtros")
    page: int = Field(..., description="Página actual (base 1)", ge=1)
    per_page: int = Field(..., description="Registros por página", ge=1, le=500)
    total_pages: int = Field(..., description="Total de páginas disponibles")
    has_next: bool = Field(..., description="Indica si hay página siguiente")
    has_prev: bool = Field(..., description="Indica si hay página anterior")

    class Config:
        json_schema_extra = {
            "example": {
                "total": 1250,
                "page": 1,
                "per_page": 50,
                "total_pages": 25,
                "has_next": True,
                "has_prev": False
            }
        }


T = TypeVar('T')


class PaginatedResponse(BaseModel, Generic[T]):
    """Respuesta paginada genérica"""
    data: List[T] = Field(..., description="Registros de la página actual")
    pagination: PaginationMetadata = Field(..., description="Metadata de paginación")


def construir_paginacion(total: int, page: int, per_page: int) -> PaginationMetadata:
    total_pages = (total + per_page - 1) // per_page if total else 0
    return PaginationMetadata(
        total=total,
        page=page,
        per_page=per_page,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )
