"""
Modelo Pydantic para respuestas de error.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, Any


class ErrorResponse(BaseModel):
    """
    Response estándar para errores en la API.

    Utilizado por los exception handlers para retornar errores consistentes.
    """
    success: bool = Field(
        False,
        description="Siempre False para errores"
    )
    error: str = Field(
        ...,
        description="Código de error (ej: INVALID_FILTER_FORMAT, SAVED_FILTER_NOT_FOUND)",
        examples=["INVALID_FILTER_FORMAT", "SAVED_FILTER_NOT_FOUND", "STORAGE_ERROR"]
    )
    message: str = Field(
        ...,
        description="Mensaje de error legible para el usuario",
        examples=[
            "Format de filtre invalide.",
            "Impossible de sauvegarder le filtre."
        ]
    )
    data: Optional[dict[str, Any]] = Field(
        None,
        description="Contexto adicional sobre el error (opcional)"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "success": False,
                    "error": "INVALID_FILTER_FORMAT",
                    "message": "Format de filtre invalide.",
                    "data": {
                        "filter_id": "5b0c3c1e-6a43-4f0e-9a43-2f9d2d7b8c11"
                    }
                },
                {
                    "success": False,
                    "error": "SAVED_FILTER_NOT_FOUND",
                    "message": "Saved filter 'abc' not found",
                    "data": {"filter_id": "abc"}
                },
                {
                    "success": False,
                    "error": "STORAGE_ERROR",
                    "message": "Impossible de supprimer le filtre.",
                    "data": {"operation": "supprimer", "details": "Connection reset by peer"}
                }
            ]
        }
    )
