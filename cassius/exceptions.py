"""
Jerarquía de excepciones custom para Cassius.

Todas las excepciones del sistema heredan de CassiusException. El exception
handler global (cassius.main) mapea error_code → HTTP status.
"""
from typing import Optional, Any


class CassiusException(Exception):
    """
    Excepción base para todo el backend Cassius.

    Todas las excepciones custom heredan de esta clase.
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        data: Optional[dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.data = data or {}
        super().__init__(self.message)


# ==================== EXCEPCIONES 404 (NOT FOUND) ====================

class PageTypeNotSupportedError(CassiusException):
    """La página solicitada no tiene tabla de campos filtrables."""

    def __init__(self, page_type: str, supported: Optional[list[str]] = None):
        super().__init__(
            message=f"Page type '{page_type}' does not support advanced filters",
            error_code="PAGE_TYPE_NOT_SUPPORTED",
            data={
                "page_type": page_type,
                "supported": supported or []
            }
        )


class SavedFilterNotFoundError(CassiusException):
    """El filtro guardado no existe (o pertenece a otra organización)."""

    def __init__(self, filter_id: str):
        super().__init__(
            message=f"Saved filter '{filter_id}' not found",
            error_code="SAVED_FILTER_NOT_FOUND",
            data={"filter_id": filter_id}
        )


# ==================== EXCEPCIONES 400 (BAD REQUEST) ====================

class InvalidFilterFormatError(CassiusException):
    """
    filterData no se puede reconstruir como FilterGroup.

    Recuperable: el estado de filtros activo del cliente no cambia.
    """

    def __init__(self, details: Optional[str] = None, filter_id: Optional[str] = None):
        data: dict[str, Any] = {}
        if details:
            data["details"] = details
        if filter_id:
            data["filter_id"] = filter_id

        super().__init__(
            message="Format de filtre invalide.",
            error_code="INVALID_FILTER_FORMAT",
            data=data
        )


class EmptyFilterError(CassiusException):
    """El grupo a guardar no tiene ninguna regla activa tras normalizar."""

    def __init__(self, page_type: str):
        super().__init__(
            message="Aucun filtre actif à sauvegarder.",
            error_code="FILTER_EMPTY",
            data={"page_type": page_type}
        )


class OrganisationRequiredError(CassiusException):
    """Falta el header X-Organisation-Id (scope de tenant)."""

    def __init__(self):
        super().__init__(
            message="Header 'X-Organisation-Id' is required for saved filters",
            error_code="ORGANISATION_REQUIRED"
        )


# ==================== EXCEPCIONES 503 (SERVICE UNAVAILABLE) ====================

class StorageUnavailableError(CassiusException):
    """Redis no está conectado (startup incompleto o caído)."""

    def __init__(self, details: Optional[str] = None):
        message = "Saved filter storage is unavailable"
        if details:
            message += f" | Detalles: {details}"

        super().__init__(
            message=message,
            error_code="STORAGE_UNAVAILABLE",
            data={"details": details} if details else {}
        )


class StorageError(CassiusException):
    """Error de lectura/escritura en Redis. Sin reintento automático."""

    def __init__(self, operation: str, details: Optional[str] = None):
        super().__init__(
            message=f"Impossible de {operation} le filtre.",
            error_code="STORAGE_ERROR",
            data={
                "operation": operation,
                "details": details
            }
        )
