from typing import Any, Optional

from fastapi import HTTPException, status


class PDVError(HTTPException):
    """Erro de domínio com status HTTP associado."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Erro na requisição"

    def __init__(self, detail: Optional[Any] = None):
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail)


class ValidationError(PDVError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Dados inválidos"


class NotFoundError(PDVError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Registro não encontrado"


class ConflictError(PDVError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflito ao gravar registro"


class PersistenceError(PDVError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Erro ao gravar no banco de dados"
