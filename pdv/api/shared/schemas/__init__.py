"""
Schemas compartilhados entre diferentes domínios
"""

from pdv.api.shared.schemas.schema_shared_enums import (
    PedidoStatusEnum,
    FormaPagamentoEnum,
    UserRoleEnum,
    EstrategiaExclusaoCategoriaEnum,
)

__all__ = [
    "PedidoStatusEnum",
    "FormaPagamentoEnum",
    "UserRoleEnum",
    "EstrategiaExclusaoCategoriaEnum",
]
