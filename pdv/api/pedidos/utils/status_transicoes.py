from typing import Dict, FrozenSet

from pdv.api.shared.schemas.schema_shared_enums import PedidoStatusEnum

S = PedidoStatusEnum

# Fluxo de preparo só anda para frente; CANCELLED vale a partir de qualquer
# status aberto. DELIVERED e CANCELLED são finais.
TRANSICOES_PERMITIDAS: Dict[PedidoStatusEnum, FrozenSet[PedidoStatusEnum]] = {
    S.PENDING: frozenset({S.PREPARING, S.READY, S.DELIVERED, S.CANCELLED}),
    S.PREPARING: frozenset({S.READY, S.DELIVERED, S.CANCELLED}),
    S.READY: frozenset({S.DELIVERED, S.CANCELLED}),
    S.DELIVERED: frozenset(),
    S.CANCELLED: frozenset(),
}


def transicao_permitida(atual: PedidoStatusEnum, novo: PedidoStatusEnum) -> bool:
    if atual == novo:
        return True
    return novo in TRANSICOES_PERMITIDAS[atual]


def proximos_status(atual: PedidoStatusEnum) -> list[PedidoStatusEnum]:
    return sorted(TRANSICOES_PERMITIDAS[atual], key=lambda s: list(S).index(s))
