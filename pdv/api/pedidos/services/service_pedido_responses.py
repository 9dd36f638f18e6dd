from pdv.api.pedidos.models.model_pedido import PedidoModel
from pdv.api.pedidos.models.model_pedido_item import PedidoItemModel
from pdv.api.pedidos.schemas.schema_pedido import (
    PedidoComentarioOut,
    PedidoDetalheOut,
    PedidoItemOut,
    PedidoOut,
    ProdutoResumoOut,
    UsuarioResumoOut,
)
from pdv.api.shared.schemas.schema_shared_enums import FormaPagamentoEnum, PedidoStatusEnum
from pdv.utils.monetario import decimal_para_float


class PedidoResponseBuilder:
    """Converte PedidoModel nos schemas de saída."""

    @staticmethod
    def item_to_response(item: PedidoItemModel) -> PedidoItemOut:
        return PedidoItemOut(
            id=item.id,
            produto_id=item.produto_id,
            produto=ProdutoResumoOut.model_validate(item.produto) if item.produto else None,
            quantidade=item.quantidade,
            preco_unitario=decimal_para_float(item.preco_unitario),
            subtotal=decimal_para_float(item.subtotal),
            observacao=item.observacao,
        )

    @classmethod
    def _campos(cls, pedido: PedidoModel) -> dict:
        status = PedidoStatusEnum(pedido.status)
        forma = FormaPagamentoEnum(pedido.forma_pagamento)
        return dict(
            id=pedido.id,
            numero_pedido=pedido.numero_pedido,
            status=status,
            status_label=status.label,
            valor_total=decimal_para_float(pedido.valor_total),
            forma_pagamento=forma,
            forma_pagamento_label=forma.label,
            nome_cliente=pedido.nome_cliente,
            usuario_id=pedido.usuario_id,
            usuario=UsuarioResumoOut.model_validate(pedido.usuario) if pedido.usuario else None,
            quantidade_itens=sum(i.quantidade for i in pedido.itens),
            itens=[cls.item_to_response(i) for i in pedido.itens],
            created_at=pedido.created_at,
            updated_at=pedido.updated_at,
        )

    @classmethod
    def pedido_to_response(cls, pedido: PedidoModel) -> PedidoOut:
        return PedidoOut(**cls._campos(pedido))

    @classmethod
    def pedido_to_detalhe(cls, pedido: PedidoModel) -> PedidoDetalheOut:
        return PedidoDetalheOut(
            **cls._campos(pedido),
            comentarios=[PedidoComentarioOut.model_validate(c) for c in pedido.comentarios],
        )
