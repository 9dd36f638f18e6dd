from .model_pedido import PedidoModel
from .model_pedido_item import PedidoItemModel
from .model_pedido_sequencia import PedidoSequenciaModel
from .model_pedido_comentario import PedidoComentarioModel

__all__ = [
    "PedidoModel",
    "PedidoItemModel",
    "PedidoSequenciaModel",
    "PedidoComentarioModel",
]
