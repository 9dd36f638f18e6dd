"""
Importa todos os models para registrar as tabelas no metadata do Base
antes de create_all ou de qualquer query com relacionamento por nome.
"""
from pdv.api.cadastros.models import UserModel, CategoriaModel
from pdv.api.catalogo.models import ProdutoModel
from pdv.api.pedidos.models import (
    PedidoModel,
    PedidoItemModel,
    PedidoSequenciaModel,
    PedidoComentarioModel,
)
from pdv.api.loja.models import LojaConfiguracaoModel

__all__ = [
    "UserModel",
    "CategoriaModel",
    "ProdutoModel",
    "PedidoModel",
    "PedidoItemModel",
    "PedidoSequenciaModel",
    "PedidoComentarioModel",
    "LojaConfiguracaoModel",
]
