from .model_produto import ProdutoModel

__all__ = [
    "ProdutoModel",
]
