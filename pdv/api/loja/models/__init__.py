from .model_loja_configuracao import LojaConfiguracaoModel

__all__ = [
    "LojaConfiguracaoModel",
]
