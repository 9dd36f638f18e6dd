from enum import Enum


class PedidoStatusEnum(str, Enum):
    PENDING = "PENDING"
    PREPARING = "PREPARING"
    READY = "READY"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @classmethod
    def _missing_(cls, value):
        # "COMPLETED" é aceito como sinônimo de entregue
        if isinstance(value, str):
            normalizado = value.strip().upper()
            if normalizado == "COMPLETED":
                return cls.DELIVERED
            for membro in cls:
                if membro.value == normalizado:
                    return membro
        return None

    @property
    def label(self) -> str:
        return {
            "PENDING": "Pendente",
            "PREPARING": "Preparando",
            "READY": "Pronto",
            "DELIVERED": "Entregue",
            "CANCELLED": "Cancelado",
        }[self.value]


class FormaPagamentoEnum(str, Enum):
    CASH = "CASH"
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    PIX = "PIX"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            normalizado = value.strip().upper()
            for membro in cls:
                if membro.value == normalizado:
                    return membro
        return None

    @property
    def label(self) -> str:
        return {
            "CASH": "Dinheiro",
            "CREDIT_CARD": "Cartão de Crédito",
            "DEBIT_CARD": "Cartão de Débito",
            "PIX": "PIX",
        }[self.value]


class UserRoleEnum(str, Enum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    ATTENDANT = "ATTENDANT"
    SELLER = "SELLER"


class EstrategiaExclusaoCategoriaEnum(str, Enum):
    REASSIGN = "reassign"
    CASCADE = "cascade"
