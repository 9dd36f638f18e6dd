from decimal import Decimal

from sqlalchemy import BigInteger
from sqlalchemy.types import TypeDecorator

from pdv.utils.monetario import para_decimal


class DinheiroType(TypeDecorator):
    """
    Valor monetário gravado em centavos inteiros e lido como Decimal com
    2 casas. SUM no banco soma inteiros, sem passar por ponto flutuante.
    """

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return int(para_decimal(value) * 100)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return para_decimal(Decimal(int(value)) / 100)
