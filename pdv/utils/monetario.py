from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

CENTAVOS = Decimal("0.01")

Numero = Union[Decimal, float, int, str, None]


def para_decimal(value: Numero) -> Decimal:
    """Converte para Decimal com 2 casas (meia para cima). None vira 0."""
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        # float passa por str para não herdar a representação binária
        try:
            value = Decimal(str(value))
        except InvalidOperation as e:
            raise ValueError(f"Valor monetário inválido: {value!r}") from e
    return value.quantize(CENTAVOS, rounding=ROUND_HALF_UP)


def decimal_para_float(value: Numero) -> float:
    return float(para_decimal(value))


def percentual(parte: Numero, total: Numero) -> float:
    total_dec = para_decimal(total)
    if total_dec == 0:
        return 0.0
    return decimal_para_float(para_decimal(parte) * 100 / total_dec)
