from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from pdv.config.settings import TIMEZONE


def fuso_local() -> ZoneInfo:
    return ZoneInfo(TIMEZONE)


def agora_utc() -> datetime:
    """Retorna datetime atual em UTC, sem microsegundos"""
    return datetime.now(timezone.utc).replace(microsecond=0)


def como_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite devolve datetimes sem fuso; todos são gravados em UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def para_local(value: datetime) -> datetime:
    return como_utc(value).astimezone(fuso_local())


def hoje_local() -> date:
    return datetime.now(fuso_local()).date()


def limites_dias_utc(inicio: date, fim: date) -> Tuple[datetime, datetime]:
    """
    Converte um intervalo de datas locais (inclusivo) em [inicio, fim) UTC.
    """
    tz = fuso_local()
    start = datetime.combine(inicio, time.min, tzinfo=tz).astimezone(timezone.utc)
    end = datetime.combine(fim + timedelta(days=1), time.min, tzinfo=tz).astimezone(timezone.utc)
    return start, end
