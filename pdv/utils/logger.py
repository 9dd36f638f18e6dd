import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pdv.config.settings import LOG_DIR, LOG_LEVEL

BASE_DIR = Path(__file__).resolve().parents[2]
LOG_PATH = Path(LOG_DIR) if Path(LOG_DIR).is_absolute() else BASE_DIR / LOG_DIR
LOG_FILE = LOG_PATH / "app.log"

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


class PrometheusLogHandler(logging.Handler):
    """Conta as mensagens de log por nível no Prometheus."""

    def emit(self, record: logging.LogRecord) -> None:
        from pdv.utils.prometheus_metrics import record_log

        try:
            record_log(record.levelname)
        except Exception:
            self.handleError(record)


def _configurar_logger() -> logging.Logger:
    log = logging.getLogger("pdv")
    if log.handlers:
        return log

    log.setLevel(LOG_LEVEL)
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    log.addHandler(stream_handler)

    try:
        LOG_PATH.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        log.addHandler(file_handler)
    except OSError as e:
        log.warning(f"Não foi possível criar arquivo de log em {LOG_FILE}: {e}")

    log.addHandler(PrometheusLogHandler())
    log.propagate = False
    return log


logger = _configurar_logger()
