import os
from dotenv import load_dotenv
from pathlib import Path

# Carrega o .env manualmente se estiver fora do Docker
if not os.getenv("RUNNING_IN_DOCKER"):
    dotenv_path = Path(__file__).resolve().parents[2] / ".env"
    load_dotenv(dotenv_path=dotenv_path)


def _bool_env(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


# Banco de dados
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/pdv.db")
SQLITE_TIMEOUT_SECONDS = int(os.getenv("SQLITE_TIMEOUT_SECONDS", 30))
DB_ECHO = _bool_env("DB_ECHO", "false")

# JWT / Segurança
SECRET_KEY = os.getenv("SECRET_KEY")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 1440))

# CORS
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
CORS_ALLOW_ALL = _bool_env("CORS_ALLOW_ALL", "false")

# FastAPI / App
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
ENABLE_DOCS = _bool_env("ENABLE_DOCS", "true")

# Fuso usado para fechar dia/semana/mês nos relatórios
TIMEZONE = os.getenv("TIMEZONE", "America/Sao_Paulo")

# Pedidos
ORDER_NUMBER_STRATEGY = os.getenv("ORDER_NUMBER_STRATEGY", "sequence").lower()  # sequence | optimistic
ORDER_NUMBER_MAX_RETRIES = int(os.getenv("ORDER_NUMBER_MAX_RETRIES", 5))
ENFORCE_STATUS_TRANSITIONS = _bool_env("ENFORCE_STATUS_TRANSITIONS", "true")
PEDIDO_QUANTIDADE_MAXIMA = int(os.getenv("PEDIDO_QUANTIDADE_MAXIMA", 9999))  # por item

# Dashboard / Relatórios
DASHBOARD_TOP_PRODUTOS = int(os.getenv("DASHBOARD_TOP_PRODUTOS", 5))
DASHBOARD_PEDIDOS_RECENTES = int(os.getenv("DASHBOARD_PEDIDOS_RECENTES", 5))
DASHBOARD_DIAS_SERIE = int(os.getenv("DASHBOARD_DIAS_SERIE", 30))
RELATORIO_TOP_PRODUTOS = int(os.getenv("RELATORIO_TOP_PRODUTOS", 10))
RELATORIO_MAX_DIAS = int(os.getenv("RELATORIO_MAX_DIAS", 366))

# Usuário administrador criado na primeira inicialização
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@pdv.local")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
ADMIN_NOME = os.getenv("ADMIN_NOME", "Administrador")

# Logs
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR", "logs")
