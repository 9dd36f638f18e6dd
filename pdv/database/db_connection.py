# pdv/database/db_connection.py

from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, declarative_base

from pdv.config.settings import DATABASE_URL, SQLITE_TIMEOUT_SECONDS, DB_ECHO
from pdv.utils.logger import logger

# Base única para todos os models
Base = declarative_base()


def criar_engine(url: str = DATABASE_URL) -> Engine:
    """
    Cria o engine. Para SQLite garante o diretório do arquivo, libera uso entre
    threads e liga as foreign keys em cada conexão.
    """
    parsed = make_url(url)
    connect_args = {}

    if parsed.get_backend_name() == "sqlite":
        connect_args = {"check_same_thread": False, "timeout": SQLITE_TIMEOUT_SECONDS}
        if parsed.database and parsed.database != ":memory:":
            Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url, pool_pre_ping=True, echo=DB_ECHO, connect_args=connect_args)

    if parsed.get_backend_name() == "sqlite":
        @event.listens_for(engine, "connect")
        def _sqlite_pragmas(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def criar_sessionmaker(bind: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=bind)


engine = criar_engine()

# Configura o sessionmaker
SessionLocal = criar_sessionmaker(engine)


# Dependency para FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


logger.debug(f"[DB] Engine configurado para {make_url(DATABASE_URL).render_as_string(hide_password=True)}")
