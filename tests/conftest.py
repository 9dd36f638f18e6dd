import os

os.environ.setdefault("SECRET_KEY", "chave-de-teste")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["TIMEZONE"] = "America/Sao_Paulo"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

import pdv.database.models  # noqa: F401
from pdv.api.cadastros.models.model_categoria import CategoriaModel
from pdv.api.cadastros.models.user_model import UserModel
from pdv.api.catalogo.models.model_produto import ProdutoModel
from pdv.api.notifications.core.event_bus import EventBus
from pdv.api.notifications.core.notification_system import get_event_bus
from pdv.core.admin_dependencies import get_current_user
from pdv.database.db_connection import Base, criar_engine, criar_sessionmaker, get_db
from pdv.database.init_db import garantir_sequencia_pedidos
from pdv.main import app


@pytest.fixture
def engine(tmp_path):
    eng = criar_engine(f"sqlite:///{tmp_path / 'pdv_test.db'}")
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return criar_sessionmaker(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    garantir_sequencia_pedidos(session)
    yield session
    session.close()


@pytest.fixture
def event_bus():
    return EventBus()


def _criar_usuario(db, nome, email, role):
    user = UserModel(nome=nome, email=email, senha_hash="nao-usado", role=role, ativo=True)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin(db):
    return _criar_usuario(db, "Admin", "admin@teste.local", "ADMIN")


@pytest.fixture
def vendedor(db):
    return _criar_usuario(db, "Vendedor", "vendedor@teste.local", "SELLER")


@pytest.fixture
def categoria(db):
    cat = CategoriaModel(nome="Lanches", descricao="Sanduíches", cor="#FF9800", ativo=True)
    db.add(cat)
    db.commit()
    db.refresh(cat)
    return cat


@pytest.fixture
def criar_produto(db, categoria):
    def _criar(nome, preco, disponivel=True, categoria_id=None):
        produto = ProdutoModel(
            nome=nome,
            preco=Decimal(preco),
            categoria_id=categoria_id or categoria.id,
            disponivel=disponivel,
        )
        db.add(produto)
        db.commit()
        db.refresh(produto)
        return produto

    return _criar


@pytest.fixture
def client(session_factory, db, admin, event_bus):
    """TestClient autenticado como admin, com banco e event bus isolados."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = lambda: admin
    app.dependency_overrides[get_event_bus] = lambda: event_bus
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
