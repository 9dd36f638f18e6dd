from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pdv.config.settings import ADMIN_EMAIL, ADMIN_PASSWORD, ADMIN_NOME
from pdv.core.security import hash_password
from pdv.database.db_connection import engine as default_engine, Base, criar_sessionmaker
from pdv.database.models import UserModel, PedidoModel, PedidoSequenciaModel, LojaConfiguracaoModel
from pdv.api.pedidos.models.model_pedido_sequencia import SEQUENCIA_PEDIDOS
from pdv.api.shared.schemas.schema_shared_enums import UserRoleEnum
from pdv.utils.logger import logger


def criar_tabelas(engine: Engine):
    logger.info("[DB] Criando tabelas (se não existirem)...")
    Base.metadata.create_all(bind=engine)


def garantir_sequencia_pedidos(db: Session):
    """Cria o contador de pedidos a partir do maior número já gravado."""
    if db.get(PedidoSequenciaModel, SEQUENCIA_PEDIDOS) is not None:
        return
    maior = db.query(func.coalesce(func.max(PedidoModel.numero_pedido), 0)).scalar()
    db.add(PedidoSequenciaModel(nome=SEQUENCIA_PEDIDOS, valor=int(maior)))
    try:
        db.commit()
        logger.info(f"[DB] Sequência de pedidos iniciada em {maior}")
    except IntegrityError:
        # outro processo criou a linha primeiro
        db.rollback()


def garantir_admin(db: Session):
    if db.query(UserModel.id).first() is not None:
        return
    admin = UserModel(
        nome=ADMIN_NOME,
        email=ADMIN_EMAIL,
        senha_hash=hash_password(ADMIN_PASSWORD),
        role=UserRoleEnum.ADMIN.value,
        ativo=True,
    )
    db.add(admin)
    db.commit()
    logger.info(f"[DB] Usuário administrador criado: {ADMIN_EMAIL}")


def garantir_configuracao_loja(db: Session):
    if db.query(LojaConfiguracaoModel.id).first() is None:
        db.add(LojaConfiguracaoModel())
        db.commit()


def inicializar_banco(engine: Engine = None):
    engine = engine or default_engine
    criar_tabelas(engine)

    SessionLocal = criar_sessionmaker(engine)
    db = SessionLocal()
    try:
        garantir_sequencia_pedidos(db)
        garantir_admin(db)
        garantir_configuracao_loja(db)
    finally:
        db.close()
    logger.info("[DB] Banco inicializado.")
