"""
Atribuição do número sequencial do pedido.

As duas estratégias dependem da unique constraint em pedidos.numero_pedido:
uma colisão vira ConflictError e o service tenta de novo.

- sequence: incrementa o contador em pedidos_sequencia. O UPDATE trava a
  linha até o commit, então transações concorrentes recebem números
  distintos sem colidir.
- optimistic: lê max(numero_pedido) + 1 e confia na constraint para
  detectar a corrida.
"""
from abc import ABC, abstractmethod

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pdv.api.pedidos.models.model_pedido import PedidoModel
from pdv.api.pedidos.models.model_pedido_sequencia import PedidoSequenciaModel, SEQUENCIA_PEDIDOS
from pdv.core.exceptions import ConflictError
from pdv.utils.logger import logger


class EstrategiaNumeracao(ABC):
    nome: str = ""

    @abstractmethod
    def proximo_numero(self, db: Session) -> int:
        """Reserva o próximo número dentro da transação corrente."""

    def _maior_numero(self, db: Session) -> int:
        return int(db.query(func.coalesce(func.max(PedidoModel.numero_pedido), 0)).scalar() or 0)


class SequenciaNumeroPedido(EstrategiaNumeracao):
    nome = "sequence"

    def proximo_numero(self, db: Session) -> int:
        result = db.execute(
            update(PedidoSequenciaModel)
            .where(PedidoSequenciaModel.nome == SEQUENCIA_PEDIDOS)
            .values(valor=PedidoSequenciaModel.valor + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount:
            return int(
                db.execute(
                    select(PedidoSequenciaModel.valor).where(PedidoSequenciaModel.nome == SEQUENCIA_PEDIDOS)
                ).scalar_one()
            )

        # Contador ainda não existe: nasce a partir do maior número gravado
        numero = self._maior_numero(db) + 1
        db.add(PedidoSequenciaModel(nome=SEQUENCIA_PEDIDOS, valor=numero))
        try:
            db.flush()
        except IntegrityError as e:
            raise ConflictError("Sequência de pedidos criada concorrentemente") from e
        logger.info(f"[Pedidos] Sequência de pedidos criada em {numero}")
        return numero


class RetentativaOtimistaNumeroPedido(EstrategiaNumeracao):
    nome = "optimistic"

    def proximo_numero(self, db: Session) -> int:
        return self._maior_numero(db) + 1


ESTRATEGIAS = {
    SequenciaNumeroPedido.nome: SequenciaNumeroPedido,
    RetentativaOtimistaNumeroPedido.nome: RetentativaOtimistaNumeroPedido,
}


def criar_estrategia(nome: str) -> EstrategiaNumeracao:
    try:
        return ESTRATEGIAS[nome.lower()]()
    except KeyError:
        raise ValueError(
            f"Estratégia de numeração desconhecida: {nome!r}. Use uma de {sorted(ESTRATEGIAS)}"
        ) from None
