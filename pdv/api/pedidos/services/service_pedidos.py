from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional, Tuple, Union

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from pdv.api.catalogo.models.model_produto import ProdutoModel
from pdv.api.notifications.core.event_bus import EventBus, EventType
from pdv.api.pedidos.models.model_pedido import PedidoModel
from pdv.api.pedidos.repositories.repo_pedidos import PedidoRepository, conflito_numeracao
from pdv.api.pedidos.schemas.schema_pedido import PedidoCreateRequest, PedidoItemRequest
from pdv.api.pedidos.services.numeracao import EstrategiaNumeracao, criar_estrategia
from pdv.api.pedidos.utils.status_transicoes import transicao_permitida, proximos_status
from pdv.api.shared.schemas.schema_shared_enums import PedidoStatusEnum
from pdv.config.settings import (
    ENFORCE_STATUS_TRANSITIONS,
    ORDER_NUMBER_MAX_RETRIES,
    ORDER_NUMBER_STRATEGY,
    PEDIDO_QUANTIDADE_MAXIMA,
)
from pdv.core.exceptions import ConflictError, NotFoundError, PersistenceError, ValidationError
from pdv.utils.database_utils import agora_utc
from pdv.utils.logger import logger
from pdv.utils.monetario import para_decimal

# Teto do total em centavos cabe com folga num BIGINT
VALOR_MAXIMO_PEDIDO = Decimal("9999999999999.99")


class PedidoService:
    def __init__(
        self,
        db: Session,
        event_bus: Optional[EventBus] = None,
        numeracao: Optional[EstrategiaNumeracao] = None,
        max_tentativas: int = ORDER_NUMBER_MAX_RETRIES,
        validar_transicoes: bool = ENFORCE_STATUS_TRANSITIONS,
    ):
        self.db = db
        self.repo = PedidoRepository(db)
        self.event_bus = event_bus
        self.numeracao = numeracao or criar_estrategia(ORDER_NUMBER_STRATEGY)
        self.max_tentativas = max(1, max_tentativas)
        self.validar_transicoes = validar_transicoes

    # ---------------------------------------------------------------- criação
    def _validar_itens(self, itens: List[PedidoItemRequest]) -> None:
        if not itens:
            raise ValidationError("O pedido deve ter pelo menos um item")
        for idx, item in enumerate(itens, start=1):
            if item.quantidade is None or item.quantidade < 1:
                raise ValidationError(
                    f"Item {idx}: quantidade deve ser um inteiro maior ou igual a 1"
                )
            if item.quantidade > PEDIDO_QUANTIDADE_MAXIMA:
                raise ValidationError(
                    f"Item {idx}: quantidade máxima por item é {PEDIDO_QUANTIDADE_MAXIMA}"
                )

    def _resolver_produtos(self, itens: List[PedidoItemRequest]) -> Dict[int, ProdutoModel]:
        produtos = self.repo.get_produtos_por_ids(i.produto_id for i in itens)
        for item in itens:
            produto = produtos.get(item.produto_id)
            if produto is None:
                raise NotFoundError(f"Produto {item.produto_id} não encontrado")
            if not produto.disponivel:
                raise ValidationError(f"Produto '{produto.nome}' está indisponível")
        return produtos

    @staticmethod
    def _calcular_linhas(
        itens: List[PedidoItemRequest], produtos: Dict[int, ProdutoModel]
    ) -> Tuple[List[dict], Decimal]:
        """Captura o preço atual de cada produto e soma os subtotais em Decimal."""
        linhas = []
        total = Decimal("0.00")
        for item in itens:
            preco = para_decimal(produtos[item.produto_id].preco)
            subtotal = para_decimal(preco * item.quantidade)
            total += subtotal
            linhas.append(
                dict(
                    produto_id=item.produto_id,
                    quantidade=item.quantidade,
                    preco_unitario=preco,
                    subtotal=subtotal,
                    observacao=item.observacao,
                )
            )
        total = para_decimal(total)
        if total > VALOR_MAXIMO_PEDIDO:
            raise ValidationError(f"Total do pedido excede o limite de {VALOR_MAXIMO_PEDIDO}")
        return linhas, total

    def criar_pedido(self, payload: PedidoCreateRequest, *, usuario_id: Optional[int] = None) -> PedidoModel:
        """
        Valida, precifica e grava pedido + itens numa única transação.
        Colisões de número são repetidas internamente.
        """
        self._validar_itens(payload.itens)

        usuario_id = payload.usuario_id or usuario_id
        if usuario_id is None:
            raise ValidationError("usuario_id é obrigatório")
        if self.repo.get_usuario(usuario_id) is None:
            raise NotFoundError(f"Usuário {usuario_id} não encontrado")

        produtos = self._resolver_produtos(payload.itens)
        linhas, total = self._calcular_linhas(payload.itens, produtos)

        pedido = None
        for tentativa in range(1, self.max_tentativas + 1):
            try:
                numero = self.numeracao.proximo_numero(self.db)
                pedido = self.repo.criar_pedido(
                    numero_pedido=numero,
                    usuario_id=usuario_id,
                    forma_pagamento=payload.forma_pagamento.value,
                    nome_cliente=payload.nome_cliente,
                    valor_total=total,
                    itens=linhas,
                )
                self.db.commit()
                break
            except ConflictError as e:
                self.db.rollback()
                logger.warning(
                    f"[Pedidos] Conflito de numeração (tentativa {tentativa}/{self.max_tentativas}): {e.detail}"
                )
            except IntegrityError as e:
                self.db.rollback()
                if conflito_numeracao(e):
                    logger.warning(
                        f"[Pedidos] Conflito de numeração no commit (tentativa {tentativa}/{self.max_tentativas})"
                    )
                    continue
                logger.error(f"[Pedidos] Erro de integridade ao gravar pedido: {e}")
                raise PersistenceError("Não foi possível gravar o pedido") from e
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"[Pedidos] Erro ao gravar pedido: {e}")
                raise PersistenceError("Não foi possível gravar o pedido") from e
        else:
            logger.error(f"[Pedidos] Numeração esgotou {self.max_tentativas} tentativas")
            raise PersistenceError("Não foi possível gerar o número do pedido, tente novamente")

        logger.info(
            f"[Pedidos] Criado pedido_id={pedido.id} numero={pedido.numero_pedido} "
            f"total={pedido.valor_total} itens={len(linhas)} usuario_id={usuario_id}"
        )
        self._publicar(
            EventType.VENDA_CONCLUIDA,
            {
                "pedido_id": pedido.id,
                "numero_pedido": pedido.numero_pedido,
                "valor_total": str(pedido.valor_total),
                "forma_pagamento": pedido.forma_pagamento,
                "usuario_id": pedido.usuario_id,
            },
        )
        return self.repo.get_pedido(pedido.id)

    # ----------------------------------------------------------------- status
    @staticmethod
    def _parse_status(novo_status: Union[PedidoStatusEnum, str]) -> PedidoStatusEnum:
        if isinstance(novo_status, PedidoStatusEnum):
            return novo_status
        try:
            return PedidoStatusEnum(novo_status)
        except ValueError:
            validos = ", ".join(s.value for s in PedidoStatusEnum)
            raise ValidationError(f"Status inválido: {novo_status!r}. Valores aceitos: {validos}")

    def atualizar_status(self, pedido_id: int, novo_status: Union[PedidoStatusEnum, str]) -> PedidoModel:
        """Altera apenas status e updated_at; total e itens não são tocados."""
        novo = self._parse_status(novo_status)

        pedido = self.repo.get_pedido(pedido_id)
        if not pedido:
            raise NotFoundError("Pedido não encontrado")

        atual = PedidoStatusEnum(pedido.status)
        if atual == novo:
            return pedido

        if self.validar_transicoes and not transicao_permitida(atual, novo):
            permitidos = ", ".join(s.value for s in proximos_status(atual)) or "nenhum (status final)"
            raise ValidationError(
                f"Transição de status inválida: {atual.value} -> {novo.value}. Permitidos: {permitidos}"
            )

        pedido.status = novo.value
        pedido.updated_at = agora_utc()
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"[Pedidos] Erro ao atualizar status do pedido {pedido_id}: {e}")
            raise PersistenceError("Não foi possível atualizar o status do pedido") from e

        logger.info(f"[Pedidos] Status pedido_id={pedido_id} {atual.value} -> {novo.value}")
        self._publicar(
            EventType.PEDIDO_STATUS_ALTERADO,
            {
                "pedido_id": pedido.id,
                "numero_pedido": pedido.numero_pedido,
                "status_anterior": atual.value,
                "status": novo.value,
            },
        )
        return pedido

    # ---------------------------------------------------------------- leitura
    def get_pedido(self, pedido_id: int, *, usuario_escopo: Optional[int] = None) -> PedidoModel:
        """Busca pedido com itens e comentários. usuario_escopo restringe ao dono."""
        pedido = self.repo.get_pedido(pedido_id, com_comentarios=True)
        if not pedido:
            raise NotFoundError("Pedido não encontrado")
        if usuario_escopo is not None and pedido.usuario_id != usuario_escopo:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Você não tem permissão para acessar este pedido",
            )
        return pedido

    def listar_pedidos(
        self,
        *,
        status_filtro: Optional[Union[PedidoStatusEnum, str]] = None,
        page: int = 1,
        limit: int = 20,
        usuario_escopo: Optional[int] = None,
    ) -> Tuple[List[PedidoModel], int]:
        status_valor = self._parse_status(status_filtro).value if status_filtro else None
        page = max(1, page)
        limit = max(1, min(limit, 100))
        return self.repo.listar(
            status=status_valor,
            usuario_id=usuario_escopo,
            skip=(page - 1) * limit,
            limit=limit,
        )

    # --------------------------------------------------------------- exclusão
    def deletar_pedido(self, pedido_id: int) -> None:
        pedido = self.repo.get_pedido(pedido_id, com_comentarios=True)
        if not pedido:
            raise NotFoundError("Pedido não encontrado")
        try:
            self.repo.delete(pedido)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"[Pedidos] Erro ao remover pedido {pedido_id}: {e}")
            raise PersistenceError("Não foi possível remover o pedido") from e
        logger.info(f"[Pedidos] Removido pedido_id={pedido_id} numero={pedido.numero_pedido}")

    # ---------------------------------------------------------------- eventos
    def _publicar(self, event_type: EventType, data: dict) -> None:
        """Notificação pós-commit; falhas aqui não desfazem o pedido."""
        if self.event_bus is None:
            return
        self.event_bus.publish(event_type, data)
