from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from pdv.api.catalogo.models.model_produto import ProdutoModel
from pdv.api.pedidos.models.model_pedido import PedidoModel
from pdv.api.pedidos.models.model_pedido_item import PedidoItemModel
from pdv.api.shared.schemas.schema_shared_enums import PedidoStatusEnum
from pdv.utils.monetario import para_decimal

# Pedidos cancelados ficam fora de todos os agregados
STATUS_EXCLUIDO = PedidoStatusEnum.CANCELLED.value


@dataclass
class PeriodoResumo:
    quantidade: int
    faturamento: Decimal


@dataclass
class ProdutoVendido:
    produto_id: int
    nome: str
    quantidade: int
    faturamento: Decimal


class RelatorioRepository:
    """Consultas somente leitura sobre pedidos. Intervalos são [inicio, fim) em UTC."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _periodo(self, query, inicio: datetime, fim: datetime):
        return query.filter(
            PedidoModel.status != STATUS_EXCLUIDO,
            PedidoModel.created_at >= inicio,
            PedidoModel.created_at < fim,
        )

    def resumo_periodo(self, inicio: datetime, fim: datetime) -> PeriodoResumo:
        quantidade, faturamento = self._periodo(
            self.db.query(
                func.count(PedidoModel.id),
                func.coalesce(func.sum(PedidoModel.valor_total), 0),
            ),
            inicio,
            fim,
        ).one()
        return PeriodoResumo(quantidade=int(quantidade or 0), faturamento=para_decimal(faturamento))

    def valores_por_pedido(self, inicio: datetime, fim: datetime) -> List[Tuple[datetime, Decimal]]:
        """(created_at, valor_total) de cada pedido; o agrupamento por dia local é feito no service."""
        rows = self._periodo(
            self.db.query(PedidoModel.created_at, PedidoModel.valor_total), inicio, fim
        ).all()
        return [(created_at, para_decimal(valor)) for created_at, valor in rows]

    def por_forma_pagamento(self, inicio: datetime, fim: datetime) -> Dict[str, PeriodoResumo]:
        rows = (
            self._periodo(
                self.db.query(
                    PedidoModel.forma_pagamento,
                    func.count(PedidoModel.id),
                    func.coalesce(func.sum(PedidoModel.valor_total), 0),
                ),
                inicio,
                fim,
            )
            .group_by(PedidoModel.forma_pagamento)
            .all()
        )
        return {
            forma: PeriodoResumo(quantidade=int(qtd or 0), faturamento=para_decimal(valor))
            for forma, qtd, valor in rows
        }

    def top_produtos(
        self, inicio: datetime, fim: datetime, limite: int, ordenar_por: str = "faturamento"
    ) -> List[ProdutoVendido]:
        quantidade = func.coalesce(func.sum(PedidoItemModel.quantidade), 0)
        faturamento = func.coalesce(func.sum(PedidoItemModel.subtotal), 0)
        principal, secundario = (
            (quantidade, faturamento) if ordenar_por == "quantidade" else (faturamento, quantidade)
        )
        rows = (
            self._periodo(
                self.db.query(
                    ProdutoModel.id,
                    ProdutoModel.nome,
                    quantidade.label("quantidade"),
                    faturamento.label("faturamento"),
                )
                .join(PedidoItemModel, PedidoItemModel.produto_id == ProdutoModel.id)
                .join(PedidoModel, PedidoModel.id == PedidoItemModel.pedido_id),
                inicio,
                fim,
            )
            .group_by(ProdutoModel.id, ProdutoModel.nome)
            .order_by(principal.desc(), secundario.desc(), ProdutoModel.nome.asc())
            .limit(limite)
            .all()
        )
        return [
            ProdutoVendido(
                produto_id=produto_id,
                nome=nome,
                quantidade=int(qtd or 0),
                faturamento=para_decimal(valor),
            )
            for produto_id, nome, qtd, valor in rows
        ]

    def pedidos_recentes(self, limite: int) -> List[PedidoModel]:
        return (
            self.db.query(PedidoModel)
            .options(selectinload(PedidoModel.itens))
            .filter(PedidoModel.status != STATUS_EXCLUIDO)
            .order_by(PedidoModel.created_at.desc(), PedidoModel.numero_pedido.desc())
            .limit(limite)
            .all()
        )
