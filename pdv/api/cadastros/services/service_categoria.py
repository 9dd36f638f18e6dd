from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pdv.api.cadastros.models.model_categoria import CategoriaModel, CATEGORIA_PADRAO_NOME
from pdv.api.cadastros.repositories.repo_categoria import CategoriaRepository
from pdv.api.cadastros.schemas.schema_categoria import (
    CategoriaCreate,
    CategoriaExclusaoResponse,
    CategoriaResponse,
    CategoriaUpdate,
)
from pdv.api.shared.schemas.schema_shared_enums import EstrategiaExclusaoCategoriaEnum
from pdv.core.exceptions import ConflictError, NotFoundError, PersistenceError
from pdv.utils.logger import logger


class CategoriaService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = CategoriaRepository(db)

    def _categoria_or_404(self, categoria_id: int) -> CategoriaModel:
        categoria = self.repo.get_by_id(categoria_id)
        if not categoria:
            raise NotFoundError("Categoria não encontrada")
        return categoria

    def _nome_unico(self, nome: str, ignorar_id: Optional[int] = None) -> None:
        existente = self.repo.get_by_nome(nome)
        if existente and existente.id != ignorar_id:
            raise ConflictError(f"Já existe uma categoria com o nome '{nome}'")

    def create(self, data: CategoriaCreate) -> CategoriaResponse:
        self._nome_unico(data.nome)
        categoria = self.repo.create(**data.model_dump())
        logger.info(f"[Categorias] Criada categoria_id={categoria.id} nome={categoria.nome}")
        return self._to_response(categoria)

    def get_by_id(self, categoria_id: int) -> CategoriaResponse:
        return self._to_response(self._categoria_or_404(categoria_id))

    def list(self, ativo: Optional[bool] = None) -> List[CategoriaResponse]:
        return [self._to_response(c) for c in self.repo.list(ativo=ativo)]

    def update(self, categoria_id: int, data: CategoriaUpdate) -> CategoriaResponse:
        categoria = self._categoria_or_404(categoria_id)
        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("nome"):
            update_data["nome"] = update_data["nome"].strip()
            self._nome_unico(update_data["nome"], ignorar_id=categoria_id)
        categoria = self.repo.update(categoria, **update_data)
        logger.info(f"[Categorias] Atualizada categoria_id={categoria_id}")
        return self._to_response(categoria)

    def delete(
        self,
        categoria_id: int,
        estrategia: Optional[EstrategiaExclusaoCategoriaEnum] = None,
    ) -> CategoriaExclusaoResponse:
        """
        Remove a categoria. Com produtos vinculados a estratégia é obrigatória:
        reassign move os produtos para "Sem categoria"; cascade exclui os
        produtos, desde que nenhum esteja em pedidos.
        """
        categoria = self._categoria_or_404(categoria_id)
        quantidade = self.repo.contar_produtos(categoria_id)

        if quantidade and estrategia is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail={
                    "mensagem": "Categoria possui produtos vinculados. Informe a estratégia de exclusão.",
                    "quantidade_produtos": quantidade,
                    "estrategias": [e.value for e in EstrategiaExclusaoCategoriaEnum],
                },
            )

        destino_id = None
        try:
            if quantidade and estrategia == EstrategiaExclusaoCategoriaEnum.REASSIGN:
                if categoria.nome.lower() == CATEGORIA_PADRAO_NOME.lower():
                    raise ConflictError(
                        f"A categoria '{CATEGORIA_PADRAO_NOME}' não pode ser excluída enquanto tiver produtos"
                    )
                destino = self.repo.get_or_create_padrao()
                destino_id = destino.id
                self.repo.mover_produtos(categoria_id, destino_id)
            elif quantidade and estrategia == EstrategiaExclusaoCategoriaEnum.CASCADE:
                em_pedidos = self.repo.produtos_com_pedidos(categoria_id)
                if em_pedidos:
                    raise ConflictError(
                        f"{em_pedidos} produto(s) desta categoria constam em pedidos e não podem ser excluídos. "
                        "Use a estratégia reassign."
                    )
                self.repo.excluir_produtos(categoria_id)

            self.repo.delete(categoria)
            self.db.commit()
        except ConflictError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"[Categorias] Erro ao remover categoria_id={categoria_id}: {e}")
            raise PersistenceError("Não foi possível remover a categoria") from e

        logger.info(
            f"[Categorias] Removida categoria_id={categoria_id} estrategia="
            f"{estrategia.value if estrategia else None} produtos={quantidade}"
        )
        return CategoriaExclusaoResponse(
            categoria_id=categoria_id,
            estrategia=estrategia if quantidade else None,
            produtos_afetados=quantidade,
            categoria_destino_id=destino_id,
        )

    def _to_response(self, categoria: CategoriaModel) -> CategoriaResponse:
        return CategoriaResponse(
            id=categoria.id,
            nome=categoria.nome,
            descricao=categoria.descricao,
            cor=categoria.cor,
            ativo=categoria.ativo,
            quantidade_produtos=self.repo.contar_produtos(categoria.id),
            created_at=categoria.created_at,
            updated_at=categoria.updated_at,
        )
