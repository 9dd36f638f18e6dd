from sqlalchemy.orm import Session

from pdv.api.loja.models.model_loja_configuracao import LojaConfiguracaoModel
from pdv.api.loja.schemas.schema_loja import LojaConfiguracaoResponse, LojaConfiguracaoUpdate
from pdv.utils.logger import logger


class LojaConfiguracaoService:
    """Configuração da loja é um registro único, criado na primeira leitura."""

    def __init__(self, db: Session):
        self.db = db

    def _obter_ou_criar(self) -> LojaConfiguracaoModel:
        config = self.db.query(LojaConfiguracaoModel).order_by(LojaConfiguracaoModel.id.asc()).first()
        if config is None:
            config = LojaConfiguracaoModel()
            self.db.add(config)
            self.db.commit()
            self.db.refresh(config)
        return config

    def get(self) -> LojaConfiguracaoResponse:
        return LojaConfiguracaoResponse.model_validate(self._obter_ou_criar())

    def update(self, data: LojaConfiguracaoUpdate) -> LojaConfiguracaoResponse:
        config = self._obter_ou_criar()
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(config, key, value)
        self.db.commit()
        self.db.refresh(config)
        logger.info("[Loja] Configurações da loja atualizadas")
        return LojaConfiguracaoResponse.model_validate(config)
