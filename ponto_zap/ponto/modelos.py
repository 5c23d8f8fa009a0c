from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class TipoRegistro(str, Enum):
    ENTRADA = "entrada"
    SAIDA = "saida"
    PAUSA = "pausa"
    VOLTA = "volta"


class StatusFuncionario(str, Enum):
    """Estado derivado do último registro de ponto. Nunca é gravado."""

    TRABALHANDO = "trabalhando"
    PAUSA = "pausa"
    SAIU = "saiu"
    AUSENTE = "ausente"


@dataclass(frozen=True)
class Funcionario:
    id: int
    nome: str
    telefone: str
    departamento: str
    ativo: bool = True
    criado_em: Optional[datetime] = None


@dataclass(frozen=True)
class Localizacao:
    latitude: str
    longitude: str
    endereco: Optional[str] = None

    @classmethod
    def de_payload(cls, loc):
        if not loc:
            return None
        lat, lon = loc.get('latitude'), loc.get('longitude')
        if lat in (None, "") and lon in (None, ""):
            return None
        return cls(
            latitude=str(lat) if lat is not None else "",
            longitude=str(lon) if lon is not None else "",
            endereco=loc.get('address') or None,
        )


@dataclass(frozen=True)
class RegistroPonto:
    id: int
    funcionario_id: int
    tipo: TipoRegistro
    data_hora: datetime
    mensagem: Optional[str] = None
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    endereco: Optional[str] = None

