from dataclasses import dataclass
from typing import Optional

from ponto_zap.ponto.modelos import Localizacao
from ponto_zap.whatsapp.telefone import normalizar_telefone


@dataclass(frozen=True)
class EventoRecebido:
    telefone: str
    texto: str
    localizacao: Optional[Localizacao] = None

    @property
    def somente_localizacao(self):
        return self.localizacao is not None and not self.texto

    @property
    def vazio(self):
        return not self.texto and self.localizacao is None


def origem_ignorada(dados):
    """Eco das mensagens enviadas pelo próprio número ou evento de grupo."""
    dados = dados or {}
    return bool(dados.get("fromMe") or dados.get("isGroup"))


def ler_payload_zapi(dados):
    """Converte o corpo do webhook da Z-API num EventoRecebido.

    Devolve None quando não há telefone ou quando o evento não vem de um funcionário.
    """
    dados = dados or {}
    if origem_ignorada(dados):
        return None
    tel = normalizar_telefone(str(dados.get("phone", "")))
    if not tel:
        return None
    texto = dados.get("text") or {}
    msg = texto.get("message", "") if isinstance(texto, dict) else str(texto)
    return EventoRecebido(
        telefone=tel,
        texto=(msg or "").strip(),
        localizacao=Localizacao.de_payload(dados.get("location")),
    )


def ler_payload_simulacao(dados):
    dados = dados or {}
    tel = normalizar_telefone(str(dados.get("phone", "")))
    if not tel:
        return None
    return EventoRecebido(
        telefone=tel,
        texto=str(dados.get("message") or "").strip(),
        localizacao=Localizacao.de_payload(dados.get("location")),
    )
