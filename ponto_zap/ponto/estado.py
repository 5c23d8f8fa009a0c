"""Máquina de estados do ponto.

O estado de cada funcionário é derivado do log de registros (append-only) e depois
mantido em memória. As transições são funções puras de (estado, comando, agora) para
(novo estado, registro a criar, resposta).
"""
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from ponto_zap.ponto import mensagens
from ponto_zap.ponto.erros import ComandoDesconhecido
from ponto_zap.ponto.modelos import StatusFuncionario, TipoRegistro
from ponto_zap.utils.horario import esta_no_horario_de_trabalho, para_fuso_local

STATUS_POR_TIPO = {
    TipoRegistro.ENTRADA: StatusFuncionario.TRABALHANDO,
    TipoRegistro.VOLTA: StatusFuncionario.TRABALHANDO,
    TipoRegistro.PAUSA: StatusFuncionario.PAUSA,
    TipoRegistro.SAIDA: StatusFuncionario.SAIU,
}

TITULOS = {
    TipoRegistro.ENTRADA: "✅ Entrada registrada com sucesso!",
    TipoRegistro.SAIDA: "✅ Saída registrada com sucesso!",
    TipoRegistro.PAUSA: "⏸️ Pausa iniciada!",
    TipoRegistro.VOLTA: "▶️ Volta da pausa registrada!",
}

DESCRICOES = {
    TipoRegistro.ENTRADA: "Entrada registrada via WhatsApp",
    TipoRegistro.SAIDA: "Saída registrada via WhatsApp",
    TipoRegistro.PAUSA: "Pausa iniciada via WhatsApp",
    TipoRegistro.VOLTA: "Volta da pausa via WhatsApp",
}


@dataclass(frozen=True)
class EstadoPonto:
    status: StatusFuncionario = StatusFuncionario.AUSENTE
    desde: Optional[datetime] = None
    ultima_entrada: Optional[date] = None
    ultima_saida: Optional[date] = None

    def entrou_em(self, dia):
        return self.ultima_entrada == dia

    def saiu_em(self, dia):
        return self.ultima_saida == dia


@dataclass(frozen=True)
class Transicao:
    estado: EstadoPonto
    efeito: Optional[TipoRegistro]
    resposta: str

    @property
    def aceita(self):
        return self.efeito is not None


def status_de_registro(registro):
    if registro is None:
        return StatusFuncionario.AUSENTE
    return STATUS_POR_TIPO[registro.tipo]


def reconstruir_estado(ultimo_registro, registros_do_dia, hoje):
    tipos_hoje = {r.tipo for r in registros_do_dia}
    return EstadoPonto(
        status=status_de_registro(ultimo_registro),
        desde=ultimo_registro.data_hora if ultimo_registro else None,
        ultima_entrada=hoje if TipoRegistro.ENTRADA in tipos_hoje else None,
        ultima_saida=hoje if TipoRegistro.SAIDA in tipos_hoje else None,
    )


def _rejeitar(estado, resposta):
    return Transicao(estado=estado, efeito=None, resposta=resposta)


def _aceitar(estado, tipo, agora, nome, **mudancas):
    novo = replace(estado, status=STATUS_POR_TIPO[tipo], desde=agora, **mudancas)
    return Transicao(estado=novo, efeito=tipo, resposta=mensagens.confirmacao(TITULOS[tipo], nome, agora))


def aplicar_comando(estado, comando, agora, nome, janela=None):
    """Decide se o comando é permitido no estado atual.

    `janela` é o par (inicio, fim) do horário de trabalho; None desliga a verificação,
    que só vale para a entrada.
    """
    agora = para_fuso_local(agora)
    hoje = agora.date()

    if comando == TipoRegistro.ENTRADA:
        if estado.entrou_em(hoje):
            return _rejeitar(estado, f"{nome}, você já registrou entrada hoje!")
        if janela and not esta_no_horario_de_trabalho(janela[0], janela[1], agora):
            return _rejeitar(estado, mensagens.fora_do_horario(janela[0], janela[1], agora))
        return _aceitar(estado, TipoRegistro.ENTRADA, agora, nome, ultima_entrada=hoje)

    if comando == TipoRegistro.SAIDA:
        if not estado.entrou_em(hoje):
            return _rejeitar(estado, f"{nome}, você precisa registrar entrada primeiro!")
        if estado.saiu_em(hoje):
            return _rejeitar(estado, f"{nome}, você já registrou saída hoje!")
        return _aceitar(estado, TipoRegistro.SAIDA, agora, nome, ultima_saida=hoje)

    if comando == TipoRegistro.PAUSA:
        if estado.status == StatusFuncionario.PAUSA:
            return _rejeitar(estado, f"{nome}, você já está em pausa!")
        if estado.status != StatusFuncionario.TRABALHANDO:
            return _rejeitar(estado, f"{nome}, você precisa estar trabalhando para fazer pausa!")
        return _aceitar(estado, TipoRegistro.PAUSA, agora, nome)

    if comando == TipoRegistro.VOLTA:
        if estado.status != StatusFuncionario.PAUSA:
            return _rejeitar(estado, f"{nome}, você não está em pausa!")
        return _aceitar(estado, TipoRegistro.VOLTA, agora, nome)

    raise ComandoDesconhecido(comando)
