import logging
import threading

from config import HORARIO_INICIO_PADRAO, HORARIO_FIM_PADRAO, VALIDADE_LOCALIZACAO_MINUTOS

from ponto_zap.ponto import mensagens
from ponto_zap.ponto.comandos import extrair_comando
from ponto_zap.ponto.estado import DESCRICOES, aplicar_comando, reconstruir_estado, status_de_registro
from ponto_zap.ponto.horas import calcular_horas
from ponto_zap.ponto.modelos import Localizacao, TipoRegistro
from ponto_zap.utils.cache_expiravel import CacheExpiravel
from ponto_zap.utils.horario import agora_local, converter_hora_para_time, para_fuso_local
from ponto_zap.whatsapp.payload import EventoRecebido


class ProcessadorMensagens:
    """Recebe o texto (e a localização opcional) enviado por um telefone e devolve a resposta.

    Uma mensagem é processada de cada vez. O estado de ponto de cada funcionário fica em
    memória e só é reconstruído a partir do banco na primeira vez que é preciso.
    """

    def __init__(self, armazenamento, localizacoes=None, relogio=agora_local, resolver_endereco=None):
        self.armazenamento = armazenamento
        if localizacoes is None:
            localizacoes = CacheExpiravel(VALIDADE_LOCALIZACAO_MINUTOS, relogio=relogio)
        self.localizacoes = localizacoes
        self._relogio = relogio
        self._resolver_endereco = resolver_endereco
        self._estados = {}
        self._lock = threading.Lock()

    def processar(self, telefone, texto, localizacao=None):
        with self._lock:
            try:
                return self._processar(telefone, (texto or "").strip(), localizacao)
            except Exception:
                logging.exception(f"Erro ao processar mensagem de {telefone}")
                return mensagens.ERRO_INTERNO

    def _processar(self, telefone, texto, localizacao):
        if EventoRecebido(telefone, texto, localizacao).somente_localizacao:
            return self._guardar_localizacao(telefone, localizacao)

        comando = extrair_comando(texto)
        msg_id = self.armazenamento.salvar_mensagem(telefone, texto, comando)
        logging.info(f"Mensagem de {telefone}: comando={comando}")

        resposta = self._responder(telefone, comando, localizacao)
        self.armazenamento.marcar_mensagem_processada(msg_id, resposta)
        return resposta

    def _guardar_localizacao(self, telefone, localizacao):
        msg_id = self.armazenamento.salvar_mensagem(
            telefone, f"[localização] {localizacao.latitude},{localizacao.longitude}"
        )
        localizacao = self._completar_endereco(localizacao)
        self.localizacoes.guardar(telefone, localizacao)
        logging.info(f"Localização recebida de {telefone}: lat={localizacao.latitude}, lng={localizacao.longitude}")
        self.armazenamento.marcar_mensagem_processada(msg_id, mensagens.LOCALIZACAO_RECEBIDA)
        return mensagens.LOCALIZACAO_RECEBIDA

    def _completar_endereco(self, localizacao):
        if localizacao.endereco or not self._resolver_endereco:
            return localizacao
        endereco = self._resolver_endereco(localizacao.latitude, localizacao.longitude)
        return Localizacao(localizacao.latitude, localizacao.longitude, endereco)

    def _responder(self, telefone, comando, localizacao):
        if not comando:
            return mensagens.AJUDA

        func = self.armazenamento.buscar_funcionario_por_telefone(telefone)
        if not func:
            return mensagens.FUNCIONARIO_NAO_ENCONTRADO
        if not func.ativo:
            return mensagens.CONTA_INATIVA

        agora = para_fuso_local(self._relogio())
        if comando == "horas":
            return self._resumo_horas(func, agora)

        tipo = TipoRegistro(comando)
        estado = self._estado(func.id, agora)
        janela = self._janela_de_trabalho() if tipo == TipoRegistro.ENTRADA else None
        transicao = aplicar_comando(estado, tipo, agora, func.nome, janela)
        if not transicao.aceita:
            logging.info(f"{func.nome}: {tipo.value} rejeitado no estado {estado.status.value}")
            return transicao.resposta

        temporaria = False
        if localizacao is None:
            localizacao = self.localizacoes.obter(telefone)
            temporaria = localizacao is not None
        elif self._resolver_endereco:
            localizacao = self._completar_endereco(localizacao)

        self.armazenamento.criar_registro(func.id, tipo, agora, DESCRICOES[tipo], localizacao)
        self._estados[func.id] = transicao.estado
        if temporaria:
            self.localizacoes.limpar(telefone)
            logging.info(f"Usando localização temporária para {telefone}")

        logging.info(f"{func.nome}: {tipo.value} registrado às {agora:%H:%M}")
        if localizacao is None:
            return transicao.resposta + mensagens.DICA_LOCALIZACAO
        return transicao.resposta

    def _estado(self, funcionario_id, agora):
        estado = self._estados.get(funcionario_id)
        if estado is None:
            ultimo = self.armazenamento.buscar_ultimo_registro(funcionario_id)
            registros = self.armazenamento.buscar_registros_do_dia(funcionario_id, agora.date())
            estado = reconstruir_estado(ultimo, registros, agora.date())
            self._estados[funcionario_id] = estado
        return estado

    def _janela_de_trabalho(self):
        try:
            inicio = converter_hora_para_time(self.armazenamento.buscar_configuracao("startTime"))
            fim = converter_hora_para_time(self.armazenamento.buscar_configuracao("endTime"))
        except Exception as e:
            # sem configuração legível a entrada é liberada
            logging.error(f"Erro ao ler horário de trabalho: {e}")
            return None
        return (
            inicio or converter_hora_para_time(HORARIO_INICIO_PADRAO),
            fim or converter_hora_para_time(HORARIO_FIM_PADRAO),
        )

    def _resumo_horas(self, func, agora):
        registros = sorted(
            self.armazenamento.buscar_registros_do_dia(func.id, agora.date()),
            key=lambda r: r.data_hora,
        )
        trabalhado, pausa = calcular_horas(registros, agora)
        status = status_de_registro(registros[-1] if registros else None)
        return mensagens.resumo_horas(func.nome, trabalhado, pausa, status)
