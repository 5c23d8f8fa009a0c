import logging
import threading
import time as time_mod
from datetime import datetime, timedelta

from config import (
    LEMBRETE_ENTRADA, LEMBRETE_SAIDA, TOLERANCIA_LEMBRETE_MINUTOS, INTERVALO_ENTRE_MENSAGENS,
    PAUSA_LIMITE_MINUTOS, PAUSA_AVISO_INTERVALO_MINUTOS, TZ,
)

from ponto_zap.ponto import mensagens
from ponto_zap.ponto.modelos import TipoRegistro
from ponto_zap.utils.horario import agora_local, converter_hora_para_time, para_fuso_local


def horario_do_dia(hora, dia):
    return TZ.localize(datetime.combine(dia, hora))


def proximo_horario(hora, agora):
    """Próximo instante (>= agora) em que o relógio local marca `hora`."""
    agora = para_fuso_local(agora)
    alvo = horario_do_dia(hora, agora.date())
    if alvo < agora:
        alvo = horario_do_dia(hora, agora.date() + timedelta(days=1))
    return alvo


class AgendadorLembretes:
    """Lembretes automáticos: entrada às 09:00, saída às 18:00 e pausas longas.

    Um lembrete diário dispara quando o relógio está entre o horário previsto e o fim da
    tolerância, e no máximo uma vez por dia. Um tick perdido dentro da tolerância é
    recuperado no tick seguinte; depois disso o lembrete do dia é perdido.
    """

    def __init__(self, armazenamento, enviar, relogio=agora_local, intervalo_envio=INTERVALO_ENTRE_MENSAGENS,
                 tolerancia_minutos=TOLERANCIA_LEMBRETE_MINUTOS, dormir=time_mod.sleep):
        self.armazenamento = armazenamento
        self._enviar = enviar
        self._relogio = relogio
        self._intervalo_envio = intervalo_envio
        self._tolerancia = timedelta(minutes=tolerancia_minutos)
        self._dormir = dormir
        self._lembretes = [
            ("entrada", converter_hora_para_time(LEMBRETE_ENTRADA), self.enviar_lembretes_entrada),
            ("saida", converter_hora_para_time(LEMBRETE_SAIDA), self.enviar_lembretes_saida),
        ]
        self._disparados = {}
        self._ultimo_aviso_pausa = {}
        self._lock_envio = threading.Lock()
        self._parar = threading.Event()
        self._threads = []

    # -- disparo -----------------------------------------------------------

    def verificar_horarios(self, agora=None):
        agora = para_fuso_local(agora or self._relogio())
        for nome, hora, disparar in self._lembretes:
            previsto = horario_do_dia(hora, agora.date())
            if not (previsto <= agora < previsto + self._tolerancia):
                continue
            if self._disparados.get(nome) == agora.date():
                continue
            self._disparados[nome] = agora.date()
            if agora - previsto >= timedelta(minutes=1):
                logging.info(f"Lembrete de {nome} atrasado, disparando às {agora:%H:%M}")
            disparar(agora)

    def enviar_lembretes_entrada(self, agora=None):
        agora = para_fuso_local(agora or self._relogio())
        hora = f"{self._lembretes[0][1]:%H:%M}"
        logging.info(f"Verificando funcionários para lembrete de entrada às {hora}")
        enviados = 0
        for func in self._funcionarios_ativos():
            try:
                registros = self.armazenamento.buscar_registros_do_dia(func.id, agora.date())
                if any(r.tipo == TipoRegistro.ENTRADA for r in registros):
                    continue
                if self._enviar_lembrete(func, mensagens.lembrete_entrada(func.nome, hora)):
                    enviados += 1
            except Exception as e:
                logging.error(f"Erro no lembrete de entrada de {func.nome}: {e}")
        logging.info(f"Lembretes de entrada enviados: {enviados}")
        return enviados

    def enviar_lembretes_saida(self, agora=None):
        agora = para_fuso_local(agora or self._relogio())
        hora = f"{self._lembretes[1][1]:%H:%M}"
        logging.info(f"Verificando funcionários para lembrete de saída às {hora}")
        enviados = 0
        for func in self._funcionarios_ativos():
            try:
                tipos = {r.tipo for r in self.armazenamento.buscar_registros_do_dia(func.id, agora.date())}
                if TipoRegistro.ENTRADA not in tipos or TipoRegistro.SAIDA in tipos:
                    continue
                if self._enviar_lembrete(func, mensagens.lembrete_saida(func.nome, hora)):
                    enviados += 1
            except Exception as e:
                logging.error(f"Erro no lembrete de saída de {func.nome}: {e}")
        logging.info(f"Lembretes de saída enviados: {enviados}")
        return enviados

    def verificar_pausas(self, agora=None):
        agora = para_fuso_local(agora or self._relogio())
        limite = timedelta(minutes=PAUSA_LIMITE_MINUTOS)
        silencio = timedelta(minutes=PAUSA_AVISO_INTERVALO_MINUTOS)
        enviados = 0
        for func in self._funcionarios_ativos():
            try:
                ultimo = self.armazenamento.buscar_ultimo_registro(func.id)
                if not ultimo or ultimo.tipo != TipoRegistro.PAUSA:
                    continue
                decorrido = agora - ultimo.data_hora
                if decorrido < limite:
                    continue
                pausa_avisada, ultimo_aviso = self._ultimo_aviso_pausa.get(func.id, (None, None))
                if pausa_avisada == ultimo.id and agora - ultimo_aviso < silencio:
                    continue
                minutos = int(decorrido.total_seconds() // 60)
                if self._enviar_lembrete(func, mensagens.lembrete_pausa(func.nome, minutos)):
                    self._ultimo_aviso_pausa[func.id] = (ultimo.id, agora)
                    enviados += 1
            except Exception as e:
                logging.error(f"Erro ao verificar pausa de {func.nome}: {e}")
        return enviados

    def _funcionarios_ativos(self):
        try:
            return self.armazenamento.listar_funcionarios_ativos()
        except Exception as e:
            logging.error(f"Erro ao listar funcionários ativos: {e}")
            return []

    def _enviar_lembrete(self, func, texto):
        with self._lock_envio:
            ok = self._enviar(func.telefone, texto)
            if ok is not False:
                logging.info(f"Lembrete enviado para {func.nome} ({func.telefone})")
            self._dormir(self._intervalo_envio)
        return ok is not False

    # -- threads -----------------------------------------------------------

    def _monitor(self, verificar, intervalo):
        while not self._parar.is_set():
            try:
                verificar()
            except Exception as e:
                logging.error(f"Erro no agendador ({verificar.__name__}): {e}")
            self._parar.wait(intervalo)

    def iniciar(self, intervalo_horarios=60, intervalo_pausas=300):
        if self._threads:
            return
        self._parar.clear()
        self._threads = [
            threading.Thread(target=self._monitor, args=(self.verificar_horarios, intervalo_horarios), daemon=True),
            threading.Thread(target=self._monitor, args=(self.verificar_pausas, intervalo_pausas), daemon=True),
        ]
        for t in self._threads:
            t.start()
        agora = self._relogio()
        for nome, hora, _ in self._lembretes:
            logging.info(f"Próximo lembrete de {nome}: {proximo_horario(hora, agora):%d/%m %H:%M}")

    def parar(self):
        self._parar.set()
        for t in self._threads:
            t.join(timeout=1)
        self._threads = []
        logging.info("Sistema de lembretes automáticos parado")
