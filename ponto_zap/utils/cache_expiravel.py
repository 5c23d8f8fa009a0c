import logging
import threading
from datetime import timedelta

from ponto_zap.utils.horario import agora_local


class CacheExpiravel:
    """Mapa chave -> valor em memória, com validade fixa por entrada.

    Só vive no processo atual: um restart perde tudo o que estava guardado.
    """

    def __init__(self, validade, relogio=agora_local):
        self.validade = validade if isinstance(validade, timedelta) else timedelta(minutes=validade)
        self._relogio = relogio
        self._itens = {}
        self._lock = threading.Lock()

    def _expirado(self, guardado_em, agora):
        return agora - guardado_em > self.validade

    def guardar(self, chave, valor):
        agora = self._relogio()
        with self._lock:
            self._itens[chave] = (valor, agora)
            vencidas = [k for k, (_, t) in self._itens.items() if self._expirado(t, agora)]
            for k in vencidas:
                del self._itens[k]
        if vencidas:
            logging.info(f"Cache: {len(vencidas)} entrada(s) expirada(s) removida(s)")

    def obter(self, chave):
        with self._lock:
            item = self._itens.get(chave)
        if item is None:
            return None
        valor, guardado_em = item
        if self._expirado(guardado_em, self._relogio()):
            return None
        return valor

    def limpar(self, chave):
        with self._lock:
            self._itens.pop(chave, None)

    def __len__(self):
        return len(self._itens)
