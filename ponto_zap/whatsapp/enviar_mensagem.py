import requests

import logging
from config import WHATSAPP_CONFIG, url_whatsapp_api

from ponto_zap.whatsapp.telefone import somente_digitos

url = f"{url_whatsapp_api}/send-text"


def com_ddi(numero, ddi=None):
    ddi = WHATSAPP_CONFIG['ddi'] if ddi is None else ddi
    numero = somente_digitos(numero)
    if ddi and not numero.startswith(ddi):
        numero = ddi + numero
    return numero


def enviar_mensagem(numero, mensagem):
    """Envia texto pela Z-API. Falhas são registradas no log e nunca propagadas."""
    numero = com_ddi(numero)
    try:
        headers = {"Content-Type": "application/json", "Client-Token": WHATSAPP_CONFIG['client_token'] or ""}
        payload = {"phone": numero, "message": mensagem}
        r = requests.post(url, json=payload, headers=headers, timeout=10)
        r.raise_for_status()
        logging.info(f"Mensagem enviada para {numero}")
        return True
    except Exception as e:
        logging.error(f"Erro ao enviar mensagem para {numero}: {e}")
        return False
