import re

from config import WHATSAPP_CONFIG


def somente_digitos(numero):
    return re.sub(r"\D", "", numero or "")


def normalizar_telefone(numero, ddi=None):
    """Telefone no formato guardado em employees.phone: só dígitos e sem o DDI."""
    ddi = WHATSAPP_CONFIG['ddi'] if ddi is None else ddi
    numero = somente_digitos(numero)
    if ddi and numero.startswith(ddi) and len(numero) > len(ddi):
        numero = numero[len(ddi):]
    return numero
