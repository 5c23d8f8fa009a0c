import re

COMANDOS_VALIDOS = ("entrada", "saida", "pausa", "volta", "horas")


def extrair_comando(mensagem):
    """Primeira palavra da mensagem que seja um comando conhecido, ou None."""
    if not mensagem:
        return None
    for palavra in re.split(r"\s+", mensagem.strip().lower()):
        if palavra in COMANDOS_VALIDOS:
            return palavra
    return None
