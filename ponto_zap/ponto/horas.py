from ponto_zap.ponto.modelos import TipoRegistro
from ponto_zap.utils.horario import para_fuso_local


def calcular_horas(registros, agora):
    """Minutos trabalhados e minutos de pausa de uma sequência de registros do dia.

    Intervalos que ficam abertos no fim da sequência contam até `agora`. A pausa não
    fecha o intervalo de trabalho: com uma pausa ainda aberta, o tempo desde ela conta
    ao mesmo tempo como trabalhado e como pausa. Só a volta reinicia o trabalho.
    """
    agora = para_fuso_local(agora)
    trabalhado = 0.0
    pausa = 0.0
    inicio_trabalho = None
    inicio_pausa = None

    for r in sorted(registros, key=lambda x: x.data_hora):
        if r.tipo == TipoRegistro.ENTRADA:
            inicio_trabalho = r.data_hora
        elif r.tipo == TipoRegistro.PAUSA:
            inicio_pausa = r.data_hora
        elif r.tipo == TipoRegistro.VOLTA:
            if inicio_pausa is not None:
                pausa += (r.data_hora - inicio_pausa).total_seconds()
                inicio_pausa = None
            # a volta reabre o intervalo de trabalho a partir dela
            inicio_trabalho = r.data_hora
        elif r.tipo == TipoRegistro.SAIDA:
            if inicio_trabalho is not None:
                trabalhado += (r.data_hora - inicio_trabalho).total_seconds()
                inicio_trabalho = None
            if inicio_pausa is not None:
                pausa += (r.data_hora - inicio_pausa).total_seconds()
                inicio_pausa = None

    if inicio_trabalho is not None:
        trabalhado += max(0.0, (agora - inicio_trabalho).total_seconds())
    if inicio_pausa is not None:
        pausa += max(0.0, (agora - inicio_pausa).total_seconds())

    return int(trabalhado // 60), int(pausa // 60)
