from conftest import local

from ponto_zap.ponto.horas import calcular_horas
from ponto_zap.ponto.modelos import RegistroPonto, TipoRegistro
from ponto_zap.utils.horario import formatar_duracao


def registros(*itens):
    return [
        RegistroPonto(id=i, funcionario_id=1, tipo=tipo, data_hora=local(2025, 3, 10, h, m))
        for i, (tipo, h, m) in enumerate(itens, start=1)
    ]


def test_dia_com_pausa_completa():
    dia = registros(
        (TipoRegistro.ENTRADA, 8, 0),
        (TipoRegistro.PAUSA, 10, 0),
        (TipoRegistro.VOLTA, 10, 15),
        (TipoRegistro.SAIDA, 12, 0),
    )
    trabalhado, pausa = calcular_horas(dia, local(2025, 3, 10, 20, 0))
    assert trabalhado == 105
    assert pausa == 15
    assert formatar_duracao(trabalhado) == "1h45m"
    assert formatar_duracao(pausa) == "15m"


def test_ordem_de_entrada_nao_importa():
    dia = registros(
        (TipoRegistro.SAIDA, 12, 0),
        (TipoRegistro.ENTRADA, 8, 0),
    )
    assert calcular_horas(dia, local(2025, 3, 10, 20, 0)) == (240, 0)


def test_entrada_aberta_conta_ate_agora():
    dia = registros((TipoRegistro.ENTRADA, 9, 0))
    assert calcular_horas(dia, local(2025, 3, 10, 11, 30)) == (150, 0)


def test_pausa_aberta_conta_como_pausa_e_como_trabalho():
    dia = registros((TipoRegistro.ENTRADA, 9, 0), (TipoRegistro.PAUSA, 11, 0))
    trabalhado, pausa = calcular_horas(dia, local(2025, 3, 10, 11, 20))
    assert pausa == 20
    assert trabalhado == 140


def test_sem_registros():
    assert calcular_horas([], local(2025, 3, 10, 12, 0)) == (0, 0)


def test_formatar_duracao():
    assert formatar_duracao(0) == "0m"
    assert formatar_duracao(59) == "59m"
    assert formatar_duracao(60) == "1h00m"
    assert formatar_duracao(605) == "10h05m"
