from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from config import TZ
from ponto_zap.ponto.modelos import Funcionario, RegistroPonto, TipoRegistro


def local(ano, mes, dia, hora=0, minuto=0):
    return TZ.localize(datetime(ano, mes, dia, hora, minuto))


class Relogio:
    def __init__(self, inicio: datetime):
        self.agora = inicio

    def __call__(self) -> datetime:
        return self.agora

    def avancar(self, minutos: int = 0, segundos: int = 0) -> datetime:
        self.agora = self.agora + timedelta(minutes=minutos, seconds=segundos)
        return self.agora

    def definir(self, momento: datetime) -> datetime:
        self.agora = momento
        return self.agora


class InMemoryArmazenamento:
    def __init__(self):
        self.funcionarios: dict[int, Funcionario] = {}
        self.registros: list[RegistroPonto] = []
        self.mensagens: dict[int, dict] = {}
        self.configuracoes: dict[str, str] = {}
        self.falhar: set[str] = set()
        self.consultas_ultimo = 0

    def _verificar(self, operacao: str):
        if operacao in self.falhar:
            raise RuntimeError(f"falha simulada em {operacao}")

    def adicionar_funcionario(self, id: int, nome: str, telefone: str, ativo: bool = True) -> Funcionario:
        f = Funcionario(id=id, nome=nome, telefone=telefone, departamento="Geral", ativo=ativo)
        self.funcionarios[id] = f
        return f

    def adicionar_registro(self, funcionario_id: int, tipo: TipoRegistro, data_hora: datetime) -> RegistroPonto:
        r = RegistroPonto(id=len(self.registros) + 1, funcionario_id=funcionario_id, tipo=tipo, data_hora=data_hora)
        self.registros.append(r)
        return r

    def registros_de(self, funcionario_id: int) -> list[RegistroPonto]:
        return [r for r in self.registros if r.funcionario_id == funcionario_id]

    def buscar_funcionario_por_telefone(self, telefone: str) -> Optional[Funcionario]:
        self._verificar("buscar_funcionario_por_telefone")
        return next((f for f in self.funcionarios.values() if f.telefone == telefone), None)

    def listar_funcionarios_ativos(self) -> list[Funcionario]:
        self._verificar("listar_funcionarios_ativos")
        return sorted((f for f in self.funcionarios.values() if f.ativo), key=lambda f: f.nome)

    def criar_registro(self, funcionario_id, tipo, data_hora, mensagem=None, localizacao=None) -> RegistroPonto:
        self._verificar("criar_registro")
        r = RegistroPonto(
            id=len(self.registros) + 1,
            funcionario_id=funcionario_id,
            tipo=tipo,
            data_hora=data_hora,
            mensagem=mensagem,
            latitude=localizacao.latitude if localizacao else None,
            longitude=localizacao.longitude if localizacao else None,
            endereco=localizacao.endereco if localizacao else None,
        )
        self.registros.append(r)
        return r

    def buscar_registros_do_dia(self, funcionario_id: int, dia: date) -> list[RegistroPonto]:
        self._verificar("buscar_registros_do_dia")
        itens = [r for r in self.registros_de(funcionario_id) if r.data_hora.astimezone(TZ).date() == dia]
        return sorted(itens, key=lambda r: (r.data_hora, r.id))

    def buscar_ultimo_registro(self, funcionario_id: int) -> Optional[RegistroPonto]:
        self._verificar("buscar_ultimo_registro")
        self.consultas_ultimo += 1
        itens = sorted(self.registros_de(funcionario_id), key=lambda r: (r.data_hora, r.id))
        return itens[-1] if itens else None

    def salvar_mensagem(self, telefone, mensagem, comando=None) -> int:
        self._verificar("salvar_mensagem")
        msg_id = len(self.mensagens) + 1
        self.mensagens[msg_id] = {
            "phone": telefone, "message": mensagem, "command": comando, "processed": False, "response": None,
        }
        return msg_id

    def marcar_mensagem_processada(self, mensagem_id, resposta) -> None:
        self.mensagens[mensagem_id].update(processed=True, response=resposta)

    def buscar_configuracao(self, chave: str) -> Optional[str]:
        self._verificar("buscar_configuracao")
        return self.configuracoes.get(chave)


class EnviosFalsos:
    def __init__(self):
        self.enviados: list[tuple[str, str]] = []
        self.falhar_para: set[str] = set()

    def __call__(self, telefone: str, texto: str) -> bool:
        if telefone in self.falhar_para:
            raise ConnectionError("Z-API indisponível")
        self.enviados.append((telefone, texto))
        return True

    def telefones(self) -> list[str]:
        return [t for t, _ in self.enviados]


ANA = "912345678"
BRUNO = "913333333"
CARLA = "914444444"


@pytest.fixture
def relogio():
    return Relogio(local(2025, 3, 10, 9, 30))


@pytest.fixture
def armazenamento():
    a = InMemoryArmazenamento()
    a.adicionar_funcionario(1, "Ana", ANA)
    a.adicionar_funcionario(2, "Bruno", BRUNO)
    a.adicionar_funcionario(3, "Carla", CARLA, ativo=False)
    return a


@pytest.fixture
def envios():
    return EnviosFalsos()
