import pytest

import config
from conftest import ANA

from ponto_zap import create_app
from ponto_zap.ponto import mensagens
from ponto_zap.ponto.modelos import TipoRegistro
from ponto_zap.utils import coordenada_para_endereco as geo


class RespostaNominatim:
    status_code = 200

    def json(self):
        return {"display_name": "Rua Augusta, Lisboa"}


@pytest.fixture
def app(armazenamento, envios, relogio):
    app = create_app(armazenamento=armazenamento, enviar=envios, iniciar_agendador=False, relogio=relogio)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def test_webhook_processa_comando_e_responde(client, armazenamento, envios):
    r = client.post("/webhook", json={"phone": "351" + ANA, "text": {"message": "Entrada"}})
    assert r.status_code == 200
    assert r.get_json()["status"] == "processado"
    assert [x.tipo for x in armazenamento.registros] == [TipoRegistro.ENTRADA]
    assert envios.telefones() == [ANA]
    assert "Entrada registrada" in envios.enviados[0][1]


def test_webhook_localizacao_depois_comando(client, armazenamento, envios):
    client.post("/webhook", json={
        "phone": "+351 " + ANA,
        "location": {"latitude": 38.72, "longitude": -9.13, "address": "Baixa"},
    })
    assert envios.enviados[0][1] == mensagens.LOCALIZACAO_RECEBIDA
    assert armazenamento.registros == []

    client.post("/webhook", json={"phone": "351" + ANA, "text": {"message": "entrada"}})
    registro = armazenamento.registros[0]
    assert (registro.latitude, registro.longitude, registro.endereco) == ("38.72", "-9.13", "Baixa")


def test_webhook_sem_telefone(client, envios):
    r = client.post("/webhook", json={"text": {"message": "entrada"}})
    assert r.get_json()["status"] == "sem_telefone"
    assert envios.enviados == []


def test_webhook_sem_texto_nem_localizacao_ignorado(client, armazenamento, envios):
    r = client.post("/webhook", json={"phone": "351" + ANA, "image": {"imageUrl": "x"}})
    assert r.get_json()["status"] == "ignorado"
    assert armazenamento.mensagens == {}


def test_webhook_falha_no_envio_mantem_registro(armazenamento, relogio):
    app = create_app(armazenamento=armazenamento, enviar=lambda tel, txt: False, iniciar_agendador=False, relogio=relogio)
    r = app.test_client().post("/webhook", json={"phone": "351" + ANA, "text": {"message": "entrada"}})
    assert r.get_json()["status"] == "resposta_nao_enviada"
    assert len(armazenamento.registros) == 1


def test_webhook_erro_de_banco_responde_erro_generico(client, armazenamento, envios):
    armazenamento.falhar.add("buscar_funcionario_por_telefone")
    r = client.post("/webhook", json={"phone": "351" + ANA, "text": {"message": "entrada"}})
    assert r.status_code == 200
    assert envios.enviados == [(ANA, mensagens.ERRO_INTERNO)]


def test_simular_devolve_resposta_sem_enviar(client, envios):
    r = client.post("/simular", json={"phone": ANA, "message": "horas"})
    assert r.status_code == 200
    body = r.get_json()
    assert body["success"] is True
    assert "Resumo de hoje" in body["response"]
    assert envios.enviados == []


def test_simular_exige_telefone_e_mensagem(client):
    assert client.post("/simular", json={"phone": ANA}).status_code == 400
    assert client.post("/simular", json={"message": "entrada"}).status_code == 400


def test_webhook_ignora_eco_das_proprias_respostas(client, armazenamento, envios):
    client.post("/webhook", json={"phone": "351" + ANA, "text": {"message": "entrada"}})
    resposta_do_bot = envios.enviados[0][1]

    r = client.post("/webhook", json={"phone": "351" + ANA, "fromMe": True, "text": {"message": resposta_do_bot}})
    assert r.get_json()["status"] == "ignorado"
    r = client.post("/webhook", json={"phone": "351" + ANA, "isGroup": True, "text": {"message": "entrada"}})
    assert r.get_json()["status"] == "ignorado"
    assert len(envios.enviados) == 1
    assert len(armazenamento.mensagens) == 1


def test_limite_de_requisicoes_por_cliente(monkeypatch, armazenamento, envios, relogio):
    monkeypatch.setattr(config, "LIMITE_API", "2 per minute")
    app = create_app(armazenamento=armazenamento, enviar=envios, iniciar_agendador=False, relogio=relogio)
    client = app.test_client()

    for _ in range(2):
        assert client.post("/simular", json={"phone": ANA, "message": "horas"}).status_code == 200
    r = client.post("/simular", json={"phone": ANA, "message": "horas"})
    assert r.status_code == 429
    assert "Too many requests" in r.get_json()["message"]

    # outro cliente atrás do proxy tem a sua própria cota
    r = client.post("/simular", json={"phone": ANA, "message": "horas"}, headers={"X-Forwarded-For": "10.0.0.9"})
    assert r.status_code == 200


def test_corpo_acima_de_1mb_rejeitado(client, armazenamento):
    r = client.post("/webhook", data="x" * (1024 * 1024 + 1), content_type="application/json")
    assert r.status_code == 413
    assert armazenamento.mensagens == {}


def test_webhook_geocodifica_localizacao_sem_endereco(monkeypatch, armazenamento, envios, relogio):
    monkeypatch.setattr(config, "GEOCODIFICAR_LOCALIZACAO", True)
    monkeypatch.setattr(geo.requests, "get", lambda *a, **k: RespostaNominatim())
    app = create_app(armazenamento=armazenamento, enviar=envios, iniciar_agendador=False, relogio=relogio)
    client = app.test_client()

    client.post("/webhook", json={"phone": "351" + ANA, "location": {"latitude": 38.71, "longitude": -9.14}})
    client.post("/webhook", json={"phone": "351" + ANA, "text": {"message": "entrada"}})
    assert armazenamento.registros[0].endereco == "Rua Augusta, Lisboa"
