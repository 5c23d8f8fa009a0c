from flask import Blueprint, current_app, request, jsonify
from flask_limiter.util import get_remote_address

import logging

from ponto_zap.whatsapp.payload import ler_payload_zapi, ler_payload_simulacao, origem_ignorada

webhook_bp = Blueprint("webhook", __name__)
simulacao_bp = Blueprint("simulacao", __name__)


def processador():
    return current_app.extensions["ponto_zap"]["processador"]


def endereco_cliente():
    """IP do cliente, respeitando o primeiro salto do X-Forwarded-For."""
    encaminhado = request.headers.get("X-Forwarded-For", "")
    return encaminhado.split(",")[0].strip() or get_remote_address()


@webhook_bp.route("/webhook", methods=["POST"])
def webhook():
    dados = request.get_json(silent=True)
    logging.info(f"Payload recebido: {dados}")
    if origem_ignorada(dados):
        return jsonify(status="ignorado")
    evento = ler_payload_zapi(dados)
    if evento is None:
        return jsonify(status="sem_telefone")
    if evento.vazio:
        return jsonify(status="ignorado")

    resposta = processador().processar(evento.telefone, evento.texto, evento.localizacao)

    enviar = current_app.extensions["ponto_zap"]["enviar"]
    if enviar(evento.telefone, resposta) is False:
        # o registro já foi gravado, só a resposta se perdeu
        logging.error(f"Resposta não entregue para {evento.telefone}")
        return jsonify(status="resposta_nao_enviada")
    return jsonify(status="processado")


@simulacao_bp.route("/simular", methods=["POST"])
def simular():
    dados = request.get_json(silent=True) or {}
    evento = ler_payload_simulacao(dados)
    if evento is None or evento.vazio:
        return jsonify(message="Phone and message are required"), 400

    resposta = processador().processar(evento.telefone, evento.texto, evento.localizacao)
    return jsonify(success=True, response=resposta)
