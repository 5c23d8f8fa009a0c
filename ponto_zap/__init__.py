from flask import Flask, jsonify
from flask_limiter import Limiter

import config


def create_app(armazenamento=None, enviar=None, iniciar_agendador=None, relogio=None):
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.TAMANHO_MAXIMO_REQUISICAO

    from ponto_zap.agendador.lembretes import AgendadorLembretes
    from ponto_zap.ponto.processador import ProcessadorMensagens
    from ponto_zap.routes.webhook import endereco_cliente, simulacao_bp, webhook_bp
    from ponto_zap.utils.coordenada_para_endereco import coordenada_para_endereco
    from ponto_zap.utils.horario import agora_local

    if armazenamento is None:
        from ponto_zap.database.armazenamento import ArmazenamentoMySQL
        armazenamento = ArmazenamentoMySQL()
    if enviar is None:
        from ponto_zap.whatsapp.enviar_mensagem import enviar_mensagem
        enviar = enviar_mensagem
    if iniciar_agendador is None:
        iniciar_agendador = config.INICIAR_AGENDADOR
    relogio = relogio or agora_local

    processador = ProcessadorMensagens(
        armazenamento,
        relogio=relogio,
        resolver_endereco=coordenada_para_endereco if config.GEOCODIFICAR_LOCALIZACAO else None,
    )
    agendador = AgendadorLembretes(armazenamento, enviar, relogio=relogio)

    app.extensions["ponto_zap"] = {
        "processador": processador,
        "agendador": agendador,
        "enviar": enviar,
    }
    limiter = Limiter(endereco_cliente, app=app, storage_uri="memory://")
    limiter.limit(config.LIMITE_WEBHOOK)(webhook_bp)
    limiter.limit(config.LIMITE_API)(simulacao_bp)
    app.register_blueprint(webhook_bp)
    app.register_blueprint(simulacao_bp)

    @app.errorhandler(429)
    def limite_excedido(e):
        return jsonify(message="Too many requests, please try again later."), 429

    if iniciar_agendador:
        agendador.iniciar()

    return app
