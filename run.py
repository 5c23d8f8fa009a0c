import logging
import os

from config import AUTO_INIT_DB

logging.basicConfig(level=logging.INFO)

from ponto_zap import create_app

if AUTO_INIT_DB:
    from ponto_zap.database.schema import inicializar_banco
    inicializar_banco()

app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")))
