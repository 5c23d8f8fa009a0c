import os
from dotenv import load_dotenv
import pytz

load_dotenv()

TZ = pytz.timezone(os.getenv("TIMEZONE", "Europe/Lisbon"))

WHATSAPP_CONFIG = {
    "instance_id": os.getenv("ZAPI_INSTANCE_ID"),
    "instance_token": os.getenv("ZAPI_INSTANCE_TOKEN"),
    "client_token": os.getenv("ZAPI_CLIENT_TOKEN"),
    "ddi": os.getenv("WHATSAPP_DDI", "351"),
}

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER"),
    "password": os.getenv("DB_PASSWORD"),
    "database": os.getenv("DB_NAME"),
}

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
INICIAR_AGENDADOR = bool(int(os.getenv("INICIAR_AGENDADOR", "1")))
GEOCODIFICAR_LOCALIZACAO = bool(int(os.getenv("GEOCODIFICAR_LOCALIZACAO", "0")))

HORARIO_INICIO_PADRAO = "08:00"
HORARIO_FIM_PADRAO = "17:00"

VALIDADE_LOCALIZACAO_MINUTOS = 5

LEMBRETE_ENTRADA = "09:00"
LEMBRETE_SAIDA = "18:00"
TOLERANCIA_LEMBRETE_MINUTOS = 15
INTERVALO_ENTRE_MENSAGENS = 2

PAUSA_LIMITE_MINUTOS = 15
PAUSA_AVISO_INTERVALO_MINUTOS = 30

LIMITE_WEBHOOK = os.getenv("LIMITE_WEBHOOK", "50 per minute")
LIMITE_API = os.getenv("LIMITE_API", "100 per 15 minutes")
TAMANHO_MAXIMO_REQUISICAO = 1024 * 1024

url_whatsapp_api = os.getenv(
    "URL_API_WHATSAPP",
    f"https://api.z-api.io/instances/{WHATSAPP_CONFIG['instance_id']}/token/{WHATSAPP_CONFIG['instance_token']}",
)
