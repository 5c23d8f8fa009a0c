import mysql.connector
import logging
from contextlib import contextmanager
from config import DB_CONFIG


def conectar_mysql():
    try:
        conn = mysql.connector.connect(**DB_CONFIG)
        return conn
    except Exception as e:
        logging.error(f"Erro ao conectar no MySQL: {e}")
        raise


@contextmanager
def db_cursor(conectar=conectar_mysql):
    """Abre uma conexão curta, entrega um cursor em modo dicionário e faz commit no fim.

    Qualquer exceção dentro do bloco provoca rollback e é propagada.
    """
    conn = conectar()
    try:
        cursor = conn.cursor(dictionary=True, buffered=True)
        try:
            yield cursor
            conn.commit()
        finally:
            cursor.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
