import logging

from ponto_zap.database.mysql import db_cursor

TABELAS = {
    "employees": """
        CREATE TABLE IF NOT EXISTS employees (
            id INT AUTO_INCREMENT PRIMARY KEY,
            name VARCHAR(255) NOT NULL,
            phone VARCHAR(32) NOT NULL UNIQUE,
            department VARCHAR(255) NOT NULL,
            is_active TINYINT(1) NOT NULL DEFAULT 1,
            created_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
    """,
    "attendance_records": """
        CREATE TABLE IF NOT EXISTS attendance_records (
            id INT AUTO_INCREMENT PRIMARY KEY,
            employee_id INT NOT NULL,
            type VARCHAR(16) NOT NULL,
            timestamp DATETIME NOT NULL,
            message TEXT,
            INDEX idx_attendance_employee_timestamp (employee_id, timestamp),
            FOREIGN KEY (employee_id) REFERENCES employees(id) ON DELETE CASCADE
        )
    """,
    "whatsapp_messages": """
        CREATE TABLE IF NOT EXISTS whatsapp_messages (
            id INT AUTO_INCREMENT PRIMARY KEY,
            phone VARCHAR(32) NOT NULL,
            message TEXT NOT NULL,
            command VARCHAR(16),
            processed TINYINT(1) NOT NULL DEFAULT 0,
            response TEXT,
            timestamp DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
    """,
    "settings": """
        CREATE TABLE IF NOT EXISTS settings (
            id INT AUTO_INCREMENT PRIMARY KEY,
            `key` VARCHAR(64) NOT NULL UNIQUE,
            value TEXT NOT NULL,
            type VARCHAR(16) NOT NULL DEFAULT 'string',
            updated_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP
        )
    """,
}

# colunas de localização entraram depois da primeira versão da tabela
COLUNAS_LOCALIZACAO = {
    "latitude": "VARCHAR(32)",
    "longitude": "VARCHAR(32)",
    "address": "TEXT",
}


def colunas_existentes(cursor, tabela):
    cursor.execute(
        "SELECT COLUMN_NAME FROM INFORMATION_SCHEMA.COLUMNS WHERE TABLE_SCHEMA=DATABASE() AND TABLE_NAME=%s",
        (tabela,)
    )
    return {r['COLUMN_NAME'] for r in cursor.fetchall()}


def migrar_colunas_localizacao(cursor):
    existentes = colunas_existentes(cursor, "attendance_records")
    for coluna, tipo in COLUNAS_LOCALIZACAO.items():
        if coluna not in existentes:
            logging.info(f"Adicionando coluna attendance_records.{coluna}")
            cursor.execute(f"ALTER TABLE attendance_records ADD COLUMN {coluna} {tipo} NULL")


def criar_tabelas(cursor):
    for nome, ddl in TABELAS.items():
        logging.info(f"Verificando tabela {nome}")
        cursor.execute(ddl)
    migrar_colunas_localizacao(cursor)


def inicializar_banco():
    with db_cursor() as cursor:
        criar_tabelas(cursor)
    logging.info("Tabelas verificadas")
