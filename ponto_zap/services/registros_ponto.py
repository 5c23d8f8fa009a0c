from datetime import timedelta

from ponto_zap.ponto.modelos import RegistroPonto, TipoRegistro
from ponto_zap.utils.horario import do_banco, para_banco, inicio_do_dia

CAMPOS_REGISTRO = "id, employee_id, type, timestamp, message, latitude, longitude, address"


def registro_de_linha(row):
    return RegistroPonto(
        id=int(row['id']),
        funcionario_id=int(row['employee_id']),
        tipo=TipoRegistro(row['type']),
        data_hora=do_banco(row['timestamp']),
        mensagem=row.get('message'),
        latitude=row.get('latitude'),
        longitude=row.get('longitude'),
        endereco=row.get('address'),
    )


def criar_registro_ponto(cursor, funcionario_id, tipo, data_hora, mensagem=None, localizacao=None):
    lat = localizacao.latitude if localizacao else None
    lon = localizacao.longitude if localizacao else None
    endereco = localizacao.endereco if localizacao else None
    cursor.execute(
        """
        INSERT INTO attendance_records (employee_id, type, timestamp, message, latitude, longitude, address)
        VALUES (%s, %s, %s, %s, %s, %s, %s)
        """,
        (funcionario_id, tipo.value, para_banco(data_hora), mensagem, lat, lon, endereco)
    )
    return RegistroPonto(
        id=int(cursor.lastrowid),
        funcionario_id=funcionario_id,
        tipo=tipo,
        data_hora=data_hora,
        mensagem=mensagem,
        latitude=lat,
        longitude=lon,
        endereco=endereco,
    )


def buscar_registros_do_periodo(cursor, funcionario_id, inicio, fim):
    """Registros com inicio <= data_hora < fim, do mais antigo para o mais recente."""
    cursor.execute(
        f"""
        SELECT {CAMPOS_REGISTRO} FROM attendance_records
        WHERE employee_id=%s AND timestamp >= %s AND timestamp < %s
        ORDER BY timestamp ASC, id ASC
        """,
        (funcionario_id, para_banco(inicio), para_banco(fim))
    )
    return [registro_de_linha(r) for r in cursor.fetchall()]


def buscar_registros_do_dia(cursor, funcionario_id, dia):
    inicio = inicio_do_dia(dia)
    fim = inicio_do_dia(dia + timedelta(days=1))
    return buscar_registros_do_periodo(cursor, funcionario_id, inicio, fim)


def buscar_ultimo_registro(cursor, funcionario_id):
    cursor.execute(
        f"SELECT {CAMPOS_REGISTRO} FROM attendance_records WHERE employee_id=%s ORDER BY timestamp DESC, id DESC LIMIT 1",
        (funcionario_id,)
    )
    row = cursor.fetchone()
    return registro_de_linha(row) if row else None
