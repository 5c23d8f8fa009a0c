from datetime import datetime, timedelta, time
from config import TZ


def timedelta_to_time(td):
    total_seconds = int(td.total_seconds()) % 86400
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return time(hours, minutes, seconds)


def converter_hora_para_time(hora_db):
    if not hora_db:
        return None
    if isinstance(hora_db, str):
        hora_db = hora_db.strip()
        try:
            return datetime.strptime(hora_db, "%H:%M:%S").time()
        except ValueError:
            try:
                return datetime.strptime(hora_db, "%H:%M").time()
            except ValueError:
                return None
    elif isinstance(hora_db, timedelta):
        return timedelta_to_time(hora_db)
    elif isinstance(hora_db, time):
        return hora_db
    else:
        return None


def agora_local():
    return datetime.now(TZ)


def para_fuso_local(dt):
    """Datetimes sem fuso são tratados como hora local da organização."""
    if dt.tzinfo is None:
        return TZ.localize(dt)
    return dt.astimezone(TZ)


def para_banco(dt):
    # o banco guarda DATETIME sem fuso, sempre em hora local
    return para_fuso_local(dt).replace(tzinfo=None)


def do_banco(valor):
    if valor is None:
        return None
    if isinstance(valor, str):
        valor = datetime.fromisoformat(valor.replace("Z", "+00:00"))
    return para_fuso_local(valor)


def inicio_do_dia(dia):
    return TZ.localize(datetime.combine(dia, time.min))


def minutos_do_dia(hora):
    return hora.hour * 60 + hora.minute


def esta_no_horario_de_trabalho(inicio, fim, agora):
    """Compara em minutos, com os dois extremos incluídos."""
    atual = minutos_do_dia(para_fuso_local(agora))
    return minutos_do_dia(inicio) <= atual <= minutos_do_dia(fim)


def formatar_duracao(minutos):
    minutos = int(minutos)
    horas, resto = divmod(minutos, 60)
    if horas:
        return f"{horas}h{resto:02d}m"
    return f"{resto}m"
