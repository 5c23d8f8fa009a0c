from ponto_zap.ponto.modelos import Funcionario
from ponto_zap.utils.horario import do_banco

CAMPOS_FUNCIONARIO = "id, name, phone, department, is_active, created_at"


def funcionario_de_linha(row):
    return Funcionario(
        id=int(row['id']),
        nome=row['name'],
        telefone=row['phone'],
        departamento=row.get('department') or "",
        ativo=bool(row['is_active']),
        criado_em=do_banco(row.get('created_at')),
    )


def buscar_funcionario_por_telefone(cursor, telefone):
    cursor.execute(f"SELECT {CAMPOS_FUNCIONARIO} FROM employees WHERE phone=%s", (telefone,))
    row = cursor.fetchone()
    return funcionario_de_linha(row) if row else None


def listar_funcionarios_ativos(cursor):
    """Retorna todos os funcionários ativos, por nome."""
    cursor.execute(f"SELECT {CAMPOS_FUNCIONARIO} FROM employees WHERE is_active=1 ORDER BY name")
    return [funcionario_de_linha(r) for r in cursor.fetchall()]
