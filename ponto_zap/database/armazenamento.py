from ponto_zap.database.mysql import conectar_mysql, db_cursor
from ponto_zap.services.funcionarios import (
    buscar_funcionario_por_telefone, listar_funcionarios_ativos,
)
from ponto_zap.services.registros_ponto import (
    criar_registro_ponto, buscar_registros_do_dia, buscar_ultimo_registro,
)
from ponto_zap.services.mensagens_whatsapp import salvar_mensagem, marcar_mensagem_processada
from ponto_zap.services.configuracoes import buscar_configuracao


class ArmazenamentoMySQL:
    """Ponto único de acesso ao banco usado pelo processador e pelo agendador.

    Cada chamada abre a sua própria conexão; cada INSERT é uma instrução atômica e
    nenhuma transação atravessa duas chamadas.
    """

    def __init__(self, conectar=conectar_mysql):
        self._conectar = conectar

    def _cursor(self):
        return db_cursor(self._conectar)

    def buscar_funcionario_por_telefone(self, telefone):
        with self._cursor() as cursor:
            return buscar_funcionario_por_telefone(cursor, telefone)

    def listar_funcionarios_ativos(self):
        with self._cursor() as cursor:
            return listar_funcionarios_ativos(cursor)

    def criar_registro(self, funcionario_id, tipo, data_hora, mensagem=None, localizacao=None):
        with self._cursor() as cursor:
            return criar_registro_ponto(cursor, funcionario_id, tipo, data_hora, mensagem, localizacao)

    def buscar_registros_do_dia(self, funcionario_id, dia):
        with self._cursor() as cursor:
            return buscar_registros_do_dia(cursor, funcionario_id, dia)

    def buscar_ultimo_registro(self, funcionario_id):
        with self._cursor() as cursor:
            return buscar_ultimo_registro(cursor, funcionario_id)

    def salvar_mensagem(self, telefone, mensagem, comando=None):
        with self._cursor() as cursor:
            return salvar_mensagem(cursor, telefone, mensagem, comando)

    def marcar_mensagem_processada(self, mensagem_id, resposta):
        with self._cursor() as cursor:
            marcar_mensagem_processada(cursor, mensagem_id, resposta)

    def buscar_configuracao(self, chave):
        with self._cursor() as cursor:
            return buscar_configuracao(cursor, chave)
