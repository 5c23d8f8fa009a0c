class ErroPonto(Exception):
    """Falha interna do fluxo de ponto. Rejeições de regra viram resposta, não exceção."""


class ComandoDesconhecido(ErroPonto):
    pass
