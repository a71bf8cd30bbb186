"""
Exceções do motor de premiação.
"""


class PremiacaoError(Exception):
    """Erro base de todos os erros fatais do cálculo de premiação."""


class InvalidPeriodError(PremiacaoError):
    """Período com data final anterior à data inicial."""

    def __init__(self, inicio, fim):
        self.inicio = inicio
        self.fim = fim
        super().__init__(f"Período inválido: fim ({fim}) anterior ao início ({inicio})")


class UnsupportedRoleError(PremiacaoError):
    """Cargo sem calculadora de premiação registrada."""

    def __init__(self, cargo):
        self.cargo = cargo
        super().__init__(f"Tipo de funcionário não suportado: {cargo}")
