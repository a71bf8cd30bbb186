"""
Módulo de logging e validação.
Contém a classe ValidationLogger, que acumula os avisos de negócio gerados
durante um cálculo de premiação e os devolve junto com o resultado.
"""

import logging
from typing import Dict, List, Optional


_NIVEIS_PYTHON = {
    "INFO": logging.INFO,
    "AVISO": logging.WARNING,
    "ERRO": logging.ERROR,
}


class ValidationLogger:
    """
    Acumula entradas de log de validação de um cálculo de premiação.

    Cada entrada contém nível, mensagem e contexto. As entradas também são
    repassadas ao logger padrão do Python (``premiacao.validacao``) para
    quem estiver depurando no terminal.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Inicializa o logger com uma lista vazia de logs.

        Args:
            logger: Logger opcional para espelhar as entradas
                    (default: ``logging.getLogger("premiacao.validacao")``)
        """
        self.validation_log: List[Dict[str, str]] = []
        self._logger = logger or logging.getLogger("premiacao.validacao")

    def log(self, nivel: str, mensagem: str, contexto: Optional[Dict] = None):
        """
        Adiciona uma entrada ao log de validação.

        Args:
            nivel: Nível do log ("INFO", "AVISO" ou "ERRO")
            mensagem: Mensagem descritiva do log
            contexto: Dicionário opcional com informações adicionais de contexto
        """
        self.validation_log.append(
            {"Nível": nivel, "Mensagem": mensagem, "Contexto": str(contexto) if contexto else ""}
        )
        self._logger.log(_NIVEIS_PYTHON.get(nivel, logging.INFO), "%s %s", mensagem, contexto or "")

    def info(self, mensagem: str, contexto: Optional[Dict] = None):
        """Adiciona um log de nível INFO."""
        self.log("INFO", mensagem, contexto)

    def aviso(self, mensagem: str, contexto: Optional[Dict] = None):
        """Adiciona um log de nível AVISO (não interrompe o cálculo)."""
        self.log("AVISO", mensagem, contexto)

    def erro(self, mensagem: str, contexto: Optional[Dict] = None):
        """Adiciona um log de nível ERRO."""
        self.log("ERRO", mensagem, contexto)

    def get_logs(self) -> List[Dict[str, str]]:
        """
        Retorna uma cópia da lista de logs de validação.

        Returns:
            Lista de dicionários, cada um contendo "Nível", "Mensagem" e "Contexto"
        """
        return self.validation_log.copy()

    def avisos(self) -> List[str]:
        """Retorna apenas as mensagens de nível AVISO, na ordem em que foram registradas."""
        return [e["Mensagem"] for e in self.validation_log if e["Nível"] == "AVISO"]

    def clear(self):
        """Limpa todos os logs armazenados."""
        self.validation_log.clear()

    def __len__(self) -> int:
        return len(self.validation_log)
