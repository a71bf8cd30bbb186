"""
Utilitários compartilhados: log de validação, normalização e formatação.
"""

from premiacao.utils.formatters import formatar_moeda, formatar_percentual
from premiacao.utils.logging import ValidationLogger
from premiacao.utils.normalization import (
    calcular_percentual,
    normalizar_codigo,
    normalize_text,
    to_float,
)

__all__ = [
    "ValidationLogger",
    "calcular_percentual",
    "formatar_moeda",
    "formatar_percentual",
    "normalizar_codigo",
    "normalize_text",
    "to_float",
]
