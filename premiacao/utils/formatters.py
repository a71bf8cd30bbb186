"""
Funções de formatação de valores para textos de insights e relatórios.
"""

from typing import Union

import pandas as pd


def formatar_moeda(valor: Union[float, int, None]) -> str:
    """
    Formata um valor como moeda brasileira.

    Args:
        valor: Valor numérico a ser formatado

    Returns:
        String formatada como "R$ 1.234,56"
    """
    if valor is None or pd.isna(valor):
        return "R$ 0,00"

    try:
        valor_float = float(valor)
        if valor_float < 0:
            return f"R$ -{abs(valor_float):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
        return f"R$ {valor_float:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    except (ValueError, TypeError):
        return "R$ 0,00"


def formatar_percentual(valor: Union[float, int, None], casas: int = 1) -> str:
    """
    Formata um percentual já na escala 0-100.

    Args:
        valor: Percentual (ex: 97.5 para 97,5%)
        casas: Número de casas decimais (default: 1)

    Returns:
        String formatada como "97,5%"
    """
    if valor is None or pd.isna(valor):
        return "0,0%"

    try:
        formato = f"{{:,.{casas}f}}%"
        return formato.format(float(valor)).replace(",", "X").replace(".", ",").replace("X", ".")
    except (ValueError, TypeError):
        return "0,0%"
