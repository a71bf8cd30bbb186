"""
Módulo de normalização de dados.
Contém funções para normalização de texto, conversão numérica tolerante e
cálculo de percentual de atingimento de metas.
"""

import re
import unicodedata
from datetime import date, datetime

import pandas as pd

_MILHAR = re.compile(r"-?[1-9]\d{0,2}(\.\d{3})+")


def normalize_text(s):
    """
    Normaliza uma string removendo acentos, BOM e espaços extras.

    Usada para comparar cargos e regiões vindos de fontes diferentes
    ("Farmacêutico", " farmaceutico ", "FARMACEUTICO").

    Args:
        s: String ou valor a ser normalizado (pode ser NaN)

    Returns:
        String normalizada em minúsculas, sem acentos e sem espaços extras.
        Retorna string vazia se o valor for NaN/None.

    Exemplos:
        >>> normalize_text("Farmacêutico")
        'farmaceutico'
        >>> normalize_text("  Centro ")
        'centro'
        >>> normalize_text(None)
        ''
    """
    if s is None or (not isinstance(s, str) and pd.isna(s)):
        return ""
    s = str(s)
    s = s.replace("\ufeff", "")
    s = unicodedata.normalize("NFKD", s).encode("ASCII", "ignore").decode("ASCII")
    return " ".join(s.strip().lower().split())


def to_float(valor, default: float = 0.0) -> float:
    """
    Converte um valor para float, devolvendo ``default`` para None, NaN ou texto inválido.

    Aceita strings no formato brasileiro ("1.234,56"). Texto só com pontos
    separando grupos de três dígitos ("1.234", "1.234.567") é lido como
    milhar; os demais pontos são separador decimal ("12.5", "0.500").
    """
    if valor is None:
        return default
    if isinstance(valor, str):
        texto = valor.strip()
        if not texto:
            return default
        if "," in texto:
            texto = texto.replace(".", "").replace(",", ".")
        elif _MILHAR.fullmatch(texto):
            texto = texto.replace(".", "")
        try:
            return float(texto)
        except ValueError:
            return default
    try:
        if pd.isna(valor):
            return default
        return float(valor)
    except (TypeError, ValueError):
        return default


def calcular_percentual(realizado, meta) -> float:
    """
    Calcula o percentual de atingimento de uma meta (0-100+).

    A lógica é:
    - Se meta for zero, ausente ou negativa: retorna 0.0 (sem meta, sem atingimento)
    - Caso contrário: retorna realizado / meta * 100

    Args:
        realizado: Valor realizado (pode ser None, NaN ou número)
        meta: Valor da meta (pode ser None, NaN ou número)

    Returns:
        Float com o percentual. Nunca levanta divisão por zero.

    Exemplos:
        >>> calcular_percentual(50, 100)
        50.0
        >>> calcular_percentual(10, 0)
        0.0
        >>> calcular_percentual(None, 100)
        0.0
    """
    realizado = to_float(realizado)
    meta = to_float(meta)
    if meta <= 0:
        return 0.0
    return realizado / meta * 100


def normalizar_codigo(valor) -> str:
    """
    Normaliza códigos de funcionário/loja para comparação ("007", 7, "7.0" → "7").

    Retorna string vazia para valores ausentes.
    """
    if valor is None or (not isinstance(valor, str) and pd.isna(valor)):
        return ""
    texto = str(valor).strip()
    if texto.endswith(".0") and texto[:-2].isdigit():
        texto = texto[:-2]
    if texto.isdigit():
        return str(int(texto))
    return texto


def para_data(valor) -> date:
    """Converte date, datetime, Timestamp ou texto ("2025-03-21") em ``date``."""
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor
    return pd.Timestamp(valor).date()
