"""
Tempo de empresa (anos e meses completos desde a contratação).
"""

from datetime import date

from premiacao.models import TempoEmpresa
from premiacao.utils.normalization import para_data


def calcular_tempo_empresa(data_contratacao, agora) -> TempoEmpresa:
    """
    Diferença em meses completos entre a contratação e ``agora``.

    Um mês só é contado quando o dia do mês da contratação já foi alcançado.
    Contratação futura resulta em tempo zero.

    >>> calcular_tempo_empresa(date(2023, 3, 15), date(2025, 6, 14))
    TempoEmpresa(anos=2, meses=2)
    """
    inicio = para_data(data_contratacao)
    fim = para_data(agora)

    total = (fim.year - inicio.year) * 12 + (fim.month - inicio.month)
    if fim.day < inicio.day:
        total -= 1
    total = max(0, total)
    return TempoEmpresa(anos=total // 12, meses=total % 12)


def formatar_tempo_empresa(tempo: TempoEmpresa) -> str:
    """Texto amigável: "2 anos e 3 meses", "5 meses", "Recém contratado"."""
    if tempo.total_meses <= 0:
        return "Recém contratado"

    partes = []
    if tempo.anos > 0:
        partes.append(f"{tempo.anos} ano{'s' if tempo.anos > 1 else ''}")
    if tempo.meses > 0:
        partes.append(f"{tempo.meses} {'meses' if tempo.meses > 1 else 'mês'}")
    return " e ".join(partes)
