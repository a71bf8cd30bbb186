"""
Projeção linear do fechamento do período a partir do ritmo diário até agora.
"""

from typing import Dict, Iterable

from premiacao.core.ritmo import categorias_avaliadas
from premiacao.models import CategoryTotals, DiasUteis, Metas, Projecao
from premiacao.utils.normalization import calcular_percentual, to_float

STATUS_ATINGIDO = "atingido"
STATUS_PROXIMO = "proximo"
STATUS_DISTANTE = "distante"


def status_projecao(percentual_projetado: float) -> str:
    if percentual_projetado >= 100:
        return STATUS_ATINGIDO
    if percentual_projetado >= 95:
        return STATUS_PROXIMO
    return STATUS_DISTANTE


def projetar(valor_atual: float, meta: float, dias: DiasUteis) -> Projecao:
    """
    Projeta uma categoria.

    ``valor_projetado = valor_atual / passados * (passados + restantes)``; sem
    dias passados a projeção é zero. Percentuais são zero quando não há meta.
    """
    passados = dias.dias_uteis_passados
    restantes = dias.dias_uteis_restantes

    ritmo_diario = valor_atual / passados if passados > 0 else 0.0
    valor_projetado = ritmo_diario * (passados + restantes) if passados > 0 else 0.0
    percentual_projetado = calcular_percentual(valor_projetado, meta)

    return Projecao(
        valor_atual=valor_atual,
        percentual_atual=calcular_percentual(valor_atual, meta),
        ritmo_diario=ritmo_diario,
        valor_projetado=valor_projetado,
        percentual_projetado=percentual_projetado,
        meta=meta,
        dias_passados=passados,
        dias_restantes=restantes,
        status=status_projecao(percentual_projetado),
    )


def calcular_projecoes(
    totais: CategoryTotals,
    metas: Metas,
    dias: DiasUteis,
    categorias: Iterable[str] = None,
) -> Dict[str, Projecao]:
    """
    Projeta todas as categorias (metas + categorias dos totais).

    Returns:
        Dict categoria → Projecao
    """
    if categorias is None:
        categorias = categorias_avaliadas(totais, metas)

    projecoes = {}
    for categoria in categorias:
        vendas = totais.get(categoria)
        valor = vendas.valor if vendas else 0.0
        projecoes[categoria] = projetar(valor, to_float(metas.get(categoria)), dias)
    return projecoes
