"""
Análise de ritmo de vendas: compara o percentual da meta já atingido com o
percentual do período já decorrido.
"""

from typing import Dict, Iterable, List

from premiacao.models import (
    AnaliseRitmo,
    CategoryTotals,
    ClassificacaoRitmo,
    DiasCriticos,
    DiasUteis,
    Metas,
)
from premiacao.utils.normalization import calcular_percentual, to_float

# Atingir 95% da meta classifica como adiantado independentemente da razão.
PERCENTUAL_ADIANTADO_ABSOLUTO = 95.0
RAZAO_ADIANTADO = 1.10
RAZAO_NO_RITMO = 0.95
RAZAO_ATENCAO = 0.80
FOLGA_RITMO_ATINGIVEL = 1.3
DIAS_CRITICOS = 5
DIFERENCA_RITMO_ACELERADO = 30.0


def classificar_ritmo(percentual_atual: float, percentual_tempo: float) -> ClassificacaoRitmo:
    """
    Classifica o ritmo de uma categoria (primeira regra que casar).

    >>> classificar_ritmo(96, 100).value
    'ahead'
    >>> classificar_ritmo(50, 50).value
    'on-pace'
    """
    if percentual_atual >= PERCENTUAL_ADIANTADO_ABSOLUTO:
        return ClassificacaoRitmo.ADIANTADO
    razao = percentual_atual / percentual_tempo if percentual_tempo > 0 else 0.0
    if razao >= RAZAO_ADIANTADO:
        return ClassificacaoRitmo.ADIANTADO
    if razao >= RAZAO_NO_RITMO:
        return ClassificacaoRitmo.NO_RITMO
    if razao >= RAZAO_ATENCAO:
        return ClassificacaoRitmo.ATENCAO
    return ClassificacaoRitmo.ATRASADO


def categorias_avaliadas(totais: CategoryTotals, metas: Metas) -> List[str]:
    """Categorias com meta primeiro (na ordem das metas), depois as demais categorias dos totais."""
    ordem = list(metas.keys())
    ordem.extend(c for c in totais.keys() if c not in metas)
    return ordem


def analisar_categoria(categoria: str, valor: float, meta: float, dias: DiasUteis) -> AnaliseRitmo:
    percentual = calcular_percentual(valor, meta)
    percentual_tempo = dias.percentual_tempo
    razao = percentual / percentual_tempo if percentual_tempo > 0 else 0.0

    falta = max(0.0, meta - valor)
    ritmo_atual = valor / dias.dias_uteis_passados if dias.dias_uteis_passados > 0 else 0.0
    ritmo_necessario = falta / dias.dias_uteis_restantes if dias.dias_uteis_restantes > 0 else 0.0
    diferenca = (ritmo_necessario / ritmo_atual - 1) * 100 if ritmo_atual > 0 else 0.0

    return AnaliseRitmo(
        categoria=categoria,
        percentual_atual=percentual,
        percentual_tempo=percentual_tempo,
        razao=razao,
        classificacao=classificar_ritmo(percentual, percentual_tempo),
        falta_para_meta=falta,
        ritmo_atual=ritmo_atual,
        ritmo_necessario=ritmo_necessario,
        diferenca_ritmo=diferenca,
        pode_atingir=ritmo_necessario <= ritmo_atual * FOLGA_RITMO_ATINGIVEL,
        dias_criticos=DiasCriticos(
            inicio_mes=dias.dias_uteis_passados <= DIAS_CRITICOS,
            fim_mes=0 < dias.dias_uteis_restantes <= DIAS_CRITICOS,
            ritmo_acelerado=diferenca > DIFERENCA_RITMO_ACELERADO,
        ),
    )


def analisar_ritmo(
    totais: CategoryTotals,
    metas: Metas,
    dias: DiasUteis,
    categorias: Iterable[str] = None,
) -> Dict[str, AnaliseRitmo]:
    """
    Analisa o ritmo de cada categoria.

    Args:
        totais: Totais por categoria (de uma única árvore)
        metas: Metas da mesma árvore; meta ausente ou zero vale 0% de atingimento
        dias: Calendário de dias úteis do período
        categorias: Categorias a avaliar (default: metas + categorias dos totais)

    Returns:
        Dict categoria → AnaliseRitmo, na ordem avaliada
    """
    if categorias is None:
        categorias = categorias_avaliadas(totais, metas)

    analises = {}
    for categoria in categorias:
        vendas = totais.get(categoria)
        valor = vendas.valor if vendas else 0.0
        analises[categoria] = analisar_categoria(categoria, valor, to_float(metas.get(categoria)), dias)
    return analises
