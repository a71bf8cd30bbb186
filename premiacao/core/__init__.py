"""
Componentes de cálculo puros: calendário, agregação, ritmo, projeção e tempo de empresa.
"""

from premiacao.core.agregador import AgregadorCategorias, validar_sobreposicoes, vendas_para_dataframe
from premiacao.core.calendario import calcular_dias_uteis, periodo_atual
from premiacao.core.projecao import calcular_projecoes
from premiacao.core.ritmo import analisar_ritmo, classificar_ritmo
from premiacao.core.tempo_empresa import calcular_tempo_empresa, formatar_tempo_empresa

__all__ = [
    "AgregadorCategorias",
    "analisar_ritmo",
    "calcular_dias_uteis",
    "calcular_projecoes",
    "calcular_tempo_empresa",
    "classificar_ritmo",
    "formatar_tempo_empresa",
    "periodo_atual",
    "validar_sobreposicoes",
    "vendas_para_dataframe",
]
