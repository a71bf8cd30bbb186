"""
Motor de cálculo de premiação para redes de farmácias.

Uso típico::

    from premiacao import CalculadoraPremiacao, DataLoader, Funcionario, Loja, Periodo

    vendas = DataLoader().normalizar_vendas(linhas_da_api)
    resultado = CalculadoraPremiacao().calcular(
        Funcionario(cargo="farmaceutico", matricula="123"),
        Loja(codigo="10", regiao="centro"),
        Periodo(inicio, fim),
        vendas,
        metas_individuais={"geral": 50000, "generico_similar": 12000},
    )
"""

from premiacao.calculadoras import EntradaCalculo, PremiacaoCalculator, obter_calculadora
from premiacao.config import RegrasPremiacao, regras_padrao
from premiacao.core import (
    AgregadorCategorias,
    analisar_ritmo,
    calcular_dias_uteis,
    calcular_projecoes,
    calcular_tempo_empresa,
    classificar_ritmo,
    periodo_atual,
)
from premiacao.exceptions import InvalidPeriodError, PremiacaoError, UnsupportedRoleError
from premiacao.insights import GeradorInsights
from premiacao.io import ConfigLoader, DataLoader, PremiacaoOutputGenerator
from premiacao.models import (
    Arvore,
    Cargo,
    ClassificacaoRitmo,
    Funcionario,
    Loja,
    Periodo,
    PremiacaoResult,
    ResultadoCalculo,
    SalesRecord,
)
from premiacao.orquestrador import (
    CalculadoraPremiacao,
    ControleCalculos,
    calcular_premiacao,
    chave_calculo,
    configurar_logging,
)
from premiacao.utils import ValidationLogger

__version__ = "1.0.0"

__all__ = [
    "AgregadorCategorias",
    "Arvore",
    "CalculadoraPremiacao",
    "Cargo",
    "ClassificacaoRitmo",
    "ConfigLoader",
    "ControleCalculos",
    "DataLoader",
    "EntradaCalculo",
    "Funcionario",
    "GeradorInsights",
    "InvalidPeriodError",
    "Loja",
    "Periodo",
    "PremiacaoCalculator",
    "PremiacaoError",
    "PremiacaoOutputGenerator",
    "PremiacaoResult",
    "RegrasPremiacao",
    "ResultadoCalculo",
    "SalesRecord",
    "UnsupportedRoleError",
    "ValidationLogger",
    "analisar_ritmo",
    "calcular_dias_uteis",
    "calcular_premiacao",
    "calcular_projecoes",
    "calcular_tempo_empresa",
    "chave_calculo",
    "classificar_ritmo",
    "configurar_logging",
    "obter_calculadora",
    "periodo_atual",
    "regras_padrao",
]
