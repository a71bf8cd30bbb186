"""
Calculadoras de premiação por cargo.

Importar este pacote registra todas as calculadoras em ``REGISTRO``.
"""

from premiacao.calculadoras.base import (
    REGISTRO,
    EntradaCalculo,
    PremiacaoCalculator,
    obter_calculadora,
    registrar,
)
from premiacao.calculadoras.apoio import CalculadoraApoio, CalculadoraAuxConveniencia
from premiacao.calculadoras.comissao import (
    CalculadoraAuxiliar,
    CalculadoraComissao,
    CalculadoraConsultora,
    CalculadoraFarmaceutico,
)
from premiacao.calculadoras.gerencial import CalculadoraGerencial

__all__ = [
    "REGISTRO",
    "CalculadoraApoio",
    "CalculadoraAuxConveniencia",
    "CalculadoraAuxiliar",
    "CalculadoraComissao",
    "CalculadoraConsultora",
    "CalculadoraFarmaceutico",
    "CalculadoraGerencial",
    "EntradaCalculo",
    "PremiacaoCalculator",
    "obter_calculadora",
    "registrar",
]
