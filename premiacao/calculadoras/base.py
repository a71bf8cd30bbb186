"""
Contrato comum das calculadoras de premiação e registro por cargo.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Optional, Tuple, Type

from premiacao.config.regras import RegrasPremiacao
from premiacao.exceptions import UnsupportedRoleError
from premiacao.models import (
    Arvore,
    Cargo,
    CategoryTotals,
    Metas,
    PremiacaoResult,
    Projecao,
    TempoEmpresa,
)
from premiacao.utils.normalization import calcular_percentual, to_float


@dataclass
class EntradaCalculo:
    """Tudo que uma calculadora precisa; árvores não usadas pelo cargo ficam vazias."""

    cargo: Cargo
    totais_individuais: CategoryTotals = field(default_factory=dict)
    totais_loja: CategoryTotals = field(default_factory=dict)
    metas_individuais: Metas = field(default_factory=dict)
    metas_loja: Metas = field(default_factory=dict)
    projecoes_individuais: Dict[str, Projecao] = field(default_factory=dict)
    projecoes_loja: Dict[str, Projecao] = field(default_factory=dict)
    tempo_empresa: TempoEmpresa = TempoEmpresa(0, 0)
    balanco: bool = False

    def valor(self, arvore: Arvore, categoria: str) -> float:
        totais = self.totais_individuais if arvore == Arvore.INDIVIDUAL else self.totais_loja
        vendas = totais.get(categoria)
        return vendas.valor if vendas else 0.0

    def meta(self, arvore: Arvore, categoria: str) -> float:
        metas = self.metas_individuais if arvore == Arvore.INDIVIDUAL else self.metas_loja
        return to_float(metas.get(categoria))

    def projecao(self, arvore: Arvore, categoria: str) -> Optional[Projecao]:
        projecoes = self.projecoes_individuais if arvore == Arvore.INDIVIDUAL else self.projecoes_loja
        return projecoes.get(categoria)

    def percentual(self, arvore: Arvore, categoria: str) -> float:
        return calcular_percentual(self.valor(arvore, categoria), self.meta(arvore, categoria))

    def valor_projetado(self, arvore: Arvore, categoria: str) -> float:
        """Valor projetado; sem dias passados não há ritmo e vale o valor atual."""
        proj = self.projecao(arvore, categoria)
        if proj is None or proj.dias_passados <= 0:
            return self.valor(arvore, categoria)
        return proj.valor_projetado

    def percentual_projetado(self, arvore: Arvore, categoria: str) -> float:
        proj = self.projecao(arvore, categoria)
        if proj is None or proj.dias_passados <= 0:
            return self.percentual(arvore, categoria)
        return proj.percentual_projetado

    def percentuais(self, arvore: Arvore, categorias: Iterable[str]) -> Dict[str, float]:
        return {c: self.percentual(arvore, c) for c in categorias}

    def percentuais_projetados(self, arvore: Arvore, categorias: Iterable[str]) -> Dict[str, float]:
        return {c: self.percentual_projetado(arvore, c) for c in categorias}


class PremiacaoCalculator(ABC):
    """
    Calculadora de premiação de um grupo de cargos.

    Subclasses declaram os cargos atendidos e as árvores de categorias de que
    precisam; o orquestrador só monta as árvores pedidas.
    """

    cargos: Tuple[Cargo, ...] = ()
    arvores: FrozenSet[Arvore] = frozenset()
    usa_tempo_empresa = False

    def __init__(self, regras: RegrasPremiacao):
        self.regras = regras

    @abstractmethod
    def calcular(self, entrada: EntradaCalculo) -> PremiacaoResult:
        """Calcula a premiação atual, projetada e máxima."""


REGISTRO: Dict[Cargo, Type[PremiacaoCalculator]] = {}


def registrar(classe: Type[PremiacaoCalculator]) -> Type[PremiacaoCalculator]:
    """Decorador que registra a calculadora para cada cargo em ``classe.cargos``."""
    for cargo in classe.cargos:
        if cargo in REGISTRO:
            raise ValueError(f"Cargo {cargo.value} já registrado para {REGISTRO[cargo].__name__}")
        REGISTRO[cargo] = classe
    return classe


def obter_calculadora(cargo, regras: RegrasPremiacao) -> PremiacaoCalculator:
    """
    Seleciona a calculadora do cargo.

    Raises:
        UnsupportedRoleError: cargo desconhecido ou sem calculadora registrada
    """
    cargo_enum = Cargo.from_value(cargo)
    if cargo_enum is None or cargo_enum not in REGISTRO:
        raise UnsupportedRoleError(cargo)
    return REGISTRO[cargo_enum](regras)


def somar(valores: Dict[str, float]) -> float:
    return float(sum(valores.values()))
