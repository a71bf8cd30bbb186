"""
Tabelas de regras de premiação.

Faixas de faturamento, escalas de multiplicadores, taxas de comissão,
mapeamento de grupos de produto para categorias e a tabela de valores do
apoio. Tudo é dado explícito: as calculadoras recebem um ``RegrasPremiacao``
e nunca leem estado global, de modo que testes e o ConfigLoader podem
substituir qualquer tabela.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Sequence, Tuple


def _congelar_mapa(mapa: Mapping[str, Iterable[int]]) -> Mapping[str, Tuple[int, ...]]:
    return MappingProxyType({str(k): tuple(int(c) for c in v) for k, v in mapa.items()})


@dataclass(frozen=True)
class EscalaMultiplicador:
    """
    Escala de faixas (percentual mínimo → multiplicador).

    O multiplicador aplicado é o da maior faixa atingida; faixas não se somam.
    """

    faixas: Tuple[Tuple[float, float], ...]

    def __post_init__(self):
        faixas = tuple((float(p), float(m)) for p, m in self.faixas)
        for (p_ant, m_ant), (p, m) in zip(faixas, faixas[1:]):
            if p <= p_ant:
                raise ValueError(f"Faixas devem ter percentuais crescentes: {p_ant} >= {p}")
            if m <= m_ant:
                raise ValueError(f"Multiplicadores devem ser estritamente crescentes: {m_ant} >= {m}")
        object.__setattr__(self, "faixas", faixas)

    def multiplicador(self, percentual: float) -> float:
        resultado = 0.0
        for minimo, mult in self.faixas:
            if percentual >= minimo:
                resultado = mult
            else:
                break
        return resultado

    @property
    def maximo(self) -> float:
        return self.faixas[-1][1] if self.faixas else 0.0


@dataclass(frozen=True)
class FaixaFaturamento:
    """Faixa semiaberta [minimo, maximo) → base de cálculo gerencial."""

    minimo: float
    maximo: Optional[float]
    base: float

    def contem(self, valor: float) -> bool:
        return valor >= self.minimo and (self.maximo is None or valor < self.maximo)


@dataclass(frozen=True)
class TabelaFaixas:
    faixas: Tuple[FaixaFaturamento, ...]

    def __post_init__(self):
        faixas = tuple(self.faixas)
        if not faixas:
            raise ValueError("Tabela de faixas de faturamento vazia")
        for anterior, atual in zip(faixas, faixas[1:]):
            if anterior.maximo is None:
                raise ValueError("Somente a última faixa pode ser aberta")
            if atual.minimo != anterior.maximo:
                raise ValueError(
                    f"Faixas devem ser contíguas e ordenadas: {anterior.maximo} != {atual.minimo}"
                )
        object.__setattr__(self, "faixas", faixas)

    def base_para(self, faturamento: float) -> float:
        """Base de cálculo da faixa que contém ``faturamento`` (abaixo da primeira, usa a primeira)."""
        for faixa in self.faixas:
            if faixa.contem(faturamento):
                return faixa.base
        if faturamento < self.faixas[0].minimo:
            return self.faixas[0].base
        return self.faixas[-1].base


@dataclass(frozen=True)
class RegraBonusMeta:
    """
    Bônus por atingimento de meta: quando o percentual da ``categoria_meta`` está
    em [minimo, maximo), paga ``taxa`` sobre a venda das ``categorias_base``.
    """

    descricao: str
    categoria_meta: str
    minimo: float
    maximo: Optional[float]
    categorias_base: Tuple[str, ...]
    taxa: float

    def aplica(self, percentual: float) -> bool:
        return percentual >= self.minimo and (self.maximo is None or percentual < self.maximo)


@dataclass(frozen=True)
class FaixaTempoApoio:
    """
    Valores fixos do apoio para uma faixa de tempo de empresa.

    ``geral`` é uma lista (percentual mínimo, valor); ``indicador`` é o valor
    pago por indicador de loja com meta batida; ``balanco`` o valor do balanço.
    """

    meses_minimos: int
    base_referencia: float
    geral: Tuple[Tuple[float, float], ...]
    indicador: float
    balanco: float

    def valor_geral(self, percentual: float) -> float:
        valor = 0.0
        for minimo, v in self.geral:
            if percentual >= minimo:
                valor = v
        return valor

    def valor_maximo(self, n_indicadores: int) -> float:
        maior_geral = max((v for _, v in self.geral), default=0.0)
        return maior_geral + self.indicador * n_indicadores + self.balanco


@dataclass(frozen=True)
class TabelaApoio:
    faixas_tempo: Tuple[FaixaTempoApoio, ...]
    indicadores: Tuple[str, ...]
    percentual_indicador: float = 100.0

    def faixa_para(self, total_meses: int) -> FaixaTempoApoio:
        escolhida = self.faixas_tempo[0]
        for faixa in sorted(self.faixas_tempo, key=lambda f: f.meses_minimos):
            if total_meses >= faixa.meses_minimos:
                escolhida = faixa
        return escolhida


CATEGORIAS_INDIVIDUAIS = _congelar_mapa({
    "similar": [2, 21, 20, 25, 22],
    "generico": [47, 5, 6],
    "generico_similar": [2, 21, 20, 25, 22, 47, 5, 6],
    "perfumaria_alta": [46],
    "goodlife": [22],
    "rentaveis20": [20],
    "rentaveis25": [25],
    "dermocosmetico": [31, 16],
    "conveniencia": [36],
    "brinquedo": [13],
})

CATEGORIAS_LOJA = _congelar_mapa({
    "r_mais": [20, 25],
    "perfumaria_r_mais": [46],
    "saude": [22],
    "conveniencia_r_mais": [36, 13],
})

# Pares de categorias que compartilham grupos de produto de propósito.
SOBREPOSICOES_CONHECIDAS: FrozenSet[FrozenSet[str]] = frozenset({
    frozenset({"goodlife", "similar"}),
    frozenset({"goodlife", "generico_similar"}),
    frozenset({"rentaveis20", "similar"}),
    frozenset({"rentaveis20", "generico_similar"}),
    frozenset({"rentaveis25", "similar"}),
    frozenset({"rentaveis25", "generico_similar"}),
    frozenset({"similar", "generico_similar"}),
    frozenset({"generico", "generico_similar"}),
})

FAIXAS_FATURAMENTO = TabelaFaixas((
    FaixaFaturamento(0, 299000, 1300),
    FaixaFaturamento(299000, 399000, 1400),
    FaixaFaturamento(399000, 499000, 1500),
    FaixaFaturamento(499000, 599000, 1700),
    FaixaFaturamento(599000, 699000, 1900),
    FaixaFaturamento(699000, 799000, 2100),
    FaixaFaturamento(799000, 899000, 2300),
    FaixaFaturamento(899000, 999000, 2500),
    FaixaFaturamento(999000, 1199000, 2700),
    FaixaFaturamento(1199000, 1499000, 3000),
    FaixaFaturamento(1499000, 1799000, 3500),
    FaixaFaturamento(1799000, 1999000, 4000),
    FaixaFaturamento(1999000, None, 4500),
))

ESCALA_GERAL = EscalaMultiplicador(((90, 0.2), (95, 0.4), (100, 0.6)))
ESCALA_INDICADOR = EscalaMultiplicador(((95, 0.1), (100, 0.2)))
MULTIPLICADOR_BALANCO = 0.1
LIMITE_MULTIPLICADOR = 1.5
INDICADORES_LOJA = ("r_mais", "perfumaria_r_mais", "conveniencia_r_mais", "saude")

TAXAS_COMISSAO = MappingProxyType({
    "farmaceutico": MappingProxyType({
        "generico": 0.02,
        "similar": 0.02,
        "dermocosmetico": 0.02,
        "rentaveis20": 0.01,
        "rentaveis25": 0.01,
    }),
    "auxiliar": MappingProxyType({
        "generico": 0.045,
        "similar": 0.05,
        "dermocosmetico": 0.02,
        "rentaveis20": 0.01,
        "rentaveis25": 0.01,
    }),
    "consultora": MappingProxyType({
        "perfumaria_alta": 0.03,
        "dermocosmetico": 0.02,
        "goodlife": 0.05,
    }),
    "aux_conveniencia": MappingProxyType({
        "conveniencia": 0.02,
        "brinquedo": 0.02,
    }),
})

_GEN_SIM = ("generico", "similar")

BONUS_METAS = MappingProxyType({
    "farmaceutico": (
        RegraBonusMeta("Meta Geral 100%", "geral", 100, None, _GEN_SIM, 0.005),
        RegraBonusMeta("Meta Gen/Sim 95-99.9%", "generico_similar", 95, 100, _GEN_SIM, 0.005),
        RegraBonusMeta("Meta Gen/Sim 100%", "generico_similar", 100, 110, _GEN_SIM, 0.005),
        RegraBonusMeta("Meta Gen/Sim 110%", "generico_similar", 110, None, _GEN_SIM, 0.01),
        RegraBonusMeta("Meta GoodLife 100%", "goodlife", 100, None, _GEN_SIM, 0.005),
    ),
    "consultora": (
        RegraBonusMeta("Meta Perfumaria 100%", "perfumaria_alta", 100, None, ("perfumaria_alta",), 0.01),
        RegraBonusMeta("Meta Dermocosmético 100%", "dermocosmetico", 100, None, ("dermocosmetico",), 0.01),
        RegraBonusMeta("Meta GoodLife 100%", "goodlife", 100, None, ("goodlife",), 0.01),
    ),
})
BONUS_METAS = MappingProxyType({**BONUS_METAS, "auxiliar": BONUS_METAS["farmaceutico"]})

TABELA_APOIO = TabelaApoio(
    faixas_tempo=(
        FaixaTempoApoio(0, 158, ((95, 47.40), (100, 94.80)), 31.60, 15.80),
        FaixaTempoApoio(12, 256, ((95, 76.80), (100, 153.60)), 51.20, 25.60),
    ),
    indicadores=INDICADORES_LOJA,
)


@dataclass(frozen=True)
class RegrasPremiacao:
    """Conjunto completo de regras usado por um cálculo."""

    categorias_individuais: Mapping[str, Tuple[int, ...]] = field(default_factory=lambda: CATEGORIAS_INDIVIDUAIS)
    categorias_loja: Mapping[str, Tuple[int, ...]] = field(default_factory=lambda: CATEGORIAS_LOJA)
    sobreposicoes_conhecidas: FrozenSet[FrozenSet[str]] = SOBREPOSICOES_CONHECIDAS
    faixas_faturamento: TabelaFaixas = FAIXAS_FATURAMENTO
    escala_geral: EscalaMultiplicador = ESCALA_GERAL
    escala_indicador: EscalaMultiplicador = ESCALA_INDICADOR
    multiplicador_balanco: float = MULTIPLICADOR_BALANCO
    limite_multiplicador: float = LIMITE_MULTIPLICADOR
    indicadores_loja: Tuple[str, ...] = INDICADORES_LOJA
    taxas_comissao: Mapping[str, Mapping[str, float]] = field(default_factory=lambda: TAXAS_COMISSAO)
    bonus_metas: Mapping[str, Sequence[RegraBonusMeta]] = field(default_factory=lambda: BONUS_METAS)
    tabela_apoio: TabelaApoio = TABELA_APOIO
    regioes_sem_domingo: FrozenSet[str] = field(default_factory=lambda: frozenset({"centro"}))

    def com(self, **alteracoes) -> "RegrasPremiacao":
        """Cópia com algumas tabelas substituídas."""
        return replace(self, **alteracoes)

    def taxas_para(self, cargo: str) -> Dict[str, float]:
        return dict(self.taxas_comissao.get(cargo, {}))

    def bonus_para(self, cargo: str) -> Tuple[RegraBonusMeta, ...]:
        return tuple(self.bonus_metas.get(cargo, ()))


def regras_padrao() -> RegrasPremiacao:
    return RegrasPremiacao()


def faixa_aberta(valor) -> Optional[float]:
    """Converte limites vazios/infinitos de planilha em None (faixa aberta)."""
    if valor is None:
        return None
    try:
        numero = float(valor)
    except (TypeError, ValueError):
        return None
    if math.isnan(numero) or math.isinf(numero):
        return None
    return numero
