"""
Modelo de dados do motor de premiação.

Todas as estruturas são construídas a cada cálculo (funcionário, período, loja)
e descartadas depois que o resultado é devolvido. Nada aqui é persistido.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from premiacao.utils.normalization import normalize_text


class Cargo(str, Enum):
    """Cargos com regra de premiação própria."""

    GERENTE = "gerente"
    LIDER = "lider"
    FARMACEUTICO = "farmaceutico"
    AUXILIAR = "auxiliar"
    CONSULTORA = "consultora"
    AUX1 = "aux1"
    FISCAL = "fiscal"
    ZELADOR = "zelador"
    AUX_CONVENIENCIA = "aux_conveniencia"

    @classmethod
    def from_value(cls, valor) -> Optional["Cargo"]:
        """Converte texto livre ("Farmacêutico", " LIDER ") no cargo; None se desconhecido."""
        if isinstance(valor, cls):
            return valor
        chave = normalize_text(valor).replace(" ", "_")
        for cargo in cls:
            if cargo.value == chave:
                return cargo
        return None


class Arvore(str, Enum):
    """Árvores de categorias. Nunca são misturadas."""

    INDIVIDUAL = "individual"
    LOJA = "loja"


class ClassificacaoRitmo(str, Enum):
    ADIANTADO = "ahead"
    NO_RITMO = "on-pace"
    ATENCAO = "caution"
    ATRASADO = "behind"


@dataclass(frozen=True)
class SalesRecord:
    """Linha de venda já agregada por funcionário/loja/dia/grupo de produto."""

    matricula: str
    loja: str
    grupo: int
    valor: float
    quantidade: float
    data: date


@dataclass
class VendasCategoria:
    valor: float = 0.0
    quantidade: float = 0.0


CategoryTotals = Dict[str, VendasCategoria]
Metas = Dict[str, float]


@dataclass(frozen=True)
class DiasUteis:
    """Calendário de dias úteis de um período para um funcionário."""

    dias_total: int
    dias_uteis_total: int
    dias_uteis_passados: int
    dias_uteis_restantes: int
    percentual_tempo: float


@dataclass(frozen=True)
class Projecao:
    valor_atual: float
    percentual_atual: float
    ritmo_diario: float
    valor_projetado: float
    percentual_projetado: float
    meta: float
    dias_passados: int
    dias_restantes: int
    status: str


@dataclass(frozen=True)
class DiasCriticos:
    inicio_mes: bool
    fim_mes: bool
    ritmo_acelerado: bool


@dataclass(frozen=True)
class AnaliseRitmo:
    categoria: str
    percentual_atual: float
    percentual_tempo: float
    razao: float
    classificacao: ClassificacaoRitmo
    falta_para_meta: float
    ritmo_atual: float
    ritmo_necessario: float
    diferenca_ritmo: float
    pode_atingir: bool
    dias_criticos: DiasCriticos


@dataclass(frozen=True)
class TempoEmpresa:
    anos: int
    meses: int

    @property
    def total_meses(self) -> int:
        return self.anos * 12 + self.meses


@dataclass(frozen=True)
class Insight:
    titulo: str
    descricao: str
    severidade: str
    cor: str
    icone: str
    categoria: Optional[str] = None


@dataclass(frozen=True)
class ItemComissao:
    """Linha do extrato de comissão (uma categoria com venda)."""

    categoria: str
    valor_vendido: float
    taxa: float
    comissao: float


@dataclass(frozen=True)
class BonusMeta:
    """Bônus pago por atingir uma faixa de meta."""

    descricao: str
    valor: float


@dataclass
class PremiacaoResult:
    cargo: str
    base_calculo: float
    multiplicadores: Dict[str, float]
    premiacoes: Dict[str, float]
    premiacao_atual: float
    premiacao_projetada: float
    premiacao_maxima: float
    percentuais: Dict[str, float] = field(default_factory=dict)
    multiplicadores_projetados: Dict[str, float] = field(default_factory=dict)
    premiacoes_projetadas: Dict[str, float] = field(default_factory=dict)
    itens: List[ItemComissao] = field(default_factory=list)
    bonus_metas: List[BonusMeta] = field(default_factory=list)
    is_bonus: bool = False
    detalhes: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Funcionario:
    cargo: str
    matricula: Optional[str] = None
    data_contratacao: Optional[date] = None
    nome: str = ""


@dataclass(frozen=True)
class Loja:
    codigo: str
    regiao: str = "outros"


@dataclass(frozen=True)
class Periodo:
    inicio: date
    fim: date
    id: Optional[int] = None


ChaveCalculo = Tuple[Optional[str], Any, str]


@dataclass
class ResultadoCalculo:
    """Pacote completo devolvido por um cálculo de premiação."""

    funcionario: Funcionario
    loja: Loja
    periodo: Periodo
    dias_uteis: DiasUteis
    tempo_empresa: TempoEmpresa
    premiacao: PremiacaoResult
    totais_individuais: CategoryTotals = field(default_factory=dict)
    totais_loja: CategoryTotals = field(default_factory=dict)
    metas_individuais: Metas = field(default_factory=dict)
    metas_loja: Metas = field(default_factory=dict)
    projecoes_individuais: Dict[str, Projecao] = field(default_factory=dict)
    projecoes_loja: Dict[str, Projecao] = field(default_factory=dict)
    ritmo_individual: Dict[str, AnaliseRitmo] = field(default_factory=dict)
    ritmo_loja: Dict[str, AnaliseRitmo] = field(default_factory=dict)
    insights: List[Insight] = field(default_factory=list)
    avisos: List[Dict[str, str]] = field(default_factory=list)

    @property
    def mensagens_aviso(self) -> List[str]:
        return [a["Mensagem"] for a in self.avisos if a.get("Nível") == "AVISO"]
