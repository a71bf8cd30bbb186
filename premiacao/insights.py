"""
Geração de insights a partir do ritmo e das projeções das categorias.

Os textos são montados por regras fixas: mesmas entradas, mesmos insights e
na mesma ordem (severidade, depois a ordem das categorias).
"""

import logging
from typing import List, Mapping, Optional

from premiacao.models import AnaliseRitmo, ClassificacaoRitmo, DiasUteis, Insight, Projecao
from premiacao.utils.formatters import formatar_moeda, formatar_percentual
from premiacao.utils.normalization import to_float

logger = logging.getLogger(__name__)

SEVERIDADE_ALTA = "alta"
SEVERIDADE_MEDIA = "media"
SEVERIDADE_BAIXA = "baixa"
ORDEM_SEVERIDADE = {SEVERIDADE_ALTA: 1, SEVERIDADE_MEDIA: 2, SEVERIDADE_BAIXA: 3}

PERCENTUAL_TEMPO_RETA_FINAL = 75.0
DIAS_RETA_FINAL = 5
FAIXA_PROXIMO_META = (85.0, 100.0)

NOMES_CATEGORIAS = {
    "generico_similar": "Genérico+Similar",
    "generico": "Genérico",
    "similar": "Similar",
    "goodlife": "GoodLife",
    "perfumaria_alta": "Perfumaria Alta",
    "dermocosmetico": "Dermocosmético",
    "geral": "Meta Geral",
    "r_mais": "Rentáveis",
    "rentaveis20": "Rentáveis 20",
    "rentaveis25": "Rentáveis 25",
    "perfumaria_r_mais": "Perfumaria R+",
    "conveniencia_r_mais": "Conveniência R+",
    "conveniencia": "Conveniência",
    "brinquedo": "Brinquedos",
    "saude": "GoodLife",
}


def nome_categoria(categoria: str) -> str:
    """Nome de exibição da categoria; categorias sem nome cadastrado aparecem como a chave."""
    return NOMES_CATEGORIAS.get(categoria, categoria)


class GeradorInsights:
    """
    Gera insights com enquadramento pessoal ("Você") ou da loja ("A loja").

    Args:
        enquadramento_loja: True para cargos avaliados pela árvore da loja
    """

    def __init__(self, enquadramento_loja: bool = False):
        self.enquadramento_loja = enquadramento_loja

    @property
    def sujeito(self) -> str:
        return "A loja" if self.enquadramento_loja else "Você"

    @property
    def alvo_premiacao(self) -> str:
        return "a premiação da loja" if self.enquadramento_loja else "sua premiação"

    def _reta_final(self, dias: DiasUteis) -> Optional[Insight]:
        restantes = dias.dias_uteis_restantes
        if dias.percentual_tempo > PERCENTUAL_TEMPO_RETA_FINAL and 0 < restantes <= DIAS_RETA_FINAL:
            return Insight(
                titulo="Reta final do período!",
                descricao=(
                    f"Restam apenas {restantes} dia{'s' if restantes > 1 else ''} "
                    f"út{'eis' if restantes > 1 else 'il'}. "
                    "Foque nas categorias mais próximas de atingir as metas."
                ),
                severidade=SEVERIDADE_ALTA,
                cor="#e74c3c",
                icone="clock",
            )
        return None

    def _insight_categoria(
        self,
        categoria: str,
        analise: AnaliseRitmo,
        projecao: Optional[Projecao],
        dias: DiasUteis,
    ) -> Optional[Insight]:
        nome = nome_categoria(categoria)
        falta = formatar_moeda(analise.falta_para_meta)
        restantes = dias.dias_uteis_restantes
        classificacao = analise.classificacao

        if classificacao == ClassificacaoRitmo.ATRASADO:
            return Insight(
                titulo=f"{nome} abaixo do ritmo",
                descricao=(
                    f"{self.sujeito} está em {formatar_percentual(analise.percentual_atual)} da meta com "
                    f"{formatar_percentual(analise.percentual_tempo)} do período decorrido. "
                    f"Faltam {falta} em {restantes} dias úteis."
                ),
                severidade=SEVERIDADE_ALTA,
                cor="#e74c3c",
                icone="alert-triangle",
                categoria=categoria,
            )

        if classificacao == ClassificacaoRitmo.ATENCAO:
            return Insight(
                titulo=f"Atenção em {nome}",
                descricao=(
                    f"O ritmo está um pouco abaixo do necessário. "
                    f"Faltam {falta} em {restantes} dias úteis."
                ),
                severidade=SEVERIDADE_MEDIA,
                cor="#f39c12",
                icone="alert-circle",
                categoria=categoria,
            )

        if classificacao == ClassificacaoRitmo.ADIANTADO:
            return Insight(
                titulo=f"{nome} já em {formatar_percentual(analise.percentual_atual)}!",
                descricao=f"Continue focando nessa categoria para maximizar {self.alvo_premiacao}.",
                severidade=SEVERIDADE_BAIXA,
                cor="#3498db",
                icone="check-circle",
                categoria=categoria,
            )

        minimo, maximo = FAIXA_PROXIMO_META
        if projecao is not None and minimo <= projecao.percentual_projetado < maximo and analise.pode_atingir:
            return Insight(
                titulo=f"{nome} próximo da meta!",
                descricao=f"Faltam apenas {falta} para atingir 100%.",
                severidade=SEVERIDADE_ALTA,
                cor="#27ae60",
                icone="fire",
                categoria=categoria,
            )
        return None

    def gerar(
        self,
        analises: Mapping[str, AnaliseRitmo],
        projecoes: Mapping[str, Projecao],
        dias: DiasUteis,
        metas: Optional[Mapping[str, float]] = None,
    ) -> List[Insight]:
        """
        Gera os insights de uma árvore de categorias.

        Args:
            analises: Análise de ritmo por categoria (define a ordem das categorias)
            projecoes: Projeção por categoria
            dias: Calendário de dias úteis
            metas: Metas da árvore; se omitido, usa a meta de cada projeção

        Returns:
            Lista ordenada por severidade (alta, media, baixa) e, dentro da
            mesma severidade, pela ordem das categorias
        """
        insights: List[Insight] = []
        reta_final = self._reta_final(dias)
        if reta_final:
            insights.append(reta_final)

        for categoria, analise in analises.items():
            projecao = projecoes.get(categoria)
            meta = self._meta(categoria, projecao, metas)
            if meta <= 0:
                continue
            insight = self._insight_categoria(categoria, analise, projecao, dias)
            if insight:
                insights.append(insight)

        insights.sort(key=lambda i: ORDEM_SEVERIDADE[i.severidade])
        logger.debug("%d insight(s) gerado(s)", len(insights))
        return insights

    @staticmethod
    def _meta(categoria: str, projecao: Optional[Projecao], metas: Optional[Mapping[str, float]]) -> float:
        if metas is not None:
            return to_float(metas.get(categoria))
        return projecao.meta if projecao is not None else 0.0

