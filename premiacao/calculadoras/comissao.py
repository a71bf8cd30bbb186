"""
Calculadoras de comissão sobre vendas individuais (farmacêutico, auxiliar e consultora).

A comissão é a soma de ``valor × taxa`` por categoria, mais os bônus por
faixa de atingimento de meta. Cada cenário (atual, projetado, máximo) usa
valores e percentuais próprios.
"""

from typing import Dict, List, Mapping, Sequence, Tuple

from premiacao.calculadoras.base import EntradaCalculo, PremiacaoCalculator, registrar, somar
from premiacao.config.regras import RegraBonusMeta
from premiacao.models import Arvore, BonusMeta, Cargo, ItemComissao, PremiacaoResult


def avaliar_comissao(
    taxas: Mapping[str, float],
    valores: Mapping[str, float],
) -> Tuple[Dict[str, float], List[ItemComissao]]:
    """
    Aplica as taxas sobre os valores vendidos.

    Returns:
        (comissão por categoria, extrato). Categorias sem venda entram no total
        com zero mas ficam fora do extrato.
    """
    comissoes = {}
    itens = []
    for categoria, taxa in taxas.items():
        valor = float(valores.get(categoria, 0.0))
        comissao = valor * taxa
        comissoes[categoria] = comissao
        if valor > 0:
            itens.append(ItemComissao(categoria, valor, taxa, comissao))
    return comissoes, itens


def avaliar_bonus_metas(
    regras: Sequence[RegraBonusMeta],
    valores: Mapping[str, float],
    percentuais: Mapping[str, float],
) -> List[BonusMeta]:
    """Bônus de cada regra cuja faixa contém o percentual da categoria de meta."""
    bonus = []
    for regra in regras:
        if not regra.aplica(percentuais.get(regra.categoria_meta, 0.0)):
            continue
        base = sum(float(valores.get(c, 0.0)) for c in regra.categorias_base)
        bonus.append(BonusMeta(regra.descricao, base * regra.taxa))
    return bonus


class CalculadoraComissao(PremiacaoCalculator):
    """Comissão por categoria com taxas e bônus do cargo (chave em ``regras.taxas_comissao``)."""

    arvores = frozenset({Arvore.INDIVIDUAL})
    arvore_comissao = Arvore.INDIVIDUAL
    chave_regras = ""

    def _categorias(self, taxas, bonus) -> List[str]:
        ordem = list(taxas)
        for regra in bonus:
            for categoria in (regra.categoria_meta, *regra.categorias_base):
                if categoria not in ordem:
                    ordem.append(categoria)
        return ordem

    def _cenarios(self, entrada: EntradaCalculo, categorias) -> Dict[str, Tuple[Dict, Dict]]:
        arvore = self.arvore_comissao
        atual_v = {c: entrada.valor(arvore, c) for c in categorias}
        atual_p = entrada.percentuais(arvore, categorias)
        proj_v = {c: entrada.valor_projetado(arvore, c) for c in categorias}
        proj_p = entrada.percentuais_projetados(arvore, categorias)

        max_v = {c: max(proj_v[c], entrada.meta(arvore, c)) for c in categorias}
        max_p = {
            c: max(proj_p[c], 100.0) if entrada.meta(arvore, c) > 0 else proj_p[c]
            for c in categorias
        }
        return {
            "atual": (atual_v, atual_p),
            "projetada": (proj_v, proj_p),
            "maxima": (max_v, max_p),
        }

    def avaliar(self, entrada: EntradaCalculo):
        """
        Avalia os três cenários.

        Returns:
            Dict cenário → (comissões, extrato, bônus, percentuais)
        """
        taxas = self.regras.taxas_para(self.chave_regras)
        bonus = self.regras.bonus_para(self.chave_regras)
        resultado = {}
        for nome, (valores, percentuais) in self._cenarios(entrada, self._categorias(taxas, bonus)).items():
            comissoes, itens = avaliar_comissao(taxas, valores)
            resultado[nome] = (comissoes, itens, avaliar_bonus_metas(bonus, valores, percentuais), percentuais)
        return resultado

    def calcular(self, entrada: EntradaCalculo) -> PremiacaoResult:
        taxas = self.regras.taxas_para(self.chave_regras)
        cenarios = self.avaliar(entrada)

        comissoes, itens, bonus, percentuais = cenarios["atual"]
        comissoes_proj, _, bonus_proj, _ = cenarios["projetada"]
        comissoes_max, _, bonus_max, _ = cenarios["maxima"]

        total_comissao = somar(comissoes)
        total_bonus = sum(b.valor for b in bonus)

        return PremiacaoResult(
            cargo=entrada.cargo.value,
            base_calculo=sum(entrada.valor(self.arvore_comissao, c) for c in taxas),
            multiplicadores=dict(taxas),
            premiacoes=comissoes,
            premiacao_atual=total_comissao + total_bonus,
            premiacao_projetada=somar(comissoes_proj) + sum(b.valor for b in bonus_proj),
            premiacao_maxima=somar(comissoes_max) + sum(b.valor for b in bonus_max),
            percentuais=percentuais,
            multiplicadores_projetados=dict(taxas),
            premiacoes_projetadas=comissoes_proj,
            itens=itens,
            bonus_metas=bonus,
            detalhes={
                "total_comissoes": total_comissao,
                "total_bonus_metas": total_bonus,
            },
        )


@registrar
class CalculadoraFarmaceutico(CalculadoraComissao):
    cargos = (Cargo.FARMACEUTICO,)
    chave_regras = "farmaceutico"


@registrar
class CalculadoraAuxiliar(CalculadoraComissao):
    cargos = (Cargo.AUXILIAR,)
    chave_regras = "auxiliar"


@registrar
class CalculadoraConsultora(CalculadoraComissao):
    """Comissão restrita às categorias de beleza e GoodLife."""

    cargos = (Cargo.CONSULTORA,)
    chave_regras = "consultora"
