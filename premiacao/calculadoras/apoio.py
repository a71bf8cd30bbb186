"""
Premiação do apoio (aux1, fiscal, zelador) e do auxiliar de conveniência.

O apoio recebe valores fixos por faixa de tempo de empresa, conforme o
atingimento da loja. O auxiliar de conveniência recebe o apoio como bônus e
ainda comissão sobre conveniência e brinquedos.
"""

from typing import Dict

from premiacao.calculadoras.base import EntradaCalculo, PremiacaoCalculator, registrar, somar
from premiacao.calculadoras.comissao import CalculadoraComissao
from premiacao.config.regras import FaixaTempoApoio
from premiacao.models import Arvore, Cargo, PremiacaoResult

CHAVE_BALANCO = "balanco"


class ComissaoConveniencia(CalculadoraComissao):
    chave_regras = "aux_conveniencia"


@registrar
class CalculadoraApoio(PremiacaoCalculator):
    cargos = (Cargo.AUX1, Cargo.FISCAL, Cargo.ZELADOR)
    arvores = frozenset({Arvore.LOJA})
    usa_tempo_empresa = True

    def premios(self, faixa: FaixaTempoApoio, percentuais: Dict[str, float], balanco: bool) -> Dict[str, float]:
        tabela = self.regras.tabela_apoio
        premios = {"geral": faixa.valor_geral(percentuais.get("geral", 0.0))}
        for indicador in tabela.indicadores:
            batido = percentuais.get(indicador, 0.0) >= tabela.percentual_indicador
            premios[indicador] = faixa.indicador if batido else 0.0
        premios[CHAVE_BALANCO] = faixa.balanco if balanco else 0.0
        return premios

    def calcular(self, entrada: EntradaCalculo) -> PremiacaoResult:
        tabela = self.regras.tabela_apoio
        faixa = tabela.faixa_para(entrada.tempo_empresa.total_meses)
        categorias = ["geral", *tabela.indicadores]

        percentuais = entrada.percentuais(Arvore.LOJA, categorias)
        percentuais_proj = entrada.percentuais_projetados(Arvore.LOJA, categorias)
        premios = self.premios(faixa, percentuais, entrada.balanco)
        premios_proj = self.premios(faixa, percentuais_proj, entrada.balanco)

        def mult(valores):
            return {k: round(v / faixa.base_referencia, 4) for k, v in valores.items()}

        return PremiacaoResult(
            cargo=entrada.cargo.value,
            base_calculo=faixa.base_referencia,
            multiplicadores=mult(premios),
            premiacoes=premios,
            premiacao_atual=somar(premios),
            premiacao_projetada=somar(premios_proj),
            premiacao_maxima=faixa.valor_maximo(len(tabela.indicadores)),
            percentuais=percentuais,
            multiplicadores_projetados=mult(premios_proj),
            premiacoes_projetadas=premios_proj,
            detalhes={
                "tempo_empresa_anos": entrada.tempo_empresa.anos,
                "tempo_empresa_meses": entrada.tempo_empresa.meses,
                "faixa_tempo_meses": faixa.meses_minimos,
            },
        )


@registrar
class CalculadoraAuxConveniencia(PremiacaoCalculator):
    """Apoio (como bônus) somado à comissão de conveniência e brinquedos."""

    cargos = (Cargo.AUX_CONVENIENCIA,)
    arvores = frozenset({Arvore.INDIVIDUAL, Arvore.LOJA})
    usa_tempo_empresa = True

    def __init__(self, regras):
        super().__init__(regras)
        self.apoio = CalculadoraApoio(regras)
        self.comissao = ComissaoConveniencia(regras)

    def calcular(self, entrada: EntradaCalculo) -> PremiacaoResult:
        apoio = self.apoio.calcular(entrada)
        comissao = self.comissao.calcular(entrada)

        premiacoes = dict(apoio.premiacoes)
        premiacoes.update(comissao.premiacoes)
        multiplicadores = dict(apoio.multiplicadores)
        multiplicadores.update(comissao.multiplicadores)
        premiacoes_proj = dict(apoio.premiacoes_projetadas)
        premiacoes_proj.update(comissao.premiacoes_projetadas)
        multiplicadores_proj = dict(apoio.multiplicadores_projetados)
        multiplicadores_proj.update(comissao.multiplicadores_projetados)

        return PremiacaoResult(
            cargo=entrada.cargo.value,
            base_calculo=apoio.base_calculo,
            multiplicadores=multiplicadores,
            premiacoes=premiacoes,
            premiacao_atual=apoio.premiacao_atual + comissao.premiacao_atual,
            premiacao_projetada=apoio.premiacao_projetada + comissao.premiacao_projetada,
            premiacao_maxima=apoio.premiacao_maxima + comissao.premiacao_maxima,
            percentuais={**apoio.percentuais, **comissao.percentuais},
            multiplicadores_projetados=multiplicadores_proj,
            premiacoes_projetadas=premiacoes_proj,
            itens=comissao.itens,
            bonus_metas=comissao.bonus_metas,
            is_bonus=True,
            detalhes={
                **apoio.detalhes,
                "bonus_apoio": apoio.premiacao_atual,
                "total_comissoes": comissao.detalhes["total_comissoes"],
                "base_comissao": comissao.base_calculo,
            },
        )
