"""
Premiação gerencial (gerente e líder).

Base de cálculo pela faixa de faturamento da loja; multiplicadores por faixa
de atingimento da meta geral e dos indicadores da loja, mais o balanço.
"""

from typing import Dict

from premiacao.calculadoras.base import EntradaCalculo, PremiacaoCalculator, registrar, somar
from premiacao.models import Arvore, Cargo, PremiacaoResult

CHAVE_BALANCO = "balanco"


@registrar
class CalculadoraGerencial(PremiacaoCalculator):
    cargos = (Cargo.GERENTE, Cargo.LIDER)
    arvores = frozenset({Arvore.LOJA})

    def multiplicadores(self, percentuais: Dict[str, float], balanco: bool) -> Dict[str, float]:
        """Multiplicador da maior faixa atingida em cada componente."""
        regras = self.regras
        mult = {"geral": regras.escala_geral.multiplicador(percentuais.get("geral", 0.0))}
        for indicador in regras.indicadores_loja:
            mult[indicador] = regras.escala_indicador.multiplicador(percentuais.get(indicador, 0.0))
        mult[CHAVE_BALANCO] = regras.multiplicador_balanco if balanco else 0.0
        return mult

    def multiplicadores_maximos(self) -> Dict[str, float]:
        regras = self.regras
        mult = {"geral": regras.escala_geral.maximo}
        for indicador in regras.indicadores_loja:
            mult[indicador] = regras.escala_indicador.maximo
        mult[CHAVE_BALANCO] = regras.multiplicador_balanco
        return mult

    def premiacao(self, base: float, multiplicadores: Dict[str, float]) -> float:
        """``base × Σ multiplicadores``, com a soma limitada ao teto configurado."""
        return base * min(somar(multiplicadores), self.regras.limite_multiplicador)

    def calcular(self, entrada: EntradaCalculo) -> PremiacaoResult:
        loja = Arvore.LOJA
        categorias = ["geral", *self.regras.indicadores_loja]

        faturamento = entrada.valor(loja, "geral")
        faturamento_projetado = entrada.valor_projetado(loja, "geral")
        base = self.regras.faixas_faturamento.base_para(faturamento)
        base_projetada = self.regras.faixas_faturamento.base_para(faturamento_projetado)

        percentuais = entrada.percentuais(loja, categorias)
        percentuais_proj = entrada.percentuais_projetados(loja, categorias)

        mult = self.multiplicadores(percentuais, entrada.balanco)
        mult_proj = self.multiplicadores(percentuais_proj, entrada.balanco)
        mult_max = self.multiplicadores_maximos()

        return PremiacaoResult(
            cargo=entrada.cargo.value,
            base_calculo=base,
            multiplicadores=mult,
            premiacoes={k: base * m for k, m in mult.items()},
            premiacao_atual=self.premiacao(base, mult),
            premiacao_projetada=self.premiacao(base, mult_proj),
            premiacao_maxima=self.premiacao(base, mult_max),
            percentuais=percentuais,
            multiplicadores_projetados=mult_proj,
            premiacoes_projetadas={k: base * m for k, m in mult_proj.items()},
            detalhes={
                "faturamento": faturamento,
                "faturamento_projetado": faturamento_projetado,
                "base_calculo_projetada": base_projetada,
                "premiacao_projetada_faixa_projetada": self.premiacao(base_projetada, mult_proj),
                "soma_multiplicadores": somar(mult),
                "limite_multiplicador": self.regras.limite_multiplicador,
            },
        )
