"""
Gera DataFrames e arquivo Excel de saída a partir de um ResultadoCalculo.
"""

import logging
import os
from typing import Dict, List, Optional

import pandas as pd

from premiacao.insights import nome_categoria
from premiacao.models import AnaliseRitmo, CategoryTotals, Metas, Projecao, ResultadoCalculo
from premiacao.utils.formatters import formatar_moeda
from premiacao.utils.styling import style_output_workbook

logger = logging.getLogger(__name__)

COLUNAS_CATEGORIAS = [
    "arvore",
    "categoria",
    "nome",
    "valor",
    "quantidade",
    "meta",
    "percentual",
    "valor_projetado",
    "percentual_projetado",
    "status",
    "classificacao",
    "falta_para_meta",
    "ritmo_necessario",
]


class PremiacaoOutputGenerator:
    """
    Converte o resultado de um cálculo em abas (DataFrames) e grava o Excel.
    """

    def _linhas_categorias(
        self,
        arvore: str,
        totais: CategoryTotals,
        metas: Metas,
        projecoes: Dict[str, Projecao],
        ritmo: Dict[str, AnaliseRitmo],
    ) -> List[Dict]:
        linhas = []
        categorias = list(projecoes) + [c for c in totais if c not in projecoes]
        for categoria in categorias:
            vendas = totais.get(categoria)
            projecao = projecoes.get(categoria)
            analise = ritmo.get(categoria)
            linhas.append({
                "arvore": arvore,
                "categoria": categoria,
                "nome": nome_categoria(categoria),
                "valor": vendas.valor if vendas else 0.0,
                "quantidade": vendas.quantidade if vendas else 0.0,
                "meta": metas.get(categoria, 0.0),
                "percentual": projecao.percentual_atual if projecao else 0.0,
                "valor_projetado": projecao.valor_projetado if projecao else 0.0,
                "percentual_projetado": projecao.percentual_projetado if projecao else 0.0,
                "status": projecao.status if projecao else "",
                "classificacao": analise.classificacao.value if analise else "",
                "falta_para_meta": analise.falta_para_meta if analise else 0.0,
                "ritmo_necessario": analise.ritmo_necessario if analise else 0.0,
            })
        return linhas

    def dataframes(self, resultado: ResultadoCalculo) -> Dict[str, pd.DataFrame]:
        """
        Monta as abas de saída.

        Returns:
            Dict com RESUMO, CATEGORIAS, PREMIACAO, COMISSOES, BONUS_METAS,
            INSIGHTS e AVISOS (abas sem dados saem vazias com as colunas esperadas)
        """
        premiacao = resultado.premiacao
        dias = resultado.dias_uteis

        resumo = pd.DataFrame([
            {"campo": "matricula", "valor": resultado.funcionario.matricula or ""},
            {"campo": "cargo", "valor": premiacao.cargo},
            {"campo": "loja", "valor": resultado.loja.codigo},
            {"campo": "regiao", "valor": resultado.loja.regiao},
            {"campo": "periodo", "valor": f"{resultado.periodo.inicio:%d/%m/%Y} a {resultado.periodo.fim:%d/%m/%Y}"},
            {"campo": "dias_uteis_total", "valor": dias.dias_uteis_total},
            {"campo": "dias_uteis_passados", "valor": dias.dias_uteis_passados},
            {"campo": "dias_uteis_restantes", "valor": dias.dias_uteis_restantes},
            {"campo": "percentual_tempo", "valor": round(dias.percentual_tempo, 2)},
            {"campo": "tempo_empresa_meses", "valor": resultado.tempo_empresa.total_meses},
            {"campo": "base_calculo", "valor": premiacao.base_calculo},
            {"campo": "premiacao_atual", "valor": formatar_moeda(premiacao.premiacao_atual)},
            {"campo": "premiacao_projetada", "valor": formatar_moeda(premiacao.premiacao_projetada)},
            {"campo": "premiacao_maxima", "valor": formatar_moeda(premiacao.premiacao_maxima)},
            {"campo": "is_bonus", "valor": premiacao.is_bonus},
        ])

        linhas = self._linhas_categorias(
            "individual",
            resultado.totais_individuais,
            resultado.metas_individuais,
            resultado.projecoes_individuais,
            resultado.ritmo_individual,
        )
        linhas += self._linhas_categorias(
            "loja",
            resultado.totais_loja,
            resultado.metas_loja,
            resultado.projecoes_loja,
            resultado.ritmo_loja,
        )
        categorias = pd.DataFrame(linhas, columns=COLUNAS_CATEGORIAS)

        componentes = list(premiacao.premiacoes)
        componentes += [c for c in premiacao.premiacoes_projetadas if c not in premiacao.premiacoes]
        premiacao_df = pd.DataFrame(
            [
                {
                    "componente": c,
                    "percentual": premiacao.percentuais.get(c, 0.0),
                    "multiplicador": premiacao.multiplicadores.get(c, 0.0),
                    "premiacao": premiacao.premiacoes.get(c, 0.0),
                    "multiplicador_projetado": premiacao.multiplicadores_projetados.get(c, 0.0),
                    "premiacao_projetada": premiacao.premiacoes_projetadas.get(c, 0.0),
                }
                for c in componentes
            ],
            columns=[
                "componente",
                "percentual",
                "multiplicador",
                "premiacao",
                "multiplicador_projetado",
                "premiacao_projetada",
            ],
        )

        comissoes = pd.DataFrame(
            [{"categoria": i.categoria, "valor": i.valor_vendido, "taxa": i.taxa, "comissao": i.comissao}
             for i in premiacao.itens],
            columns=["categoria", "valor", "taxa", "comissao"],
        )
        bonus = pd.DataFrame(
            [{"descricao": b.descricao, "bonus": b.valor} for b in premiacao.bonus_metas],
            columns=["descricao", "bonus"],
        )
        insights = pd.DataFrame(
            [
                {
                    "severidade": i.severidade,
                    "categoria": i.categoria or "",
                    "titulo": i.titulo,
                    "descricao": i.descricao,
                    "icone": i.icone,
                    "cor": i.cor,
                }
                for i in resultado.insights
            ],
            columns=["severidade", "categoria", "titulo", "descricao", "icone", "cor"],
        )
        avisos = pd.DataFrame(resultado.avisos, columns=["Nível", "Mensagem", "Contexto"])

        return {
            "RESUMO": resumo,
            "CATEGORIAS": categorias,
            "PREMIACAO": premiacao_df,
            "COMISSOES": comissoes,
            "BONUS_METAS": bonus,
            "INSIGHTS": insights,
            "AVISOS": avisos,
        }

    def gerar(self, resultado: ResultadoCalculo, base_path: str = ".", filename: Optional[str] = None) -> str:
        """
        Gera o arquivo Excel com todas as abas e aplica a estilização.

        Args:
            resultado: Resultado de um cálculo
            base_path: Pasta de destino
            filename: Nome do arquivo (default: Premiacao_<matricula|loja>_<AAAA-MM-DD>.xlsx)

        Returns:
            Caminho do arquivo gerado
        """
        if filename is None:
            quem = resultado.funcionario.matricula or f"loja{resultado.loja.codigo}"
            filename = f"Premiacao_{quem}_{resultado.periodo.fim:%Y-%m-%d}.xlsx"
        filepath = os.path.join(base_path, filename)

        abas = self.dataframes(resultado)
        with pd.ExcelWriter(filepath, engine="openpyxl") as writer:
            for nome, df in abas.items():
                df.to_excel(writer, sheet_name=nome, index=False)
                logger.debug("Aba %s: %d linha(s)", nome, len(df))

        style_output_workbook(filepath)
        logger.info("Arquivo de premiação gerado: %s", filepath)
        return filepath
