"""
Agregação de vendas por categoria.

Cada grupo de produto (CDGRUPO) pode alimentar várias categorias da mesma
árvore (ex.: o grupo 22 conta em "similar", "generico_similar" e "goodlife").
As árvores individual e de loja usam tabelas próprias e são montadas de forma
independente; toda venda soma em "geral" da árvore que está sendo montada.
"""

import logging
from dataclasses import asdict
from itertools import combinations
from typing import Iterable, List, Mapping, Optional, Tuple, Union

import pandas as pd

from premiacao.config.regras import RegrasPremiacao
from premiacao.models import Arvore, CategoryTotals, SalesRecord, VendasCategoria
from premiacao.utils.logging import ValidationLogger
from premiacao.utils.normalization import normalizar_codigo

logger = logging.getLogger(__name__)

COLUNAS_VENDAS = ["matricula", "loja", "grupo", "valor", "quantidade", "data"]

Vendas = Union[pd.DataFrame, Iterable[SalesRecord]]


def vendas_para_dataframe(vendas: Vendas) -> pd.DataFrame:
    """Converte uma lista de SalesRecord (ou um DataFrame já normalizado) em DataFrame padrão."""
    if isinstance(vendas, pd.DataFrame):
        df = vendas.copy()
    else:
        df = pd.DataFrame([asdict(v) for v in vendas])
    if df.empty:
        return pd.DataFrame(columns=COLUNAS_VENDAS)
    for col in COLUNAS_VENDAS:
        if col not in df.columns:
            df[col] = None
    df["valor"] = pd.to_numeric(df["valor"], errors="coerce").fillna(0.0)
    df["quantidade"] = pd.to_numeric(df["quantidade"], errors="coerce").fillna(0.0)
    return df[COLUNAS_VENDAS]


def validar_sobreposicoes(
    mapa: Mapping[str, Tuple[int, ...]],
    conhecidas,
    validation_logger: Optional[ValidationLogger] = None,
) -> List[Tuple[str, str, Tuple[int, ...]]]:
    """
    Lista pares de categorias que compartilham grupos sem estarem declarados como sobreposição.

    Returns:
        Lista de (categoria_a, categoria_b, grupos_em_comum)
    """
    inesperadas = []
    for (cat_a, cod_a), (cat_b, cod_b) in combinations(mapa.items(), 2):
        comuns = tuple(sorted(set(cod_a) & set(cod_b)))
        if comuns and frozenset({cat_a, cat_b}) not in conhecidas:
            inesperadas.append((cat_a, cat_b, comuns))
            if validation_logger is not None:
                validation_logger.aviso(
                    f"Categorias '{cat_a}' e '{cat_b}' compartilham grupos sem sobreposição declarada",
                    {"grupos": list(comuns)},
                )
    return inesperadas


class AgregadorCategorias:
    """
    Monta os totais por categoria das árvores individual e de loja.
    """

    def __init__(self, regras: RegrasPremiacao, validation_logger: Optional[ValidationLogger] = None):
        self.regras = regras
        self.validation_logger = validation_logger

    def mapa(self, arvore: Arvore) -> Mapping[str, Tuple[int, ...]]:
        if arvore == Arvore.INDIVIDUAL:
            return self.regras.categorias_individuais
        return self.regras.categorias_loja

    def agregar(self, vendas: Vendas, arvore: Arvore) -> CategoryTotals:
        """
        Soma valor e quantidade por categoria da árvore pedida.

        Args:
            vendas: Vendas já filtradas (do funcionário ou da loja)
            arvore: Árvore de categorias a montar

        Returns:
            Dict categoria → VendasCategoria, sempre com "geral" e com todas as
            categorias configuradas (zeradas quando não houve venda)
        """
        df = vendas_para_dataframe(vendas)
        mapa = self.mapa(arvore)

        totais: CategoryTotals = {
            "geral": VendasCategoria(float(df["valor"].sum()), float(df["quantidade"].sum()))
        }

        if df.empty:
            por_grupo = pd.DataFrame(columns=["valor", "quantidade"])
        else:
            grupos = pd.to_numeric(df["grupo"], errors="coerce")
            por_grupo = (
                df.assign(grupo=grupos)
                .dropna(subset=["grupo"])
                .astype({"grupo": int})
                .groupby("grupo")[["valor", "quantidade"]]
                .sum()
            )

        for categoria, codigos in mapa.items():
            if categoria == "geral":
                continue
            selecionados = por_grupo.loc[por_grupo.index.intersection(list(codigos))]
            totais[categoria] = VendasCategoria(
                float(selecionados["valor"].sum()),
                float(selecionados["quantidade"].sum()),
            )

        logger.debug("Árvore %s agregada: %d linha(s), geral=%.2f", arvore.value, len(df), totais["geral"].valor)
        return totais

    def filtrar_funcionario(self, vendas: Vendas, matricula) -> pd.DataFrame:
        """
        Filtra as vendas de um funcionário pela matrícula.

        Sem matrícula não há como atribuir vendas: devolve um DataFrame vazio e
        registra um AVISO (o cálculo segue com totais zerados).
        """
        df = vendas_para_dataframe(vendas)
        chave = normalizar_codigo(matricula)
        if not chave:
            if self.validation_logger is not None:
                self.validation_logger.aviso(
                    "Funcionário sem matrícula: vendas individuais consideradas zeradas",
                    {"linhas_ignoradas": len(df)},
                )
            return df.iloc[0:0]
        return df[df["matricula"].map(normalizar_codigo) == chave]

    def filtrar_loja(self, vendas: Vendas, loja) -> pd.DataFrame:
        """Filtra as vendas de uma loja; sem código de loja devolve todas as linhas."""
        df = vendas_para_dataframe(vendas)
        chave = normalizar_codigo(loja)
        if not chave:
            return df
        return df[df["loja"].map(normalizar_codigo) == chave]
