"""
Módulo para carregar as regras de premiação de planilhas.
Responsável por ler REGRAS_PREMIACAO.xlsx (ou CSVs individuais) e montar um
RegrasPremiacao, mantendo as tabelas padrão para o que não for informado.
"""

import logging
import os
from typing import Dict, List, Optional

import pandas as pd

from premiacao.config.regras import (
    EscalaMultiplicador,
    FaixaFaturamento,
    FaixaTempoApoio,
    RegrasPremiacao,
    TabelaApoio,
    TabelaFaixas,
    faixa_aberta,
    regras_padrao,
)
from premiacao.utils.logging import ValidationLogger
from premiacao.utils.normalization import normalize_text, to_float

logger = logging.getLogger(__name__)

CAMINHO_PADRAO = os.path.join("config", "REGRAS_PREMIACAO.xlsx")
VARIAVEL_AMBIENTE = "PREMIACAO_REGRAS_PATH"

ABAS = [
    "FAIXAS_FATURAMENTO",
    "TAXAS_COMISSAO",
    "CATEGORIAS_GRUPOS",
    "ESCALAS",
    "APOIO",
]


UNIDADES_PERCENTUAIS = {"%", "percentual", "pct"}
UNIDADES_FRACAO = {"fracao", "decimal"}


def _taxa(valor, percentual: bool) -> float:
    """Taxa em fração; valores em percentual (2 ou "0,5") são sempre divididos por 100."""
    numero = to_float(valor)
    return numero / 100 if percentual else numero


class ConfigLoader:
    """
    Classe para carregar as tabelas de regras de premiação.
    """

    def __init__(self, validation_logger: Optional[ValidationLogger] = None):
        """
        Inicializa o ConfigLoader.

        Args:
            validation_logger: Instância opcional de ValidationLogger para registrar avisos
        """
        self.validation_logger = validation_logger

    def _aviso(self, mensagem: str, contexto: Optional[Dict] = None):
        logger.warning(mensagem)
        if self.validation_logger is not None:
            self.validation_logger.aviso(mensagem, contexto)

    def resolver_caminho(self, config_path: Optional[str] = None) -> str:
        """Caminho explícito, depois a variável PREMIACAO_REGRAS_PATH, depois config/REGRAS_PREMIACAO.xlsx."""
        return config_path or os.getenv(VARIAVEL_AMBIENTE) or CAMINHO_PADRAO

    def load_sheets(self, config_path: Optional[str] = None) -> Dict[str, pd.DataFrame]:
        """
        Carrega as abas de regras.

        Tenta o Excel unificado primeiro; se não existir ou falhar, tenta CSVs
        individuais (FAIXAS_FATURAMENTO.csv, ...) na mesma pasta.

        Returns:
            Dicionário aba → DataFrame (só as abas encontradas)
        """
        config_path = self.resolver_caminho(config_path)
        data: Dict[str, pd.DataFrame] = {}

        if os.path.exists(config_path):
            try:
                data = pd.read_excel(config_path, sheet_name=None)
            except Exception as e:
                self._aviso(
                    f"Falha ao carregar {config_path}: {e}. Tentando CSVs individuais.",
                    {"path": config_path},
                )
                data = self._load_from_csvs(os.path.dirname(config_path))
        else:
            self._aviso(
                f"Arquivo {config_path} não encontrado. Tentando CSVs individuais.",
                {"path": config_path},
            )
            data = self._load_from_csvs(os.path.dirname(config_path))

        return self.normalize_config_dataframes(data)

    def _load_from_csvs(self, config_dir: str) -> Dict[str, pd.DataFrame]:
        data = {}
        for aba in ABAS:
            csv_path = os.path.join(config_dir or ".", f"{aba}.csv")
            if not os.path.exists(csv_path):
                continue
            try:
                data[aba] = pd.read_csv(csv_path)
            except Exception as e:
                self._aviso(f"Falha ao carregar {csv_path}: {e}", {"path": csv_path})
        return data

    def normalize_config_dataframes(self, data: Dict[str, pd.DataFrame]) -> Dict[str, pd.DataFrame]:
        """
        Normaliza nomes de abas e colunas (maiúsculas/minúsculas) e remove linhas vazias.
        """
        normalizados = {}
        for nome, df in data.items():
            if not isinstance(df, pd.DataFrame):
                continue
            df = df.copy()
            df.columns = [normalize_text(c).replace(" ", "_") for c in df.columns]
            df = df.dropna(how="all")
            for col in df.columns:
                if pd.api.types.is_object_dtype(df[col]):
                    df[col] = df[col].apply(lambda v: v.strip() if isinstance(v, str) else v)
            normalizados[str(nome).strip().upper()] = df
        return normalizados

    def load_regras(
        self,
        config_path: Optional[str] = None,
        base: Optional[RegrasPremiacao] = None,
    ) -> RegrasPremiacao:
        """
        Monta as regras de premiação a partir das planilhas.

        Cada aba substitui a tabela correspondente; abas ausentes ou inválidas
        mantêm a tabela de ``base`` (default: regras padrão) e geram AVISO.

        Args:
            config_path: Caminho do REGRAS_PREMIACAO.xlsx
            base: Regras de partida

        Returns:
            RegrasPremiacao com as tabelas carregadas
        """
        regras = base or regras_padrao()
        data = self.load_sheets(config_path)

        parsers = {
            "FAIXAS_FATURAMENTO": self.process_faixas_faturamento,
            "TAXAS_COMISSAO": self.process_taxas_comissao,
            "CATEGORIAS_GRUPOS": self.process_categorias_grupos,
            "ESCALAS": self.process_escalas,
            "APOIO": self.process_apoio,
        }
        for aba, parser in parsers.items():
            df = data.get(aba)
            if df is None or df.empty:
                continue
            try:
                alteracoes = parser(df, regras)
            except (KeyError, ValueError, TypeError) as e:
                self._aviso(f"Aba {aba} inválida, mantendo regras padrão: {e}", {"aba": aba})
                continue
            regras = regras.com(**alteracoes)
            logger.info("Aba %s carregada (%d linha(s))", aba, len(df))

        return regras

    def process_faixas_faturamento(self, df: pd.DataFrame, regras: RegrasPremiacao) -> Dict:
        """Colunas: minimo, maximo (vazio = faixa aberta), base."""
        df = df.sort_values("minimo")
        faixas = [
            FaixaFaturamento(to_float(row["minimo"]), faixa_aberta(row["maximo"]), to_float(row["base"]))
            for _, row in df.iterrows()
        ]
        return {"faixas_faturamento": TabelaFaixas(tuple(faixas))}

    def process_taxas_comissao(self, df: pd.DataFrame, regras: RegrasPremiacao) -> Dict:
        """
        Colunas: cargo, categoria e ``taxa`` (fração, 0.02) ou ``taxa_percentual`` (2 = 2%).

        Uma coluna opcional ``unidade`` ("%" ou "fracao") define a unidade de
        cada linha da coluna ``taxa``. Cargos presentes substituem a tabela
        inteira do cargo.
        """
        if "taxa_percentual" in df.columns:
            coluna, percentual_padrao = "taxa_percentual", True
        elif "taxa" in df.columns:
            coluna, percentual_padrao = "taxa", False
        else:
            raise KeyError("taxa")

        taxas = {cargo: dict(t) for cargo, t in regras.taxas_comissao.items()}
        novas: Dict[str, Dict[str, float]] = {}
        for _, row in df.iterrows():
            cargo = normalize_text(row["cargo"]).replace(" ", "_")
            categoria = normalize_text(row["categoria"]).replace(" ", "_")
            if not cargo or not categoria:
                raise ValueError(f"Linha sem cargo/categoria: {row.to_dict()}")
            percentual = percentual_padrao
            unidade = normalize_text(row.get("unidade"))
            if unidade in UNIDADES_PERCENTUAIS:
                percentual = True
            elif unidade in UNIDADES_FRACAO:
                percentual = False
            elif unidade:
                raise ValueError(f"Unidade de taxa desconhecida: {row['unidade']}")
            novas.setdefault(cargo, {})[categoria] = _taxa(row[coluna], percentual)
        taxas.update(novas)
        return {"taxas_comissao": taxas}

    def process_categorias_grupos(self, df: pd.DataFrame, regras: RegrasPremiacao) -> Dict:
        """Colunas: arvore (individual|loja), categoria, grupo (uma linha por grupo de produto)."""
        mapas: Dict[str, Dict[str, List[int]]] = {"individual": {}, "loja": {}}
        for _, row in df.iterrows():
            arvore = normalize_text(row["arvore"])
            if arvore not in mapas:
                raise ValueError(f"Árvore desconhecida: {row['arvore']}")
            categoria = normalize_text(row["categoria"]).replace(" ", "_")
            mapas[arvore].setdefault(categoria, []).append(int(to_float(row["grupo"], default=float("nan"))))

        alteracoes = {}
        if mapas["individual"]:
            alteracoes["categorias_individuais"] = {k: tuple(v) for k, v in mapas["individual"].items()}
        if mapas["loja"]:
            alteracoes["categorias_loja"] = {k: tuple(v) for k, v in mapas["loja"].items()}
        return alteracoes

    def process_escalas(self, df: pd.DataFrame, regras: RegrasPremiacao) -> Dict:
        """
        Colunas: escala, percentual, multiplicador.

        Escalas "geral" e "indicador" são faixas; "balanco" e "limite" usam só
        o multiplicador.
        """
        faixas: Dict[str, list] = {}
        alteracoes = {}
        for _, row in df.iterrows():
            escala = normalize_text(row["escala"])
            mult = to_float(row["multiplicador"])
            if escala == "balanco":
                alteracoes["multiplicador_balanco"] = mult
            elif escala == "limite":
                alteracoes["limite_multiplicador"] = mult
            elif escala in ("geral", "indicador"):
                faixas.setdefault(escala, []).append((to_float(row["percentual"]), mult))
            else:
                raise ValueError(f"Escala desconhecida: {row['escala']}")

        for escala, lista in faixas.items():
            alteracoes[f"escala_{escala}"] = EscalaMultiplicador(tuple(sorted(lista)))
        return alteracoes

    def process_apoio(self, df: pd.DataFrame, regras: RegrasPremiacao) -> Dict:
        """
        Colunas: meses_minimos, base_referencia, componente (geral|indicador|balanco),
        percentual, valor.
        """
        faixas = []
        for meses, grupo in df.groupby("meses_minimos", sort=True):
            geral = []
            indicador = 0.0
            balanco = 0.0
            for _, row in grupo.iterrows():
                componente = normalize_text(row["componente"])
                if componente == "geral":
                    geral.append((to_float(row["percentual"]), to_float(row["valor"])))
                elif componente == "indicador":
                    indicador = to_float(row["valor"])
                elif componente == "balanco":
                    balanco = to_float(row["valor"])
                else:
                    raise ValueError(f"Componente de apoio desconhecido: {row['componente']}")
            faixas.append(
                FaixaTempoApoio(
                    meses_minimos=int(meses),
                    base_referencia=to_float(grupo["base_referencia"].iloc[0]),
                    geral=tuple(sorted(geral)),
                    indicador=indicador,
                    balanco=balanco,
                )
            )
        tabela = regras.tabela_apoio
        return {
            "tabela_apoio": TabelaApoio(
                faixas_tempo=tuple(faixas),
                indicadores=tabela.indicadores,
                percentual_indicador=tabela.percentual_indicador,
            )
        }
