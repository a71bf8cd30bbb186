"""
Módulo para carregar e normalizar as linhas de venda recebidas da API.
Aceita tanto o formato já tratado (employeeCode, storeCode, ...) quanto o
formato bruto da API (CDFUN, CDFIL, DATA, CDGRUPO, TOTAL_VLR_VE, ...).
"""

import logging
import os
from datetime import date
from typing import Dict, Iterable, List, Optional, Union

import pandas as pd

from premiacao.core.agregador import COLUNAS_VENDAS
from premiacao.models import SalesRecord
from premiacao.utils.logging import ValidationLogger
from premiacao.utils.normalization import normalizar_codigo, para_data, to_float

logger = logging.getLogger(__name__)

# Nome de origem (minúsculo) → coluna padrão
MAPA_COLUNAS = {
    "employeecode": "matricula",
    "cdfun": "matricula",
    "matricula": "matricula",
    "storecode": "loja",
    "cdfil": "loja",
    "loja": "loja",
    "date": "data",
    "data": "data",
    "productgroupcode": "grupo",
    "cdgrupo": "grupo",
    "grupo": "grupo",
    "totalvalue": "valor",
    "total_vlr_ve": "valor",
    "valor": "valor",
    "total_vlr_dv": "devolucao",
    "totalquantity": "quantidade",
    "total_qtd_ve": "quantidade",
    "quantidade": "quantidade",
}

Linhas = Union[pd.DataFrame, Iterable[Dict]]


class DataLoader:
    """
    Classe para normalizar as vendas de entrada em um DataFrame padrão.
    """

    def __init__(self, validation_logger: Optional[ValidationLogger] = None):
        """
        Inicializa o DataLoader.

        Args:
            validation_logger: Instância opcional de ValidationLogger para registrar avisos
        """
        self.validation_logger = validation_logger

    def _aviso(self, mensagem: str, contexto: Optional[Dict] = None):
        logger.warning(mensagem)
        if self.validation_logger is not None:
            self.validation_logger.aviso(mensagem, contexto)

    def load_file(self, path: str) -> pd.DataFrame:
        """Lê vendas de um .xlsx/.xls/.csv e normaliza."""
        ext = os.path.splitext(path)[1].lower()
        if ext == ".csv":
            df = pd.read_csv(path)
        else:
            df = pd.read_excel(path)
        return self.normalizar_vendas(df)

    def normalizar_vendas(self, linhas: Linhas) -> pd.DataFrame:
        """
        Converte linhas de venda no DataFrame padrão (matricula, loja, grupo, valor, quantidade, data).

        - Valor líquido = venda − devolução (quando há coluna de devolução)
        - Linhas com valor líquido ≤ 0 são descartadas
        - Linhas com grupo, valor ou data ilegíveis são descartadas com AVISO
        """
        df = linhas.copy() if isinstance(linhas, pd.DataFrame) else pd.DataFrame(list(linhas))
        if df.empty:
            return pd.DataFrame(columns=COLUNAS_VENDAS)

        renomear = {}
        for col in df.columns:
            padrao = MAPA_COLUNAS.get(str(col).strip().lower())
            if padrao and padrao not in renomear.values():
                renomear[col] = padrao
        df = df.rename(columns=renomear)

        faltando = [c for c in ("grupo", "valor", "data") if c not in df.columns]
        if faltando:
            self._aviso(f"Vendas sem colunas obrigatórias: {faltando}", {"colunas": list(df.columns)})
            return pd.DataFrame(columns=COLUNAS_VENDAS)

        registros: List[Dict] = []
        descartadas_valor = 0
        for idx, row in df.iterrows():
            try:
                registro = self._normalizar_linha(row)
            except (TypeError, ValueError) as e:
                self._aviso(f"Linha de venda inválida ignorada: {e}", {"linha": str(idx)})
                continue
            if registro["valor"] <= 0:
                descartadas_valor += 1
                continue
            registros.append(registro)

        if descartadas_valor:
            logger.debug("%d linha(s) com valor líquido não positivo descartada(s)", descartadas_valor)

        return pd.DataFrame(registros, columns=COLUNAS_VENDAS)

    def _normalizar_linha(self, row: pd.Series) -> Dict:
        grupo_bruto = to_float(row.get("grupo"), default=float("nan"))
        if pd.isna(grupo_bruto):
            raise ValueError(f"grupo de produto ilegível ({row.get('grupo')!r})")

        valor = to_float(row.get("valor"), default=float("nan"))
        if pd.isna(valor):
            raise ValueError(f"valor ilegível ({row.get('valor')!r})")
        valor -= to_float(row.get("devolucao"))

        data_bruta = row.get("data")
        if data_bruta is None or (not isinstance(data_bruta, str) and pd.isna(data_bruta)):
            raise ValueError("data ausente")

        return {
            "matricula": normalizar_codigo(row.get("matricula")),
            "loja": normalizar_codigo(row.get("loja")),
            "grupo": int(grupo_bruto),
            "valor": valor,
            "quantidade": to_float(row.get("quantidade")),
            "data": para_data(data_bruta),
        }

    def para_registros(self, vendas: pd.DataFrame) -> List[SalesRecord]:
        """DataFrame padrão → lista de SalesRecord."""
        return [
            SalesRecord(
                matricula=row.matricula,
                loja=row.loja,
                grupo=int(row.grupo),
                valor=float(row.valor),
                quantidade=float(row.quantidade),
                data=row.data,
            )
            for row in vendas.itertuples(index=False)
        ]


def tem_vendas_hoje(vendas: pd.DataFrame, hoje) -> bool:
    """Indica se há alguma venda com data igual a ``hoje``."""
    if vendas is None or vendas.empty:
        return False
    alvo: date = para_data(hoje)
    return bool(vendas["data"].map(para_data).eq(alvo).any())
