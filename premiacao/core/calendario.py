"""
Calendário de dias úteis do período de premiação.

Um dia é útil para o funcionário quando não é folga e, nas lojas da região
"centro" (fechadas aos domingos), não é domingo. "Hoje" e a lista de folgas
são sempre parâmetros explícitos.
"""

import logging
from datetime import date, timedelta
from typing import Iterable, Optional, Set

import pandas as pd

from premiacao.exceptions import InvalidPeriodError
from premiacao.models import DiasUteis, Periodo
from premiacao.utils.logging import ValidationLogger
from premiacao.utils.normalization import normalize_text, para_data

logger = logging.getLogger(__name__)

DOMINGO = 6
DIA_CORTE_PERIODO = 20


def _normalizar_folgas(folgas: Optional[Iterable], validation_logger: Optional[ValidationLogger] = None) -> Set[date]:
    """Datas de folga; entradas que não são datas ficam de fora com AVISO."""
    datas = set()
    for folga in folgas or ():
        try:
            data = para_data(folga)
        except (TypeError, ValueError):
            data = None
        if data is None or pd.isna(data):
            mensagem = f"Folga com data inválida ignorada: {folga!r}"
            logger.warning(mensagem)
            if validation_logger is not None:
                validation_logger.aviso(mensagem, {"folga": folga})
            continue
        datas.add(data)
    return datas


def calcular_dias_uteis(
    inicio,
    fim,
    regiao: str,
    folgas: Optional[Iterable] = None,
    tem_vendas_hoje: bool = False,
    hoje=None,
    regioes_sem_domingo: Iterable[str] = ("centro",),
    validation_logger: Optional[ValidationLogger] = None,
) -> DiasUteis:
    """
    Calcula dias úteis totais, passados e restantes de um período.

    Args:
        inicio: Primeiro dia do período (date, datetime ou "YYYY-MM-DD")
        fim: Último dia do período (inclusive)
        regiao: Região da loja; regiões em ``regioes_sem_domingo`` não contam domingos
        folgas: Datas de folga/ausência do funcionário
        tem_vendas_hoje: Se já houve venda hoje, o dia de hoje conta como passado
        hoje: Data de referência (obrigatória para manter o cálculo determinístico;
              se None, usa a data do sistema)
        regioes_sem_domingo: Regiões que fecham aos domingos
        validation_logger: Recebe um AVISO para cada folga que não é uma data

    Returns:
        DiasUteis com ``passados + restantes == dias_uteis_total``

    Raises:
        InvalidPeriodError: se ``fim`` for anterior a ``inicio``
    """
    inicio = para_data(inicio)
    fim = para_data(fim)
    if fim < inicio:
        raise InvalidPeriodError(inicio, fim)

    hoje = para_data(hoje) if hoje is not None else date.today()
    fecha_domingo = normalize_text(regiao) in {normalize_text(r) for r in regioes_sem_domingo}
    dias_folga = _normalizar_folgas(folgas, validation_logger)

    dias_total = 0
    passados = 0
    restantes = 0

    dia = inicio
    while dia <= fim:
        dias_total += 1
        eh_util = not (fecha_domingo and dia.weekday() == DOMINGO)
        if eh_util and dia not in dias_folga:
            if dia < hoje or (dia == hoje and tem_vendas_hoje):
                passados += 1
            else:
                restantes += 1
        dia += timedelta(days=1)

    uteis = passados + restantes
    percentual_tempo = passados / uteis * 100 if uteis > 0 else 0.0

    return DiasUteis(
        dias_total=dias_total,
        dias_uteis_total=uteis,
        dias_uteis_passados=passados,
        dias_uteis_restantes=restantes,
        percentual_tempo=percentual_tempo,
    )


def periodo_atual(hoje=None) -> Periodo:
    """
    Período comercial que contém ``hoje``: do dia 21 de um mês ao dia 20 do seguinte.

    Exemplos:
        >>> periodo_atual(date(2025, 3, 25))
        Periodo(inicio=datetime.date(2025, 3, 21), fim=datetime.date(2025, 4, 20), id=None)
        >>> periodo_atual(date(2025, 1, 10))
        Periodo(inicio=datetime.date(2024, 12, 21), fim=datetime.date(2025, 1, 20), id=None)
    """
    hoje = para_data(hoje) if hoje is not None else date.today()
    ano, mes = hoje.year, hoje.month

    if hoje.day > DIA_CORTE_PERIODO:
        ano_inicio, mes_inicio = ano, mes
    else:
        ano_inicio, mes_inicio = (ano - 1, 12) if mes == 1 else (ano, mes - 1)

    ano_fim, mes_fim = (ano_inicio + 1, 1) if mes_inicio == 12 else (ano_inicio, mes_inicio + 1)

    return Periodo(
        inicio=date(ano_inicio, mes_inicio, DIA_CORTE_PERIODO + 1),
        fim=date(ano_fim, mes_fim, DIA_CORTE_PERIODO),
    )
