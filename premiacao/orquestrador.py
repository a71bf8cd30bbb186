"""
Orquestração do cálculo de premiação de um funcionário em um período.

Fluxo: seleciona a calculadora do cargo, monta o calendário de dias úteis,
agrega as árvores de categorias pedidas pela calculadora, projeta, analisa o
ritmo, calcula a premiação e gera os insights. Cada chamada monta tudo do zero.
"""

import logging
import os
import sys
import threading
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, Iterable, Optional

from premiacao.calculadoras import EntradaCalculo, obter_calculadora
from premiacao.config.regras import RegrasPremiacao, regras_padrao
from premiacao.core.agregador import AgregadorCategorias, validar_sobreposicoes, vendas_para_dataframe
from premiacao.core.calendario import calcular_dias_uteis
from premiacao.core.projecao import calcular_projecoes
from premiacao.core.ritmo import analisar_ritmo
from premiacao.core.tempo_empresa import calcular_tempo_empresa
from premiacao.insights import GeradorInsights
from premiacao.io.data_loader import tem_vendas_hoje as _tem_vendas_hoje
from premiacao.models import (
    Arvore,
    Cargo,
    ChaveCalculo,
    Funcionario,
    Loja,
    Metas,
    Periodo,
    ResultadoCalculo,
    TempoEmpresa,
)
from premiacao.utils.logging import ValidationLogger
from premiacao.utils.normalization import normalizar_codigo, para_data, to_float

logger = logging.getLogger(__name__)

VARIAVEL_DEBUG = "PREMIACAO_DEBUG"


def configurar_logging(debug: Optional[bool] = None) -> logging.Logger:
    """
    Configura o logger "premiacao" para depuração no terminal.

    Com ``PREMIACAO_DEBUG=1`` (ou ``debug=True``) as mensagens DEBUG de todos
    os módulos vão para stdout.
    """
    if debug is None:
        debug = str(os.getenv(VARIAVEL_DEBUG, "")).lower() in ("1", "true", "yes")

    raiz = logging.getLogger("premiacao")
    if debug:
        if not raiz.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s: %(message)s"))
            raiz.addHandler(handler)
        raiz.propagate = False
        raiz.setLevel(logging.DEBUG)
    return raiz


def _normalizar_metas(metas: Optional[Dict[str, Any]]) -> Metas:
    return {str(k).strip(): to_float(v) for k, v in (metas or {}).items()}


class CalculadoraPremiacao:
    """
    Calcula a premiação completa de um funcionário.

    Args:
        regras: Tabelas de regras (default: regras padrão)
    """

    def __init__(self, regras: Optional[RegrasPremiacao] = None):
        self.regras = regras or regras_padrao()
        self._logger = configurar_logging()

    def calcular(
        self,
        funcionario: Funcionario,
        loja: Loja,
        periodo: Periodo,
        vendas,
        metas_individuais: Optional[Dict[str, Any]] = None,
        metas_loja: Optional[Dict[str, Any]] = None,
        folgas: Optional[Iterable] = None,
        balanco: bool = False,
        hoje=None,
        tem_vendas_hoje: Optional[bool] = None,
    ) -> ResultadoCalculo:
        """
        Executa o cálculo de ponta a ponta.

        Args:
            funcionario: Cargo, matrícula e data de contratação
            loja: Código e região da loja
            periodo: Início e fim do período (inclusive)
            vendas: Lista de SalesRecord ou DataFrame normalizado (ver DataLoader)
            metas_individuais: Metas do funcionário por categoria
            metas_loja: Metas da loja por categoria
            folgas: Datas de folga do funcionário
            balanco: Se a loja bateu o balanço no período
            hoje: Data de referência (default: data do sistema)
            tem_vendas_hoje: Se None, é inferido das vendas consideradas

        Returns:
            ResultadoCalculo com totais, calendário, projeções, ritmo,
            premiação, insights e avisos

        Raises:
            UnsupportedRoleError: cargo sem calculadora
            InvalidPeriodError: período com fim anterior ao início
        """
        calculadora = obter_calculadora(funcionario.cargo, self.regras)
        validation_logger = ValidationLogger()
        agregador = AgregadorCategorias(self.regras, validation_logger)
        metas_ind = _normalizar_metas(metas_individuais)
        metas_lj = _normalizar_metas(metas_loja)

        df_loja = agregador.filtrar_loja(vendas_para_dataframe(vendas), loja.codigo)
        df_individual = None
        if Arvore.INDIVIDUAL in calculadora.arvores:
            df_individual = agregador.filtrar_funcionario(df_loja, funcionario.matricula)

        if tem_vendas_hoje is None:
            referencia = df_individual if df_individual is not None else df_loja
            tem_vendas_hoje = _tem_vendas_hoje(referencia, hoje if hoje is not None else date.today())

        dias = calcular_dias_uteis(
            periodo.inicio,
            periodo.fim,
            loja.regiao,
            folgas=folgas,
            tem_vendas_hoje=tem_vendas_hoje,
            hoje=hoje,
            regioes_sem_domingo=self.regras.regioes_sem_domingo,
            validation_logger=validation_logger,
        )
        self._logger.debug(
            "Calendário %s a %s: %d útil(eis), %d passado(s), %d restante(s)",
            periodo.inicio, periodo.fim, dias.dias_uteis_total, dias.dias_uteis_passados, dias.dias_uteis_restantes,
        )

        totais = {}
        projecoes = {}
        ritmo = {}
        metas_por_arvore = {Arvore.INDIVIDUAL: metas_ind, Arvore.LOJA: metas_lj}
        dados_por_arvore = {Arvore.INDIVIDUAL: df_individual, Arvore.LOJA: df_loja}
        for arvore in (Arvore.INDIVIDUAL, Arvore.LOJA):
            if arvore not in calculadora.arvores:
                continue
            validar_sobreposicoes(agregador.mapa(arvore), self.regras.sobreposicoes_conhecidas, validation_logger)
            totais[arvore] = agregador.agregar(dados_por_arvore[arvore], arvore)
            metas = metas_por_arvore[arvore]
            projecoes[arvore] = calcular_projecoes(totais[arvore], metas, dias)
            ritmo[arvore] = analisar_ritmo(totais[arvore], metas, dias)

        tempo = self._tempo_empresa(funcionario, hoje, calculadora.usa_tempo_empresa, validation_logger)

        entrada = EntradaCalculo(
            cargo=Cargo.from_value(funcionario.cargo),
            totais_individuais=totais.get(Arvore.INDIVIDUAL, {}),
            totais_loja=totais.get(Arvore.LOJA, {}),
            metas_individuais=metas_ind,
            metas_loja=metas_lj,
            projecoes_individuais=projecoes.get(Arvore.INDIVIDUAL, {}),
            projecoes_loja=projecoes.get(Arvore.LOJA, {}),
            tempo_empresa=tempo,
            balanco=balanco,
        )
        premiacao = calculadora.calcular(entrada)

        arvore_insights = Arvore.INDIVIDUAL if Arvore.INDIVIDUAL in calculadora.arvores else Arvore.LOJA
        gerador = GeradorInsights(enquadramento_loja=arvore_insights == Arvore.LOJA)
        insights = gerador.gerar(
            ritmo[arvore_insights],
            projecoes[arvore_insights],
            dias,
            metas_por_arvore[arvore_insights],
        )

        self._logger.debug(
            "Premiação %s (%s): atual=%.2f projetada=%.2f maxima=%.2f",
            premiacao.cargo, funcionario.matricula, premiacao.premiacao_atual,
            premiacao.premiacao_projetada, premiacao.premiacao_maxima,
        )

        return ResultadoCalculo(
            funcionario=funcionario,
            loja=loja,
            periodo=periodo,
            dias_uteis=dias,
            tempo_empresa=tempo,
            premiacao=premiacao,
            totais_individuais=entrada.totais_individuais,
            totais_loja=entrada.totais_loja,
            metas_individuais=metas_ind,
            metas_loja=metas_lj,
            projecoes_individuais=entrada.projecoes_individuais,
            projecoes_loja=entrada.projecoes_loja,
            ritmo_individual=ritmo.get(Arvore.INDIVIDUAL, {}),
            ritmo_loja=ritmo.get(Arvore.LOJA, {}),
            insights=insights,
            avisos=validation_logger.get_logs(),
        )

    def _tempo_empresa(self, funcionario: Funcionario, hoje, obrigatorio: bool, validation_logger) -> TempoEmpresa:
        if funcionario.data_contratacao is None:
            if obrigatorio:
                validation_logger.aviso(
                    "Funcionário sem data de contratação: tempo de empresa considerado zero",
                    {"matricula": funcionario.matricula},
                )
            return TempoEmpresa(0, 0)
        agora = para_data(hoje) if hoje is not None else date.today()
        return calcular_tempo_empresa(funcionario.data_contratacao, agora)


def calcular_premiacao(
    funcionario: Funcionario,
    loja: Loja,
    periodo: Periodo,
    vendas,
    metas_individuais: Optional[Dict[str, Any]] = None,
    metas_loja: Optional[Dict[str, Any]] = None,
    regras: Optional[RegrasPremiacao] = None,
    **kwargs,
) -> ResultadoCalculo:
    """Atalho para ``CalculadoraPremiacao(regras).calcular(...)``."""
    return CalculadoraPremiacao(regras).calcular(
        funcionario, loja, periodo, vendas, metas_individuais, metas_loja, **kwargs
    )


def chave_calculo(matricula, periodo: Periodo, loja) -> ChaveCalculo:
    """Chave (matrícula, período, loja) de um cálculo."""
    id_periodo = periodo.id if periodo.id is not None else (periodo.inicio, periodo.fim)
    return (normalizar_codigo(matricula) or None, id_periodo, normalizar_codigo(loja))


@dataclass(frozen=True)
class Ticket:
    chave: ChaveCalculo
    numero: int


class ControleCalculos:
    """
    Descarta resultados obsoletos de cálculos concorrentes.

    Cada ``iniciar`` emite um ticket novo para a chave e a torna a seleção
    atual. ``aceitar`` só devolve o resultado se o ticket ainda for o mais
    recente da chave e a chave ainda estiver selecionada; caso contrário
    devolve None. Só a chave selecionada guarda o último ticket; ao trocar a
    seleção, os tickets da chave anterior deixam de valer.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._contador = 0
        self._ultimos: Dict[ChaveCalculo, int] = {}
        self._selecionada: Optional[ChaveCalculo] = None

    def iniciar(self, chave: ChaveCalculo) -> Ticket:
        with self._lock:
            self._contador += 1
            self._trocar_selecao(chave)
            self._ultimos[chave] = self._contador
            return Ticket(chave, self._contador)

    def selecionar(self, chave: ChaveCalculo):
        with self._lock:
            self._trocar_selecao(chave)

    def _trocar_selecao(self, chave: ChaveCalculo):
        # chamado com _lock adquirido
        if self._selecionada is not None and self._selecionada != chave:
            self._ultimos.pop(self._selecionada, None)
        self._selecionada = chave

    @property
    def selecionada(self) -> Optional[ChaveCalculo]:
        with self._lock:
            return self._selecionada

    def vigente(self, ticket: Ticket) -> bool:
        with self._lock:
            return self._ultimos.get(ticket.chave) == ticket.numero and self._selecionada == ticket.chave

    def aceitar(self, ticket: Ticket, resultado):
        if self.vigente(ticket):
            return resultado
        logger.debug("Resultado obsoleto descartado: %s #%d", ticket.chave, ticket.numero)
        return None

    def executar(self, chave: ChaveCalculo, funcao: Callable, *args, **kwargs):
        """Inicia, executa ``funcao`` e devolve o resultado apenas se ainda vigente."""
        ticket = self.iniciar(chave)
        return self.aceitar(ticket, funcao(*args, **kwargs))
