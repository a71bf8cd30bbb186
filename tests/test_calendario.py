"""
Testes do calendário de dias úteis e do período comercial (21 → 20).
"""

import os
import sys
from datetime import date

# Adicionar o diretório raiz ao path para importar os módulos
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from premiacao.core.calendario import calcular_dias_uteis, periodo_atual
from premiacao.exceptions import InvalidPeriodError
from premiacao.utils.logging import ValidationLogger

# Março/2025: dia 1 é sábado; domingos em 2, 9, 16, 23 e 30.
INICIO = date(2025, 3, 1)
FIM = date(2025, 3, 31)
HOJE = date(2025, 3, 11)


def _verificar_invariante(dias):
    assert dias.dias_uteis_restantes >= 0, f"Restantes negativos: {dias}"
    assert dias.dias_uteis_passados + dias.dias_uteis_restantes == dias.dias_uteis_total, (
        f"passados + restantes deve ser igual ao total: {dias}"
    )


def test_regiao_sem_restricao():
    """Fora do centro todos os dias contam."""
    print("\n=== Testando região sem restrição de domingo ===")

    dias = calcular_dias_uteis(INICIO, FIM, "outros", hoje=HOJE)
    _verificar_invariante(dias)
    assert dias.dias_total == 31, f"Esperado 31 dias, obtido {dias.dias_total}"
    assert dias.dias_uteis_total == 31, f"Esperado 31 úteis, obtido {dias.dias_uteis_total}"
    assert dias.dias_uteis_passados == 10, f"Esperado 10 passados, obtido {dias.dias_uteis_passados}"
    assert dias.dias_uteis_restantes == 21, f"Esperado 21 restantes, obtido {dias.dias_uteis_restantes}"
    assert abs(dias.percentual_tempo - 10 / 31 * 100) < 1e-9
    print("[OK] Teste: 31 dias úteis, 10 passados")


def test_centro_exclui_domingos():
    """Na região centro os domingos não são dias úteis."""
    print("\n=== Testando domingos no centro ===")

    dias = calcular_dias_uteis(INICIO, FIM, "centro", hoje=HOJE)
    _verificar_invariante(dias)
    assert dias.dias_uteis_total == 26, f"Esperado 26 úteis, obtido {dias.dias_uteis_total}"
    assert dias.dias_uteis_passados == 8, f"Esperado 8 passados, obtido {dias.dias_uteis_passados}"
    assert dias.dias_uteis_restantes == 18, f"Esperado 18 restantes, obtido {dias.dias_uteis_restantes}"
    print("[OK] Teste 1: 5 domingos excluídos")

    dias_normalizado = calcular_dias_uteis(INICIO, FIM, "  CENTRO ", hoje=HOJE)
    assert dias_normalizado == dias, "Região deve ser comparada sem diferenciar caixa/espaços"
    print("[OK] Teste 2: Região normalizada")


def test_folgas():
    """Folgas saem do total; fora do período e duplicadas são ignoradas."""
    print("\n=== Testando folgas ===")

    folgas = ["2025-03-05", date(2025, 3, 20), "2025-04-10", "2025-03-05", "2025-03-09"]
    dias = calcular_dias_uteis(INICIO, FIM, "centro", folgas=folgas, hoje=HOJE)
    _verificar_invariante(dias)
    assert dias.dias_uteis_total == 24, f"Esperado 24 úteis, obtido {dias.dias_uteis_total}"
    assert dias.dias_uteis_passados == 7, f"Esperado 7 passados, obtido {dias.dias_uteis_passados}"
    assert dias.dias_uteis_restantes == 17, f"Esperado 17 restantes, obtido {dias.dias_uteis_restantes}"
    print("[OK] Teste: folgas aplicadas uma única vez")


def test_folga_invalida():
    """Folga que não é data fica de fora e gera AVISO."""
    print("\n=== Testando folga com data inválida ===")

    logger = ValidationLogger()
    dias = calcular_dias_uteis(
        INICIO, FIM, "centro", folgas=["2025-03-05", "não é data", None], hoje=HOJE, validation_logger=logger
    )
    _verificar_invariante(dias)
    assert dias.dias_uteis_total == 25, f"Só a folga válida sai do total, obtido {dias.dias_uteis_total}"
    avisos = logger.avisos()
    assert len(avisos) == 2, f"Um AVISO por folga inválida: {logger.get_logs()}"
    assert all("Folga com data inválida" in m for m in avisos)
    print("[OK] Teste 1: folgas inválidas registradas")

    sem_logger = calcular_dias_uteis(INICIO, FIM, "centro", folgas=["não é data"], hoje=HOJE)
    assert sem_logger.dias_uteis_total == 26
    print("[OK] Teste 2: sem ValidationLogger o cálculo segue")


def test_vendas_hoje():
    """Com venda hoje o dia de hoje conta como passado."""
    print("\n=== Testando venda no dia de hoje ===")

    dias = calcular_dias_uteis(INICIO, FIM, "outros", tem_vendas_hoje=True, hoje=HOJE)
    _verificar_invariante(dias)
    assert dias.dias_uteis_passados == 11, f"Esperado 11 passados, obtido {dias.dias_uteis_passados}"
    assert dias.dias_uteis_restantes == 20
    print("[OK] Teste: hoje contado como passado")


def test_limites_do_periodo():
    """Hoje antes, depois do período e período sem dias úteis."""
    print("\n=== Testando limites ===")

    antes = calcular_dias_uteis(INICIO, FIM, "outros", hoje=date(2025, 2, 1))
    _verificar_invariante(antes)
    assert antes.dias_uteis_passados == 0 and antes.percentual_tempo == 0.0
    print("[OK] Teste 1: Período ainda não começou")

    depois = calcular_dias_uteis(INICIO, FIM, "outros", hoje=date(2025, 5, 1))
    _verificar_invariante(depois)
    assert depois.dias_uteis_restantes == 0 and depois.percentual_tempo == 100.0
    print("[OK] Teste 2: Período encerrado")

    um_dia = calcular_dias_uteis("2025-03-02", "2025-03-02", "centro", hoje=HOJE)
    _verificar_invariante(um_dia)
    assert um_dia.dias_total == 1 and um_dia.dias_uteis_total == 0
    assert um_dia.percentual_tempo == 0.0, "Sem dias úteis o percentual é zero"
    print("[OK] Teste 3: Período só com domingo no centro")


def test_periodo_invalido():
    """Fim antes do início é erro fatal."""
    print("\n=== Testando período inválido ===")

    try:
        calcular_dias_uteis(FIM, INICIO, "outros", hoje=HOJE)
    except InvalidPeriodError as e:
        assert "Período inválido" in str(e), f"Mensagem inesperada: {e}"
        print("[OK] Teste: InvalidPeriodError levantado")
        return
    raise AssertionError("InvalidPeriodError não foi levantado")


def test_periodo_atual():
    """Período comercial vai do dia 21 ao dia 20 do mês seguinte."""
    print("\n=== Testando periodo_atual() ===")

    casos = [
        (date(2025, 3, 25), date(2025, 3, 21), date(2025, 4, 20)),
        (date(2025, 3, 20), date(2025, 2, 21), date(2025, 3, 20)),
        (date(2025, 1, 10), date(2024, 12, 21), date(2025, 1, 20)),
        (date(2025, 12, 21), date(2025, 12, 21), date(2026, 1, 20)),
    ]
    for hoje, inicio, fim in casos:
        periodo = periodo_atual(hoje)
        assert (periodo.inicio, periodo.fim) == (inicio, fim), f"{hoje}: obtido {periodo}"
    print("[OK] Teste: virada de mês e de ano")


def main():
    """Executa todos os testes."""
    print("=" * 60)
    print("TESTES DO CALENDÁRIO DE DIAS ÚTEIS")
    print("=" * 60)

    try:
        test_regiao_sem_restricao()
        test_centro_exclui_domingos()
        test_folgas()
        test_folga_invalida()
        test_vendas_hoje()
        test_limites_do_periodo()
        test_periodo_invalido()
        test_periodo_atual()

        print("=" * 60)
        print("[SUCESSO] TODOS OS TESTES PASSARAM COM SUCESSO!")
        print("=" * 60)
        return 0
    except AssertionError as e:
        print(f"\n[FALHA] FALHA NO TESTE: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
