"""
Testes das calculadoras de premiação por cargo.
"""

import os
import sys
from datetime import date

# Adicionar o diretório raiz ao path para importar os módulos
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from premiacao.calculadoras import (
    REGISTRO,
    CalculadoraFarmaceutico,
    CalculadoraGerencial,
    EntradaCalculo,
    obter_calculadora,
)
from premiacao.config.regras import regras_padrao
from premiacao.core.agregador import AgregadorCategorias
from premiacao.core.projecao import calcular_projecoes
from premiacao.exceptions import UnsupportedRoleError
from premiacao.models import Arvore, Cargo, DiasUteis, SalesRecord, TempoEmpresa

DIA = date(2025, 3, 10)
METADE = DiasUteis(dias_total=31, dias_uteis_total=20, dias_uteis_passados=10, dias_uteis_restantes=10, percentual_tempo=50.0)


def _totais(vendas, arvore):
    registros = [SalesRecord("1", "10", grupo, valor, 1, DIA) for grupo, valor in vendas]
    return AgregadorCategorias(regras_padrao()).agregar(registros, arvore)


def _perto(obtido, esperado, descricao):
    assert abs(obtido - esperado) < 1e-6, f"{descricao}: esperado {esperado}, obtido {obtido}"


def test_registro():
    """Todo cargo tem calculadora; cargo desconhecido é erro."""
    print("\n=== Testando registro de calculadoras ===")

    regras = regras_padrao()
    assert set(REGISTRO) == set(Cargo), f"Cargos sem calculadora: {set(Cargo) - set(REGISTRO)}"
    assert isinstance(obter_calculadora("Farmacêutico", regras), CalculadoraFarmaceutico)
    assert isinstance(obter_calculadora(Cargo.LIDER, regras), CalculadoraGerencial)
    print("[OK] Teste 1: seleção por cargo")

    try:
        obter_calculadora("inexistente", regras)
    except UnsupportedRoleError as e:
        assert "inexistente" in str(e)
        print("[OK] Teste 2: UnsupportedRoleError para cargo desconhecido")
        return
    raise AssertionError("UnsupportedRoleError não foi levantado")


def _entrada_gerente(balanco=True, projetar=False):
    totais = _totais([(1, 200000), (20, 96), (46, 100), (2, 149804)], Arvore.LOJA)
    metas = {"geral": 350000, "r_mais": 100, "perfumaria_r_mais": 100, "saude": 100}
    return EntradaCalculo(
        cargo=Cargo.GERENTE,
        totais_loja=totais,
        metas_loja=metas,
        projecoes_loja=calcular_projecoes(totais, metas, METADE) if projetar else {},
        balanco=balanco,
    )


def test_gerencial():
    """Base pela faixa de faturamento × soma dos multiplicadores."""
    print("\n=== Testando premiação gerencial ===")

    calculadora = CalculadoraGerencial(regras_padrao())
    resultado = calculadora.calcular(_entrada_gerente())

    assert resultado.base_calculo == 1400, f"Faturamento 350000 → base 1400, obtido {resultado.base_calculo}"
    assert resultado.multiplicadores["geral"] == 0.6
    assert resultado.multiplicadores["r_mais"] == 0.1, "96% do indicador → 0.1"
    assert resultado.multiplicadores["perfumaria_r_mais"] == 0.2
    assert resultado.multiplicadores["saude"] == 0.0
    assert resultado.multiplicadores["conveniencia_r_mais"] == 0.0, "Sem meta → 0"
    assert resultado.multiplicadores["balanco"] == 0.1
    _perto(resultado.premiacao_atual, 1400.0, "premiação atual")
    _perto(resultado.premiacoes["geral"], 840.0, "componente geral")
    _perto(resultado.premiacao_maxima, 2100.0, "premiação máxima (1.5 × 1400)")
    print("[OK] Teste 1: cenário atual e máximo")

    sem_balanco = calculadora.calcular(_entrada_gerente(balanco=False))
    _perto(sem_balanco.premiacao_atual, 1260.0, "sem balanço")
    print("[OK] Teste 2: balanço")

    projetado = calculadora.calcular(_entrada_gerente(projetar=True))
    assert projetado.multiplicadores_projetados["r_mais"] == 0.2, "192% projetado → 0.2"
    _perto(projetado.premiacao_projetada, 1400.0 * 1.1, "premiação projetada")
    assert projetado.detalhes["base_calculo_projetada"] == 2100, "Faturamento projetado 700000 → 2100"
    print("[OK] Teste 3: cenário projetado")


def test_gerencial_faixa_geral_e_teto():
    """97% da meta geral → 0.4; teto da soma dos multiplicadores."""
    print("\n=== Testando faixa geral e teto ===")

    totais = _totais([(1, 970000)], Arvore.LOJA)
    entrada = EntradaCalculo(cargo=Cargo.LIDER, totais_loja=totais, metas_loja={"geral": 1000000})
    resultado = CalculadoraGerencial(regras_padrao()).calcular(entrada)
    assert resultado.multiplicadores["geral"] == 0.4, f"Obtido {resultado.multiplicadores['geral']}"
    assert resultado.base_calculo == 2500
    _perto(resultado.premiacao_atual, 1000.0, "2500 × 0.4")
    print("[OK] Teste 1: 97% → 0.4")

    regras = regras_padrao().com(limite_multiplicador=1.0)
    resultado = CalculadoraGerencial(regras).calcular(_entrada_gerente())
    _perto(resultado.premiacao_maxima, 1400.0, "máxima limitada ao teto 1.0")
    print("[OK] Teste 2: teto configurável")


def test_farmaceutico():
    """Genérico + similar somando 10000 a 2% → 200."""
    print("\n=== Testando comissão do farmacêutico ===")

    totais = _totais([(2, 6000), (47, 4000)], Arvore.INDIVIDUAL)
    entrada = EntradaCalculo(cargo=Cargo.FARMACEUTICO, totais_individuais=totais)
    resultado = obter_calculadora(Cargo.FARMACEUTICO, regras_padrao()).calcular(entrada)

    _perto(resultado.premiacao_atual, 200.0, "comissão")
    assert [i.categoria for i in resultado.itens] == ["generico", "similar"], (
        f"Só categorias com venda no extrato: {resultado.itens}"
    )
    assert resultado.premiacoes["dermocosmetico"] == 0.0, "Categorias sem venda entram zeradas no total"
    assert resultado.bonus_metas == []
    print("[OK] Teste 1: comissão sem metas")

    metas = {"geral": 10000, "generico_similar": 10000}
    entrada = EntradaCalculo(cargo=Cargo.FARMACEUTICO, totais_individuais=totais, metas_individuais=metas)
    resultado = obter_calculadora(Cargo.FARMACEUTICO, regras_padrao()).calcular(entrada)
    descricoes = [b.descricao for b in resultado.bonus_metas]
    assert descricoes == ["Meta Geral 100%", "Meta Gen/Sim 100%"], f"Obtido {descricoes}"
    _perto(resultado.premiacao_atual, 300.0, "comissão + bônus")
    print("[OK] Teste 2: bônus por meta")


def test_auxiliar_e_consultora():
    """Taxas próprias do auxiliar e da consultora."""
    print("\n=== Testando auxiliar e consultora ===")

    totais = _totais([(2, 6000), (47, 4000)], Arvore.INDIVIDUAL)
    resultado = obter_calculadora("auxiliar", regras_padrao()).calcular(
        EntradaCalculo(cargo=Cargo.AUXILIAR, totais_individuais=totais)
    )
    _perto(resultado.premiacao_atual, 480.0, "4000 × 4.5% + 6000 × 5%")
    print("[OK] Teste 1: auxiliar")

    totais = _totais([(46, 1000), (31, 500), (22, 200)], Arvore.INDIVIDUAL)
    entrada = EntradaCalculo(
        cargo=Cargo.CONSULTORA,
        totais_individuais=totais,
        metas_individuais={"perfumaria_alta": 1000, "goodlife": 1000},
    )
    resultado = obter_calculadora("consultora", regras_padrao()).calcular(entrada)
    assert set(resultado.premiacoes) == {"perfumaria_alta", "dermocosmetico", "goodlife"}
    assert [b.descricao for b in resultado.bonus_metas] == ["Meta Perfumaria 100%"]
    _perto(resultado.premiacao_atual, 60.0, "30 + 10 + 10 + bônus 10")
    _perto(resultado.premiacao_maxima, 30.0 + 10.0 + 50.0 + 10.0 + 10.0, "máxima com metas batidas")
    print("[OK] Teste 2: consultora")


def test_apoio():
    """Valores fixos pelo tempo de empresa e atingimento da loja."""
    print("\n=== Testando apoio ===")

    totais = _totais([(1, 900), (20, 100)], Arvore.LOJA)
    metas = {"geral": 1000, "r_mais": 100, "saude": 100}
    calculadora = obter_calculadora("fiscal", regras_padrao())

    entrada = EntradaCalculo(
        cargo=Cargo.FISCAL, totais_loja=totais, metas_loja=metas, tempo_empresa=TempoEmpresa(2, 0), balanco=True
    )
    resultado = calculadora.calcular(entrada)
    assert resultado.base_calculo == 256
    assert resultado.premiacoes["geral"] == 153.60
    assert resultado.premiacoes["r_mais"] == 51.20
    assert resultado.premiacoes["saude"] == 0.0
    assert resultado.multiplicadores["geral"] == 0.6
    _perto(resultado.premiacao_atual, 153.60 + 51.20 + 25.60, "apoio ≥ 12 meses")
    _perto(resultado.premiacao_maxima, 384.0, "apoio máximo ≥ 12 meses")
    print("[OK] Teste 1: apoio com mais de um ano")

    entrada = EntradaCalculo(cargo=Cargo.ZELADOR, totais_loja=totais, metas_loja=metas, tempo_empresa=TempoEmpresa(0, 6))
    resultado = calculadora.calcular(entrada)
    assert resultado.base_calculo == 158
    _perto(resultado.premiacao_atual, 94.80 + 31.60, "apoio < 12 meses sem balanço")
    print("[OK] Teste 2: apoio com menos de um ano")


def test_aux_conveniencia():
    """Apoio como bônus mais comissão de conveniência."""
    print("\n=== Testando auxiliar de conveniência ===")

    entrada = EntradaCalculo(
        cargo=Cargo.AUX_CONVENIENCIA,
        totais_individuais=_totais([(36, 1000), (13, 500)], Arvore.INDIVIDUAL),
        totais_loja=_totais([(1, 1000)], Arvore.LOJA),
        metas_loja={"geral": 1000},
        tempo_empresa=TempoEmpresa(1, 0),
    )
    resultado = obter_calculadora("aux conveniencia", regras_padrao()).calcular(entrada)

    assert resultado.is_bonus is True
    assert [i.categoria for i in resultado.itens] == ["conveniencia", "brinquedo"]
    _perto(resultado.detalhes["bonus_apoio"], 153.60, "bônus do apoio")
    _perto(resultado.premiacao_atual, 153.60 + 20.0 + 10.0, "apoio + comissão")
    print("[OK] Teste: bônus + comissão")


def main():
    """Executa todos os testes."""
    print("=" * 60)
    print("TESTES DAS CALCULADORAS DE PREMIAÇÃO")
    print("=" * 60)

    try:
        test_registro()
        test_gerencial()
        test_gerencial_faixa_geral_e_teto()
        test_farmaceutico()
        test_auxiliar_e_consultora()
        test_apoio()
        test_aux_conveniencia()

        print("=" * 60)
        print("[SUCESSO] TODOS OS TESTES PASSARAM COM SUCESSO!")
        print("=" * 60)
        return 0
    except AssertionError as e:
        print(f"\n[FALHA] FALHA NO TESTE: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
