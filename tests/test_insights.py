"""
Testes do gerador de insights.
"""

import os
import sys

# Adicionar o diretório raiz ao path para importar os módulos
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from premiacao.core.projecao import calcular_projecoes
from premiacao.core.ritmo import analisar_ritmo
from premiacao.insights import GeradorInsights, nome_categoria
from premiacao.models import DiasUteis, VendasCategoria

METADE = DiasUteis(dias_total=31, dias_uteis_total=20, dias_uteis_passados=10, dias_uteis_restantes=10, percentual_tempo=50.0)
RETA_FINAL = DiasUteis(dias_total=31, dias_uteis_total=20, dias_uteis_passados=16, dias_uteis_restantes=4, percentual_tempo=80.0)
ULTIMO_DIA = DiasUteis(dias_total=31, dias_uteis_total=20, dias_uteis_passados=19, dias_uteis_restantes=1, percentual_tempo=95.0)

TOTAIS = {
    "geral": VendasCategoria(200.0, 2),
    "similar": VendasCategoria(600.0, 6),
    "generico": VendasCategoria(450.0, 4),
    "goodlife": VendasCategoria(480.0, 5),
    "dermocosmetico": VendasCategoria(900.0, 3),
}
METAS = {"geral": 1000.0, "similar": 1000.0, "generico": 1000.0, "goodlife": 1000.0}


def _gerar(dias, enquadramento_loja=False, totais=TOTAIS, metas=METAS):
    analises = analisar_ritmo(totais, metas, dias)
    projecoes = calcular_projecoes(totais, metas, dias)
    return GeradorInsights(enquadramento_loja).gerar(analises, projecoes, dias, metas)


def test_regras_por_classificacao():
    """Uma regra por classificação de ritmo; ordem por severidade."""
    print("\n=== Testando insights por categoria ===")

    insights = _gerar(METADE)
    categorias = [i.categoria for i in insights]
    assert categorias == ["geral", "goodlife", "generico", "similar"], f"Ordem inesperada: {categorias}"
    print("[OK] Teste 1: alta, media, baixa e ordem das categorias preservada")

    atrasado, proximo, atencao, adiantado = insights
    assert atrasado.titulo == "Meta Geral abaixo do ritmo"
    assert atrasado.severidade == "alta" and atrasado.cor == "#e74c3c" and atrasado.icone == "alert-triangle"
    assert atrasado.descricao == (
        "Você está em 20,0% da meta com 50,0% do período decorrido. Faltam R$ 800,00 em 10 dias úteis."
    ), f"Descrição: {atrasado.descricao}"

    assert proximo.titulo == "GoodLife próximo da meta!", f"Obtido {proximo.titulo}"
    assert proximo.cor == "#27ae60" and proximo.icone == "fire"
    assert proximo.descricao == "Faltam apenas R$ 520,00 para atingir 100%."

    assert atencao.titulo == "Atenção em Genérico" and atencao.severidade == "media"
    assert adiantado.titulo == "Similar já em 60,0%!" and adiantado.icone == "check-circle"
    assert "sua premiação" in adiantado.descricao
    print("[OK] Teste 2: textos, cores e ícones")


def test_categorias_sem_meta():
    """Categoria sem meta não gera insight, mesmo com vendas."""
    print("\n=== Testando categorias sem meta ===")

    insights = _gerar(METADE, metas={})
    assert insights == [], f"Nenhum insight esperado: {insights}"
    assert all(i.categoria != "dermocosmetico" for i in _gerar(METADE))
    print("[OK] Teste: meta zero ignorada")


def test_reta_final():
    """Reta final: mais de 75% do tempo e até 5 dias úteis restantes."""
    print("\n=== Testando reta final ===")

    insights = _gerar(RETA_FINAL)
    assert insights[0].titulo == "Reta final do período!", f"Primeiro insight: {insights[0].titulo}"
    assert insights[0].icone == "clock" and insights[0].categoria is None
    assert "Restam apenas 4 dias úteis." in insights[0].descricao
    print("[OK] Teste 1: insight de reta final no topo")

    insights = _gerar(ULTIMO_DIA, totais={}, metas={})
    assert len(insights) == 1
    assert "Restam apenas 1 dia útil." in insights[0].descricao, f"Descrição: {insights[0].descricao}"
    print("[OK] Teste 2: singular no último dia")

    assert all(i.titulo != "Reta final do período!" for i in _gerar(METADE))
    print("[OK] Teste 3: sem reta final no meio do período")


def test_enquadramento_e_determinismo():
    """Enquadramento da loja e mesmas entradas → mesmos insights."""
    print("\n=== Testando enquadramento ===")

    loja = _gerar(METADE, enquadramento_loja=True)
    assert loja[0].descricao.startswith("A loja está em"), f"Descrição: {loja[0].descricao}"
    assert "a premiação da loja" in loja[-1].descricao
    print("[OK] Teste 1: enquadramento da loja")

    assert _gerar(METADE) == _gerar(METADE), "Insights devem ser determinísticos"
    print("[OK] Teste 2: determinismo")

    analises = analisar_ritmo(TOTAIS, METAS, METADE)
    projecoes = calcular_projecoes(TOTAIS, METAS, METADE)
    sem_metas = GeradorInsights().gerar(analises, projecoes, METADE)
    assert sem_metas == _gerar(METADE), "Sem metas explícitas usa a meta das projeções"
    print("[OK] Teste 3: metas das projeções")

    assert nome_categoria("r_mais") == "Rentáveis"
    assert nome_categoria("desconhecida") == "desconhecida"
    print("[OK] Teste 4: nomes de exibição")


def main():
    """Executa todos os testes."""
    print("=" * 60)
    print("TESTES DO GERADOR DE INSIGHTS")
    print("=" * 60)

    try:
        test_regras_por_classificacao()
        test_categorias_sem_meta()
        test_reta_final()
        test_enquadramento_e_determinismo()

        print("=" * 60)
        print("[SUCESSO] TODOS OS TESTES PASSARAM COM SUCESSO!")
        print("=" * 60)
        return 0
    except AssertionError as e:
        print(f"\n[FALHA] FALHA NO TESTE: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
