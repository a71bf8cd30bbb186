from premiacao.config.regras import (
    EscalaMultiplicador,
    FaixaFaturamento,
    FaixaTempoApoio,
    RegraBonusMeta,
    RegrasPremiacao,
    TabelaApoio,
    TabelaFaixas,
    regras_padrao,
)

__all__ = [
    "EscalaMultiplicador",
    "FaixaFaturamento",
    "FaixaTempoApoio",
    "RegraBonusMeta",
    "RegrasPremiacao",
    "TabelaApoio",
    "TabelaFaixas",
    "regras_padrao",
]
