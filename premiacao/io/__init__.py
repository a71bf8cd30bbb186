"""
Entrada e saída: regras em planilha, vendas brutas e exportação do resultado.
"""

from premiacao.io.config_loader import ConfigLoader
from premiacao.io.data_loader import DataLoader, tem_vendas_hoje
from premiacao.io.output_generator import PremiacaoOutputGenerator

__all__ = ["ConfigLoader", "DataLoader", "PremiacaoOutputGenerator", "tem_vendas_hoje"]
