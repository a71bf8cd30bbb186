"""
Estilização das planilhas de premiação exportadas.
Colore colunas por grupo (realizado, meta, atingimento, projeção, premiação)
e destaca a classificação de ritmo de cada categoria.
"""

from typing import Iterable, Optional

from openpyxl import load_workbook
from openpyxl.styles import Font, PatternFill


def light_fill(rgb_hex: str) -> PatternFill:
    """
    Preenchimento sólido da cor informada (hex sem '#', ex: 'E3F2FD').
    """
    return PatternFill(start_color=rgb_hex, end_color=rgb_hex, fill_type="solid")


# Uma cor por grupo de colunas, na ordem de COLUMN_GROUP_PATTERNS
PALETTE = [
    "E3F2FD",  # azul claríssimo
    "E8F5E9",  # verde claríssimo
    "FFF8E1",  # amarelo claríssimo
    "F3E5F5",  # lilás claríssimo
    "E0F7FA",  # ciano claríssimo
    "FBE9E7",  # pêssego claríssimo
]

HEADER_FILL = "37474F"

# Grupo → trechos de cabeçalho (em maiúsculas) que o identificam; vale o primeiro grupo que casar
COLUMN_GROUP_PATTERNS = {
    "premiacao": ["PREMIACAO", "MULTIPLICADOR", "COMISSAO", "TAXA", "BONUS"],
    "projecao": ["PROJETAD", "STATUS", "RITMO"],
    "meta": ["META", "FALTA"],
    "atingimento": ["PERCENTUAL", "CLASSIFICACAO", "RAZAO"],
    "realizado": ["VALOR", "QUANTIDADE"],
}

# Cor fixa por classificação de ritmo
RITMO_FILLS = {
    "ahead": "C8E6C9",
    "on-pace": "E3F2FD",
    "caution": "FFE0B2",
    "behind": "FFCDD2",
}


def match_group(header: str) -> Optional[str]:
    """
    Grupo de colunas do cabeçalho (o primeiro cujo trecho aparece nele), ou None.

    >>> match_group("valor_projetado")
    'projecao'
    """
    h = header.upper().strip()
    for group, patterns in COLUMN_GROUP_PATTERNS.items():
        for p in patterns:
            if p in h:
                return group
    return None


def apply_group_fills_to_sheet(ws):
    """
    Pinta colunas inteiras do mesmo grupo com a mesma cor clara e destaca o
    cabeçalho. Não altera valores.

    Args:
        ws: Worksheet do openpyxl a ser estilizada
    """
    header_fill = light_fill(HEADER_FILL)
    header_font = Font(bold=True, color="FFFFFF")
    col_group = {}

    for c in range(1, ws.max_column + 1):
        cell = ws.cell(row=1, column=c)
        cell.fill = header_fill
        cell.font = header_font
        group = match_group(str(cell.value) if cell.value is not None else "")
        if group:
            col_group[c] = group

    group_keys = list(COLUMN_GROUP_PATTERNS)
    for c, g in col_group.items():
        fill = light_fill(PALETTE[group_keys.index(g) % len(PALETTE)])
        for r in range(2, ws.max_row + 1):
            ws.cell(row=r, column=c).fill = fill


def apply_ritmo_fills(ws, coluna: str = "classificacao"):
    """Colore a célula de classificação de ritmo de cada linha."""
    alvo = None
    for c in range(1, ws.max_column + 1):
        if str(ws.cell(row=1, column=c).value).strip().lower() == coluna:
            alvo = c
            break
    if alvo is None:
        return
    for r in range(2, ws.max_row + 1):
        cell = ws.cell(row=r, column=alvo)
        cor = RITMO_FILLS.get(str(cell.value))
        if cor:
            cell.fill = light_fill(cor)


def style_output_workbook(xlsx_path: str, sheets: Iterable[str] = ("CATEGORIAS", "PREMIACAO", "COMISSOES")):
    """
    Carrega o arquivo Excel gerado e aplica a coloração de grupos nas abas indicadas.

    Args:
        xlsx_path: Caminho completo para o arquivo Excel a ser estilizado
        sheets: Abas a estilizar (as ausentes são ignoradas)
    """
    wb = load_workbook(xlsx_path)

    for sheet_name in sheets:
        if sheet_name not in wb.sheetnames:
            continue
        ws = wb[sheet_name]
        apply_group_fills_to_sheet(ws)
        apply_ritmo_fills(ws)

    wb.save(xlsx_path)
