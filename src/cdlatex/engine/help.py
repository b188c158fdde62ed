"""
Help rendering for the prefix read loops.

Both renderers return plain lines; drawing them is up to the HelpDisplay
collaborator.
"""

from cdlatex.tables import ModifierEntry, SymbolEntry

COLUMN_WIDTH = 22
COLUMNS = 3


def _columns(cells: list[str], width: int = COLUMN_WIDTH, columns: int = COLUMNS) -> list[str]:
    lines = []
    for row in range(0, len(cells), columns):
        chunk = cells[row:row + columns]
        lines.append("".join(cell.ljust(width) for cell in chunk).rstrip())
    return lines


def render_symbol_help(
    symbols: tuple[SymbolEntry, ...],
    level: int,
    prefix: str,
    binding: str | None = None,
) -> list[str]:
    """
    Symbol help for one level: each key that has a macro there.

    Args:
        symbols: The symbol table
        level: 1-based level being shown
        prefix: The symbol prefix key
        binding: Chord prefix of the direct binding for this level, if any
    """
    header = f"Math symbols, level {level}: press {prefix * level}<key>"
    if binding:
        header += f" or {binding}<key>"
    lines = [header, ""]

    cells = []
    for entry in symbols:
        macro = entry.at_level(level)
        if macro:
            cells.append(f"{entry.key}  {macro}")
    lines.extend(_columns(cells))
    return lines


def render_modifier_help(modifiers: tuple[ModifierEntry, ...], prefix: str) -> list[str]:
    """Modifier help: one row per key with its math and text macros."""
    lines = [
        f"Modify with {prefix}<key>",
        "",
        f"{'key':<5}{'math':<22}{'text'}",
    ]
    for entry in modifiers:
        lines.append(f"{entry.key:<5}{entry.math or '':<22}{entry.text or ''}".rstrip())
    return lines
