from __future__ import annotations

from rules import Outcome, OutcomeMatrix

CORNER = "v You/PC >"

_LABELS: dict[Outcome, str] = {"win": "Win", "lose": "Lose", "draw": "Draw"}


def format_table(matrix: OutcomeMatrix) -> str:
    """Render the matrix as a boxed text table.

    Rows are your move, columns the computer's move, and each cell is the
    result for you.
    """
    header = [CORNER, *matrix.moves]
    body = [[move, *(_LABELS[o] for o in row)] for move, row in zip(matrix.moves, matrix.rows)]

    widths = [max(len(r[col]) for r in [header, *body]) for col in range(len(header))]
    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def line(cells: list[str]) -> str:
        return "|" + "|".join(f" {c:<{w}} " for c, w in zip(cells, widths)) + "|"

    lines: list[str] = [border, line(header), border]
    for row in body:
        lines.append(line(row))
        lines.append(border)
    return "\n".join(lines)
