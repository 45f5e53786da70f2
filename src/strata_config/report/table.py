# src/strata_config/report/table.py
"""
Relatórios legíveis da configuração resolvida (v1)

Objetivo:
- Renderizar as triplas (chave, valor, origem) em tabela ASCII ou HTML.
- Renderizar um resumo textual da aplicação configurada.
- NÃO altera a configuração.
- NÃO importa o resolver (consome triplas e atributos por duck typing).

Formato da tabela ASCII:

    +------------------------------------------+
    | Key |  Value   |         Source          |
    +------------------------------------------+
    | foo |       42 | defaults                |
    | bar | file_bar | file config/foo_app.yml |
    +------------------------------------------+
"""

from __future__ import annotations

import html
from numbers import Number
from typing import Any, Iterable, List, Optional, Sequence, Tuple

HEADERS: Tuple[str, str, str] = ("Key", "Value", "Source")


def _escape(s: Any) -> str:
    return html.escape("" if s is None else str(s))


def _is_numeric(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _center(text: str, width: int) -> str:
    pad = width - len(text)
    left = pad // 2
    return " " * left + text + " " * (pad - left)


def _cells(rows: Sequence[Tuple[Any, Any, Any]]) -> List[Tuple[str, str, str, bool]]:
    return [(str(k), "" if v is None else str(v), str(s), _is_numeric(v)) for k, v, s in rows]


def render_config_table(rows: Iterable[Tuple[Any, Any, Any]]) -> str:
    """
    Renderiza triplas (chave, valor, origem) como tabela ASCII.

    Números são alinhados à direita; demais valores à esquerda. A ordem
    das linhas é a ordem recebida.
    """
    cells = _cells(list(rows))

    widths = [len(h) for h in HEADERS]
    for key, value, source, _ in cells:
        widths[0] = max(widths[0], len(key))
        widths[1] = max(widths[1], len(value))
        widths[2] = max(widths[2], len(source))

    inner = sum(widths) + 3 * len(widths) - 1
    frame = "+" + "-" * inner + "+"

    def line(parts: Sequence[str]) -> str:
        return "| " + " | ".join(parts) + " |"

    lines = [frame, line([_center(h, w) for h, w in zip(HEADERS, widths)]), frame]
    for key, value, source, numeric in cells:
        value_cell = value.rjust(widths[1]) if numeric else value.ljust(widths[1])
        lines.append(line([key.ljust(widths[0]), value_cell, source.ljust(widths[2])]))
    lines.append(frame)
    return "\n".join(lines) + "\n"


def render_config_table_html(
    rows: Iterable[Tuple[Any, Any, Any]],
    title: Optional[str] = None,
) -> str:
    """Renderiza triplas (chave, valor, origem) como tabela HTML."""
    trs = []
    for key, value, source in rows:
        trs.append(
            f"<tr><td><code>{_escape(key)}</code></td>"
            f"<td>{_escape(value)}</td>"
            f"<td>{_escape(source)}</td></tr>"
        )

    heading = f"<h4>{_escape(title)}</h4>" if title else ""
    th = "".join(f"<th>{_escape(h)}</th>" for h in HEADERS)
    return (
        f"{heading}"
        "<table>"
        f"<thead><tr>{th}</tr></thead>"
        "<tbody>" + "".join(trs) + "</tbody>"
        "</table>"
    )


def render_summary(config: Any) -> str:
    """
    Resumo textual: aplicação, ambiente, arquivo, local de definição e
    prefixo de ambiente.
    """
    fields = [
        ("Application", getattr(config, "app_name", None)),
        ("Environment", getattr(config, "environment", None)),
        ("Config file", getattr(config, "config_path", None)),
        ("Defined at", getattr(config, "defined_at", None)),
        ("Env prefix", getattr(config, "env_prefix", None)),
    ]
    width = max(len(label) for label, _ in fields) + 1
    lines = [
        f"{(label + ':').ljust(width)} {'<unknown>' if value is None else value}"
        for label, value in fields
    ]
    return "\n".join(lines) + "\n"
