# src/strata_config/core/config/system.py
"""
Capacidade de sistema usada no caminho fatal do resolver.

Chaves obrigatórias ausentes não viram exceção: o resolver avisa o
operador e encerra o processo através desta capacidade injetável, o que
permite testar o caminho de término sem encerrar o processo de testes.
"""

from __future__ import annotations

import sys
from typing import NoReturn, Protocol, TextIO, runtime_checkable


@runtime_checkable
class System(Protocol):
    """Contrato mínimo: `warn(message)` e `exit(code)`."""

    def warn(self, message: str) -> None: ...

    def exit(self, code: int) -> None: ...


class ProcessSystem:
    """Implementação real: escreve em stderr e encerra via `sys.exit`."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def warn(self, message: str) -> None:
        stream = self._stream if self._stream is not None else sys.stderr
        stream.write(f"{message}\n")
        stream.flush()

    def exit(self, code: int) -> NoReturn:
        sys.exit(code)
