# src/strata_config/core/config/holder.py
"""
Contêiner explícito do ciclo de vida da configuração.

Este módulo define o `AppConfigHolder`, dono explícito da instância
ativa de `AppConfig`. Ele substitui um singleton global implícito: a
aplicação cria o holder, o inicializa no startup e o injeta onde
precisar.

Ciclo de vida:
    - `init(app_name, **options)` → resolve e ativa uma nova configuração
    - `reinitialize()`            → resolve novamente com as mesmas opções
    - `current()`                 → instância ativa
    - `reset()`                   → descarta instância e opções

Decisões arquiteturais:
    - A nova configuração é resolvida por completo antes da troca
    - A troca ocorre sob lock; leitores veem o estado antigo ou o novo,
      nunca um merge parcial
    - Falhas na resolução preservam a instância anterior

Limites explícitos:
    - Não recarrega automaticamente
    - Não sincroniza escritas via `override` entre threads
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional

from .errors import NotInitializedError
from .resolver import AppConfig
from .schema import KeySchema


class AppConfigHolder:
    """Dono explícito da configuração ativa de uma aplicação."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._config: Optional[AppConfig] = None
        self._app_name: Optional[str] = None
        self._options: Dict[str, Any] = {}

    @property
    def is_initialized(self) -> bool:
        return self._config is not None

    def init(self, app_name: str, schema: Optional[KeySchema] = None, **options: Any) -> AppConfig:
        options["schema"] = schema
        config = AppConfig(app_name, **options)
        with self._lock:
            self._config = config
            self._app_name = app_name
            self._options = dict(options)
        return config

    def reinitialize(self) -> AppConfig:
        with self._lock:
            app_name = self._app_name
            options = dict(self._options)
        if app_name is None:
            raise NotInitializedError("Configuration was never initialized; call init() first")
        return self.init(app_name, **options)

    def current(self) -> AppConfig:
        config = self._config
        if config is None:
            raise NotInitializedError("Configuration is not initialized; call init() first")
        return config

    def reset(self) -> None:
        with self._lock:
            self._config = None
            self._app_name = None
            self._options = {}
