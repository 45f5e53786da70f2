# src/strata_config/core/__init__.py
"""
Core do Strata Config.

Este pacote contém a implementação canônica da resolução de
configuração, independente de relatórios e de scripts de exemplo.

Componentes principais:
    - config → schema, fontes, resolver e ciclo de vida da configuração

Princípios fundamentais:
    - Nenhuma decisão silenciosa: todo descarte de valor é registrado em log
    - Estado e efeitos colaterais são explícitos e injetáveis

Limites explícitos:
    - Não formata relatórios
    - Não depende de CLI ou serviços externos
"""
