# src/artifact_graph/core/__init__.py
"""
Core do Artifact Graph.

Componentes principais:
    - config     → resolução de configuração (merge, validação estrutural, settings)
    - graph      → tipos do protocolo, builders, condições, RunState e registry
    - engine     → validação, planejamento em batches e execução do grafo
    - exceptions → exceções tipadas de run
    - errors     → payloads de erro serializáveis

Princípios fundamentais:
    - Nenhuma decisão silenciosa: todo comportamento é explícito e testado
    - Estado de run é isolado e descartado ao fim da run

Limites explícitos:
    - Não depende de transporte de rede, CLI ou servidor
"""
