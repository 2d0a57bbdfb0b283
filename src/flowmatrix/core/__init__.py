# src/flowmatrix/core/__init__.py
"""
Core do FlowMatrix Engine.

Este pacote reúne a implementação canônica do motor de análise de
dependências, independente de qualquer camada de UI, canvas ou
persistência.

O core é projetado para ser:
    - puramente funcional sobre snapshots fornecidos pelo chamador
    - determinístico para a mesma entrada
    - testável de forma isolada

Componentes principais:
    - model     → tipos canônicos de itens e relacionamentos
    - graph     → Graph Builder e Cycle Guard
    - analysis  → Duration Parser, Critical Path Analyzer, Breakdown
                  Aggregator e Bottleneck Classifier
    - status    → Dependency State Machine
    - config    → resolução de configuração (defaults + override local)
    - context   → AnalysisContext (eventos e warnings estruturados)

Limites explícitos:
    - Não cria nem remove itens ou relacionamentos
    - Não depende de notebooks, CLI ou serviços externos
"""
