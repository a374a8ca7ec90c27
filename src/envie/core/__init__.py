# src/envie/core/__init__.py
"""
Núcleo do envie: parse, leitura tipada e persistência de arquivos `.env`.

Módulos:
    - parser      → formato `KEY=VALUE` (parse / serialize)
    - store       → Store com fallback para o ambiente e persistência
    - environment → capacidade de leitura/escrita do ambiente do processo
    - errors      → hierarquia de exceções
"""
