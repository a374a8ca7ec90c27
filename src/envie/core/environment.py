# src/envie/core/environment.py
"""
Capacidade de acesso às variáveis de ambiente.

O ambiente do processo é estado global e mutável. A Store nunca acessa
`os.environ` diretamente: ela recebe um objeto `Environment`, o que
permite substituir o ambiente real por um fake em memória nos testes.

Limites explícitos:
    - Não sincroniza acessos concorrentes (responsabilidade do chamador)
    - Não remove variáveis
"""

from __future__ import annotations

import os
from typing import Dict, Mapping, MutableMapping, Optional, Protocol


class Environment(Protocol):
    """Protocolo mínimo: leitura e escrita de uma variável por nome."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class ProcessEnvironment:
    """Ambiente real do processo (`os.environ`)."""

    def __init__(self, environ: Optional[MutableMapping[str, str]] = None):
        self._environ = os.environ if environ is None else environ

    def get(self, key: str) -> Optional[str]:
        return self._environ.get(key)

    def set(self, key: str, value: str) -> None:
        self._environ[key] = value


class MappingEnvironment:
    """Ambiente isolado em memória, usado como fake em testes."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self.variables: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.variables.get(key)

    def set(self, key: str, value: str) -> None:
        self.variables[key] = value


__all__ = ["Environment", "ProcessEnvironment", "MappingEnvironment"]
