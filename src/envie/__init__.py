# src/envie/__init__.py
"""
envie — carregamento de configuração `KEY=VALUE` com leitura tipada.

Uma `Store` carrega um arquivo `.env`, resolve chaves ausentes no
ambiente do processo e persiste alterações no próprio arquivo.

Exemplo:
    store = Store.load()
    debug = store.get_bool("DEBUG")
    store.set("PORT", "8080")

Limites explícitos:
    - Sem estruturas aninhadas, interpolação ou valores multi-linha
    - Sem aspas ou escapes; comentários apenas em linha inteira
    - Sem armazenamento criptografado
"""

from .core.environment import Environment, MappingEnvironment, ProcessEnvironment
from .core.errors import (
    EnvieError,
    InvalidEntry,
    InvalidValue,
    KeyNotFound,
    LoadError,
    WriteError,
)
from .core.parser import parse, serialize
from .core.store import DEFAULT_ENV_PATH, Store

__version__ = "0.1.0"

__all__ = [
    "Store",
    "DEFAULT_ENV_PATH",
    "Environment",
    "ProcessEnvironment",
    "MappingEnvironment",
    "EnvieError",
    "LoadError",
    "KeyNotFound",
    "InvalidValue",
    "WriteError",
    "InvalidEntry",
    "parse",
    "serialize",
]
