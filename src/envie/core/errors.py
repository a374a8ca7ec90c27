# src/envie/core/errors.py
"""
Exceções canônicas do envie.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento, a leitura tipada e a persistência de um arquivo `.env`.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Toda falha é propagada imediatamente ao chamador (sem retry)
    - Mensagens identificam o caminho, a chave ou o tipo envolvido

Invariantes:
    - Todas as exceções do envie herdam de `EnvieError`
    - `details` contém apenas dados serializáveis
    - Valores lidos nunca são incluídos na mensagem (podem ser segredos)

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não registra eventos (responsabilidade da Store)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union


class EnvieError(Exception):
    """
    Exceção base do envie.

    Carrega uma mensagem curta e humana e um dicionário `details`
    com dados estruturados para diagnóstico.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return {
            "type": type(self).__name__,
            "message": self.message,
            "details": dict(self.details),
        }


class LoadError(EnvieError):
    """
    Exceção levantada quando o arquivo de backing não pode ser lido.

    Cobre arquivo ausente, permissão negada e conteúdo que não é UTF-8
    válido. Um arquivo ausente nunca é interpretado como Store vazia.
    """

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = Path(path)
        message = f"Falha ao ler arquivo de configuração: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, {"path": str(self.path), "reason": reason})


class KeyNotFound(EnvieError, KeyError):
    """Chave ausente tanto no mapeamento em memória quanto no ambiente."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Chave '{key}' não encontrada", {"key": key})


class InvalidValue(EnvieError, ValueError):
    """
    Valor presente mas não convertível para o tipo solicitado.

    `kind` é um de: "boolean", "integer", "float".
    """

    def __init__(self, key: str, kind: str):
        self.key = key
        self.kind = kind
        super().__init__(
            f"Valor inválido ({kind}) para a chave '{key}'",
            {"key": key, "kind": kind},
        )


class WriteError(EnvieError):
    """
    Exceção levantada quando o arquivo de backing não pode ser reescrito.

    Decisões arquiteturais:
        - O mapeamento em memória NÃO é revertido; após esta exceção
          memória e arquivo podem divergir até a próxima escrita bem-sucedida
    """

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = Path(path)
        message = f"Falha ao escrever arquivo de configuração: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, {"path": str(self.path), "reason": reason})


class InvalidEntry(EnvieError, ValueError):
    """Par chave/valor que não sobreviveria a um round-trip write → parse."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(
            f"Entrada inválida para a chave {key!r}: {reason}",
            {"key": key, "reason": reason},
        )



__all__ = [
    "EnvieError",
    "LoadError",
    "KeyNotFound",
    "InvalidValue",
    "WriteError",
    "InvalidEntry",
]
