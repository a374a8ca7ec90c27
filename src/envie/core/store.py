# src/envie/core/store.py
"""
Store canônica de configuração `KEY=VALUE`.

A Store mantém um mapeamento em memória carregado de um arquivo de
backing, oferece leituras tipadas com fallback para o ambiente do
processo e persiste mutações reescrevendo o arquivo por completo.

Responsabilidades do módulo:
    - Carregar e recarregar o arquivo de backing
    - Resolver leituras (mapeamento → ambiente) e conversões tipadas
    - Persistir `set` / `remove` no arquivo
    - Exportar entradas para o ambiente do processo
    - Registrar eventos estruturados de execução

Invariantes:
    - O mapeamento é a única fonte de verdade das chaves carregadas
    - Valores do ambiente nunca são copiados implicitamente para o mapeamento
    - Após uma escrita bem-sucedida, o arquivo reflete exatamente o mapeamento
    - `reload` é tudo-ou-nada
    - Eventos nunca contêm valores, apenas chaves e contagens

Limites explícitos:
    - Sem locking interno (uso concorrente exige sincronização externa)
    - Escritas não são atômicas (sem temp file + rename)
    - Falha de escrita em `set` / `remove` não reverte o mapeamento
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from .environment import Environment, ProcessEnvironment
from .errors import InvalidEntry, InvalidValue, KeyNotFound, LoadError, WriteError
from .parser import parse, serialize


DEFAULT_ENV_PATH = ".env"
ENCODING = "utf-8"

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

_TRUE_VALUES = {"true", "1"}
_FALSE_VALUES = {"false", "0"}


def _read_file(path: Path) -> Dict[str, str]:
    """Lê e faz parse do arquivo de backing, convertendo falhas em `LoadError`."""
    try:
        content = path.read_text(encoding=ENCODING)
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(path, reason=type(exc).__name__) from exc
    return parse(content)


def _validate_entry(key: str, value: str) -> None:
    """
    Rejeita entradas que não sobreviveriam a um round-trip write → parse.

    Raises:
        InvalidEntry: Se a chave ou o valor violam o formato `KEY=VALUE`.
    """
    if not key:
        raise InvalidEntry(key, "chave vazia")
    if key != key.strip():
        raise InvalidEntry(key, "chave com espaços nas bordas")
    if "=" in key:
        raise InvalidEntry(key, "chave contém '='")
    if key.startswith("#"):
        raise InvalidEntry(key, "chave iniciada por '#'")
    if any(ch in key for ch in "\r\n"):
        raise InvalidEntry(key, "chave contém quebra de linha")
    if any(ch in value for ch in "\r\n"):
        raise InvalidEntry(key, "valor contém quebra de linha")
    if "\0" in key or "\0" in value:
        raise InvalidEntry(key, "contém caractere NUL")


def _is_exportable(key: str, value: str) -> bool:
    return bool(key) and "=" not in key and "\0" not in key and "\0" not in value


class Store:
    """
    Mapeamento de configuração associado a um arquivo de backing.

    Instâncias são normalmente criadas via `Store.load()` ou
    `Store.load_from(path)`. O construtor aceita um mapeamento já
    resolvido e não toca o filesystem.

    Args:
        variables: Entradas iniciais do mapeamento.
        path: Caminho do arquivo de backing (default: `.env`).
        environment: Capacidade de acesso ao ambiente; por padrão o
            ambiente real do processo.
    """

    def __init__(
        self,
        variables: Optional[Mapping[str, str]] = None,
        *,
        path: Union[str, Path] = DEFAULT_ENV_PATH,
        environment: Optional[Environment] = None,
    ):
        self.path = Path(path)
        self.environment: Environment = environment if environment is not None else ProcessEnvironment()
        self.events: List[Dict[str, Any]] = []
        self._variables: Dict[str, str] = dict(variables or {})

    # ------------------------------------------------------------------
    # Construction / reload
    # ------------------------------------------------------------------
    @classmethod
    def load(cls, *, environment: Optional[Environment] = None) -> "Store":
        """
        Carrega o arquivo `.env` do diretório corrente.

        Raises:
            LoadError: Se o arquivo não puder ser lido.
        """
        return cls.load_from(DEFAULT_ENV_PATH, environment=environment)

    @classmethod
    def load_from(
        cls,
        path: Union[str, Path],
        *,
        environment: Optional[Environment] = None,
    ) -> "Store":
        """
        Carrega um arquivo de configuração a partir de um caminho explícito.

        Um arquivo ausente é erro, nunca uma Store vazia.

        Raises:
            LoadError: Se o arquivo não puder ser lido (ausente, sem
                permissão, conteúdo não UTF-8). A mensagem referencia `path`.
        """
        path = Path(path)
        variables = _read_file(path)
        store = cls(variables, path=path, environment=environment)
        store.log(level="INFO", message="config loaded", count=len(variables))
        return store

    def reload(self) -> None:
        """
        Relê o arquivo de backing e substitui o mapeamento inteiro.

        Entradas ausentes no arquivo são descartadas. Em caso de falha o
        mapeamento anterior permanece intacto.

        Raises:
            LoadError: Se o arquivo não puder ser lido.
        """
        try:
            variables = _read_file(self.path)
        except LoadError as exc:
            self.log(level="ERROR", message="reload failed", error=exc.details["reason"])
            raise

        self._variables = variables
        self.log(level="INFO", message="config reloaded", count=len(variables))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get(self, key: str) -> Optional[str]:
        """Valor do mapeamento; na ausência, a variável de ambiente homônima."""
        if key in self._variables:
            return self._variables[key]
        return self.environment.get(key)

    def contains_key(self, key: str) -> bool:
        return self.get(key) is not None

    def get_all(self) -> Dict[str, str]:
        """Cópia do mapeamento em memória (sem valores do ambiente)."""
        return dict(self._variables)

    def get_bool(self, key: str) -> bool:
        """
        Lê um booleano. Aceita "true"/"1" e "false"/"0", sem diferenciar
        maiúsculas de minúsculas.

        Raises:
            KeyNotFound: Se a chave não existe no mapeamento nem no ambiente.
            InvalidValue: Para qualquer outro valor.
        """
        value = self._require(key).lower()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        raise InvalidValue(key, "boolean")

    def get_int(self, key: str) -> int:
        """
        Lê um inteiro decimal com sinal, restrito à faixa de 32 bits.

        Raises:
            KeyNotFound: Se a chave não existe.
            InvalidValue: Se o valor não é um inteiro ou excede a faixa.
        """
        value = self._require(key)
        if not _INT_PATTERN.fullmatch(value):
            raise InvalidValue(key, "integer")

        number = int(value)
        if not INT32_MIN <= number <= INT32_MAX:
            raise InvalidValue(key, "integer")
        return number

    def get_f64(self, key: str) -> float:
        """
        Lê um float de 64 bits.

        Espaços nas bordas, separadores `_` e dígitos não ASCII são
        rejeitados, embora `float()` os aceite.

        Raises:
            KeyNotFound: Se a chave não existe.
            InvalidValue: Se o valor não é um float válido.
        """
        value = self._require(key)
        if not value.isascii() or "_" in value or value != value.strip():
            raise InvalidValue(key, "float")

        try:
            return float(value)
        except ValueError as exc:
            raise InvalidValue(key, "float") from exc

    def _require(self, key: str) -> str:
        value = self.get(key)
        if value is None:
            raise KeyNotFound(key)
        return value

    # ------------------------------------------------------------------
    # Mutation / persistence
    # ------------------------------------------------------------------
    def set(self, key: str, value: str) -> None:
        """
        Insere ou sobrescreve uma entrada e reescreve o arquivo de backing.

        Raises:
            InvalidEntry: Se a entrada não pode ser representada no arquivo.
                Nada é alterado neste caso.
            WriteError: Se o arquivo não pode ser escrito. O novo valor
                permanece no mapeamento.
        """
        _validate_entry(key, value)
        self._variables[key] = value
        self._persist()
        self.log(level="INFO", message="entry set", key=key)

    def remove(self, key: str) -> None:
        """
        Remove uma entrada (no-op se ausente) e reescreve o arquivo.

        Raises:
            WriteError: Se o arquivo não pode ser escrito. A remoção em
                memória não é revertida.
        """
        self._variables.pop(key, None)
        self._persist()
        self.log(level="INFO", message="entry removed", key=key)

    def _persist(self) -> None:
        try:
            self.path.write_text(serialize(self._variables), encoding=ENCODING)
        except OSError as exc:
            self.log(level="ERROR", message="write failed", error=type(exc).__name__)
            raise WriteError(self.path, reason=type(exc).__name__) from exc

    # ------------------------------------------------------------------
    # Process environment
    # ------------------------------------------------------------------
    def export_to_system_env(self) -> None:
        """
        Copia todas as entradas para o ambiente, sobrescrevendo existentes.

        Entradas que o sistema operacional não aceita como variável de
        ambiente (chave vazia, chave com `=`, NUL na chave ou no valor)
        são puladas com um evento WARNING; as demais são sempre exportadas.
        """
        exported = 0
        for key, value in self._variables.items():
            if not _is_exportable(key, value):
                self.log(level="WARNING", message="entry not exportable", key=key)
                continue
            self.environment.set(key, value)
            exported += 1
        self.log(level="INFO", message="exported to environment", count=exported)

    def set_system_env(self, key: str, value: str) -> None:
        """
        `set` seguido da escrita da mesma chave no ambiente.

        Se `set` falhar, o ambiente não é alterado.
        """
        self.set(key, value)
        self.environment.set(key, value)

    def log(self, *, level: str, message: str, **extra: Any) -> None:
        event = {
            "level": level,
            "message": message,
            "path": str(self.path),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def __repr__(self) -> str:
        return f"Store(path={str(self.path)!r}, entries={len(self._variables)})"


__all__ = ["Store", "DEFAULT_ENV_PATH", "ENCODING", "INT32_MIN", "INT32_MAX"]
