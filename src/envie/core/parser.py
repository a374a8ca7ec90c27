# src/envie/core/parser.py
"""
Parser e serializador canônicos do formato `KEY=VALUE`.

Formato (v1):
    - uma entrada por linha; somente LF (ou CRLF) quebra linha
    - espaços ao redor da chave e do valor são descartados
    - linhas vazias e linhas iniciadas por `#` são ignoradas
    - apenas o primeiro `=` separa chave de valor
    - linha sem `=` vira chave com valor vazio
    - chaves duplicadas: a última ocorrência vence

Limites explícitos:
    - Sem comentários inline
    - Sem aspas, escapes ou valores multi-linha
    - Sem interpolação de variáveis
"""

from __future__ import annotations

from typing import Dict, Mapping


def parse(content: str) -> Dict[str, str]:
    """
    Converte o conteúdo textual de um arquivo `.env` em um dicionário.

    Função pura: a mesma entrada sempre produz o mesmo mapeamento.

    Args:
        content (str): Conteúdo completo do arquivo.

    Returns:
        Dict[str, str]: Mapeamento chave → valor.
    """
    result: Dict[str, str] = {}

    # apenas "\n" separa linhas; "\r" final é removido pelo strip
    for raw in content.split("\n"):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        key, _, value = line.partition("=")
        result[key.strip()] = value.strip()

    return result


def serialize(mapping: Mapping[str, str]) -> str:
    """
    Serializa um mapeamento no formato `KEY=VALUE`, uma linha por entrada.

    A ordem das linhas segue a ordem do mapeamento. Para chaves e valores
    sem quebra de linha, sem espaços nas bordas e sem `=` na chave,
    `parse(serialize(m)) == m`.
    """
    return "".join(f"{key}={value}\n" for key, value in mapping.items())


__all__ = ["parse", "serialize"]
