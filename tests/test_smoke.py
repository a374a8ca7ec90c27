# tests/test_smoke.py
"""
Teste de sanidade estrutural (smoke test) do envie.

Garante apenas que o pacote pode ser importado e expõe a API pública.
Não valida comportamento de domínio.
"""

import envie


def test_smoke():
    """O pacote importa e expõe a Store e as exceções canônicas."""
    for name in envie.__all__:
        assert hasattr(envie, name), name
