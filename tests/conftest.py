"""Configuração do pytest para o projeto AgendAI."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture
def anyio_backend() -> str:
    """Testes anyio rodam só em asyncio."""
    return "asyncio"
