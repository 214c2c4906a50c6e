"""Protocolo de consulta de usuários."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.appointment import UserProfile


class UserDirectoryProtocol(Protocol):
    """Contrato para leitura e atualização de perfis de usuário."""

    async def get(self, user_id: str) -> UserProfile | None:
        """Busca usuário por id."""
        ...

    async def find_by_phone_suffix(self, suffix: str) -> list[UserProfile]:
        """Usuários cujo telefone (só dígitos) termina com o sufixo."""
        ...

    async def update_whatsapp(self, user_id: str, *, phone: str | None, enabled: bool) -> bool:
        """Atualiza telefone e flag do canal. False se o usuário não existe."""
        ...
