"""Firestore User Directory: leitura de perfis e preferências de canal.

Firestore não tem busca por sufixo; cada documento de usuário guarda
`phone_suffix` (últimos 9 dígitos do telefone) para consulta por igualdade.
O campo é regravado sempre que o telefone muda por aqui.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from google.cloud.firestore_v1.base_query import FieldFilter

from app.domain.appointment import UserProfile
from app.infra.stores.firestore_documents import FIRESTORE_ERRORS, from_document, unavailable
from app.services.phone import SUFFIX_LENGTH, phone_digits_suffix

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

logger = logging.getLogger(__name__)

USERS_COLLECTION = "usuarios"
PHONE_SUFFIX_FIELD = "phone_suffix"


class FirestoreUserDirectory:
    """Diretório de usuários usando Firestore."""

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = USERS_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    async def get(self, user_id: str) -> UserProfile | None:
        return await asyncio.to_thread(self._get_sync, user_id)

    def _get_sync(self, user_id: str) -> UserProfile | None:
        try:
            doc = self._db.collection(self._collection).document(user_id).get()
        except FIRESTORE_ERRORS as exc:
            raise unavailable("user_get", exc) from exc
        if not doc.exists:
            return None
        return from_document(UserProfile, doc.id, doc.to_dict())

    async def find_by_phone_suffix(self, suffix: str) -> list[UserProfile]:
        if not suffix:
            return []
        return await asyncio.to_thread(self._find_sync, suffix)

    def _find_sync(self, suffix: str) -> list[UserProfile]:
        query = self._db.collection(self._collection).where(
            filter=FieldFilter(PHONE_SUFFIX_FIELD, "==", suffix)
        )
        try:
            return [from_document(UserProfile, doc.id, doc.to_dict()) for doc in query.stream()]
        except FIRESTORE_ERRORS as exc:
            raise unavailable("user_find_by_phone", exc) from exc

    async def update_whatsapp(self, user_id: str, *, phone: str | None, enabled: bool) -> bool:
        return await asyncio.to_thread(self._update_whatsapp_sync, user_id, phone, enabled)

    def _update_whatsapp_sync(self, user_id: str, phone: str | None, enabled: bool) -> bool:
        ref = self._db.collection(self._collection).document(user_id)
        update = {
            "phone": phone,
            "whatsapp_enabled": enabled,
            PHONE_SUFFIX_FIELD: phone_digits_suffix(phone, SUFFIX_LENGTH) if phone else None,
        }
        try:
            if not ref.get().exists:
                return False
            ref.update(update)
        except FIRESTORE_ERRORS as exc:
            raise unavailable("user_update_whatsapp", exc) from exc
        logger.info(
            "user_whatsapp_updated",
            extra={"user_id": user_id, "whatsapp_enabled": enabled},
        )
        return True
