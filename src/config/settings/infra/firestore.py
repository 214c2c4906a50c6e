"""Settings do Firestore e do backend de persistência.

Configurações para Google Cloud Firestore.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

StoreBackend = Literal["memory", "firestore"]


@dataclass(frozen=True)
class FirestoreSettings:
    """Configurações do Firestore.

    Attributes:
        backend: Backend de persistência (memory|firestore)
        project_id: ID do projeto GCP (usa GCP_PROJECT se não definido)
        database_id: ID do database Firestore
        collection_users: Collection de usuários
        collection_appointments: Collection de compromissos
        collection_reminders: Collection de lembretes
        collection_delivery_log: Collection de logs de envio WhatsApp
        collection_notifications: Collection de notificações
    """

    backend: StoreBackend = "memory"
    project_id: str = ""
    database_id: str = "(default)"
    collection_users: str = "usuarios"
    collection_appointments: str = "compromissos"
    collection_reminders: str = "lembretes"
    collection_delivery_log: str = "whatsapp_logs"
    collection_notifications: str = "notificacoes"

    def validate(self, gcp_project: str, *, is_development: bool = False) -> list[str]:
        """Valida configurações do Firestore.

        Args:
            gcp_project: Projeto GCP padrão para fallback.
            is_development: Permite backend memory em desenvolvimento.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.backend not in ("memory", "firestore"):
            errors.append(f"STORE_BACKEND inválido: {self.backend}")

        if self.backend == "memory" and not is_development:
            errors.append("STORE_BACKEND=memory proibido em staging/production")

        if self.backend == "firestore" and not (self.project_id or gcp_project):
            errors.append(
                "FIRESTORE_PROJECT_ID ou GCP_PROJECT deve estar configurado"
            )

        return errors


def _load_firestore_from_env() -> FirestoreSettings:
    """Carrega FirestoreSettings de variáveis de ambiente."""
    environment = os.getenv("ENVIRONMENT", "development").lower()
    default_backend = (
        "memory" if environment in ("development", "dev", "test") else "firestore"
    )
    backend_str = os.getenv("STORE_BACKEND", default_backend).lower()
    backend: StoreBackend = backend_str if backend_str in ("memory", "firestore") else "memory"
    return FirestoreSettings(
        backend=backend,
        project_id=os.getenv("FIRESTORE_PROJECT_ID", ""),
        database_id=os.getenv("FIRESTORE_DATABASE_ID", "(default)"),
        collection_users=os.getenv("FIRESTORE_COLLECTION_USERS", "usuarios"),
        collection_appointments=os.getenv(
            "FIRESTORE_COLLECTION_APPOINTMENTS", "compromissos"
        ),
        collection_reminders=os.getenv("FIRESTORE_COLLECTION_REMINDERS", "lembretes"),
        collection_delivery_log=os.getenv(
            "FIRESTORE_COLLECTION_DELIVERY_LOG", "whatsapp_logs"
        ),
        collection_notifications=os.getenv(
            "FIRESTORE_COLLECTION_NOTIFICATIONS", "notificacoes"
        ),
    )


@lru_cache(maxsize=1)
def get_firestore_settings() -> FirestoreSettings:
    """Retorna instância cacheada de FirestoreSettings."""
    return _load_firestore_from_env()
