"""Conversão entre modelos pydantic e documentos Firestore."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

from google.api_core import exceptions as gcp_exceptions

from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from pydantic import BaseModel

M = TypeVar("M", bound="BaseModel")

# Falhas do Firestore que viram FirestoreUnavailableError
FIRESTORE_ERRORS = (gcp_exceptions.GoogleAPICallError, gcp_exceptions.RetryError)


def to_document(model: BaseModel, *, exclude: set[str] | None = None) -> dict[str, Any]:
    """model_dump com enums como string; datetimes seguem como Timestamp."""
    data = model.model_dump(exclude=exclude)
    return {key: _plain(value) for key, value in data.items()}


def from_document(model_cls: type[M], doc_id: str, data: dict[str, Any] | None) -> M:
    """Reconstrói o modelo usando o id do documento."""
    return model_cls.model_validate({**(data or {}), "id": doc_id})


def unavailable(operation: str, exc: Exception) -> FirestoreUnavailableError:
    """Exceção de domínio para falha de IO no Firestore."""
    return FirestoreUnavailableError(f"Firestore indisponível em {operation}: {type(exc).__name__}")


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_plain(v) for v in value]
    return value
