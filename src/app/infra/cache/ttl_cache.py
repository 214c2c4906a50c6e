"""Cache em memória com TTL e relógio injetável.

Substitui dicionários globais de processo: cada consumidor cria sua
instância, e os testes controlam a expiração passando um relógio falso.
Thread-safe para uso em ambiente assíncrono/concorrente.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable

logger = logging.getLogger(__name__)

V = TypeVar("V")

DEFAULT_TTL_SECONDS = 300.0


class TTLCache(Generic[V]):
    """Mapa chave -> valor com expiração por entrada.

    Args:
        ttl_seconds: TTL padrão das entradas. 0 desativa o cache.
        clock: Função que retorna segundos monotônicos (default time.monotonic).
        max_entries: Limite de entradas; as mais antigas saem primeiro.
        name: Nome usado nos logs.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int | None = None,
        name: str = "ttl_cache",
    ) -> None:
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds deve ser >= 0")
        self._ttl = ttl_seconds
        self._clock = clock
        self._max_entries = max_entries
        self._name = name
        self._entries: OrderedDict[Hashable, tuple[float, V]] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: Hashable, default: V | None = None) -> V | None:
        """Retorna o valor se presente e não expirado."""
        with self._lock:
            item = self._entries.get(key)
            if item is None:
                return default
            expires_at, value = item
            if self._clock() >= expires_at:
                del self._entries[key]
                return default
            return value

    def set(self, key: Hashable, value: V, ttl_seconds: float | None = None) -> None:
        """Grava valor com TTL próprio ou o padrão da instância."""
        ttl = self._ttl if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            return
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = (self._clock() + ttl, value)
            if self._max_entries is not None:
                while len(self._entries) > self._max_entries:
                    self._entries.popitem(last=False)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            item = self._entries.get(key)
            return item is not None and self._clock() < item[0]

    def invalidate(self, key: Hashable) -> bool:
        """Remove uma entrada. Retorna True se existia."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """Remove todas as entradas."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.debug("ttl_cache_cleared", extra={"cache": self._name, "items_cleared": count})

    def purge_expired(self) -> int:
        """Remove entradas expiradas e retorna quantas saíram."""
        now = self._clock()
        with self._lock:
            expired = [k for k, (exp, _) in self._entries.items() if now >= exp]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def __len__(self) -> int:
        self.purge_expired()
        with self._lock:
            return len(self._entries)
