"""Stores em memória: apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING

from app.domain.appointment import (
    Appointment,
    AppointmentStatus,
    NotificationChannel,
    Reminder,
    UserProfile,
)
from app.infra.cache import TTLCache
from app.protocols.dedupe import AsyncDedupeProtocol
from app.services.phone import phone_digits_suffix

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from datetime import datetime

    from app.domain.delivery import DeliveryLogEntry, NotificationRecord


class MemoryAppointmentStore:
    """Store de compromissos em memória."""

    def __init__(self) -> None:
        self._items: dict[str, Appointment] = {}

    async def get(self, appointment_id: str) -> Appointment | None:
        return self._items.get(appointment_id)

    async def add(self, appointment: Appointment) -> Appointment:
        self._items[appointment.id] = appointment
        return appointment

    async def update_status(self, appointment_id: str, status: AppointmentStatus) -> bool:
        current = self._items.get(appointment_id)
        if current is None:
            return False
        self._items[appointment_id] = current.model_copy(update={"status": status})
        return True

    async def list_upcoming(
        self,
        owner_id: str,
        *,
        after: datetime,
        limit: int,
    ) -> list[Appointment]:
        upcoming = [
            a
            for a in self._items.values()
            if a.owner_id == owner_id and a.status == AppointmentStatus.ATIVO and a.start >= after
        ]
        upcoming.sort(key=lambda a: a.start)
        return upcoming[:limit]


class MemoryReminderStore:
    """Store de lembretes em memória.

    `mark_sent_if_pending` usa lock para que a verificação e a escrita
    sejam uma única operação, como a transação do Firestore.
    """

    def __init__(self) -> None:
        self._items: dict[str, Reminder] = {}
        self._lock = threading.Lock()

    async def add(self, reminder: Reminder) -> Reminder:
        with self._lock:
            self._items[reminder.id] = reminder
        return reminder

    async def get(self, reminder_id: str) -> Reminder | None:
        return self._items.get(reminder_id)

    async def list_pending(self, channel: NotificationChannel) -> list[Reminder]:
        with self._lock:
            return [r for r in self._items.values() if not r.sent and r.channel == channel]

    async def list_for_appointment(self, appointment_id: str) -> list[Reminder]:
        with self._lock:
            return [r for r in self._items.values() if r.appointment_id == appointment_id]

    async def mark_sent_if_pending(self, reminder_id: str, sent_at: datetime) -> bool:
        with self._lock:
            current = self._items.get(reminder_id)
            if current is None or current.sent:
                return False
            self._items[reminder_id] = current.model_copy(
                update={"sent": True, "sent_at": sent_at}
            )
            return True


class MemoryUserDirectory:
    """Diretório de usuários em memória."""

    def __init__(self, users: Iterable[UserProfile] = ()) -> None:
        self._users: dict[str, UserProfile] = {u.id: u for u in users}

    def add(self, user: UserProfile) -> None:
        self._users[user.id] = user

    async def get(self, user_id: str) -> UserProfile | None:
        return self._users.get(user_id)

    async def find_by_phone_suffix(self, suffix: str) -> list[UserProfile]:
        if not suffix:
            return []
        return [
            u
            for u in self._users.values()
            if u.phone and phone_digits_suffix(u.phone, len(suffix)) == suffix
        ]

    async def update_whatsapp(self, user_id: str, *, phone: str | None, enabled: bool) -> bool:
        current = self._users.get(user_id)
        if current is None:
            return False
        self._users[user_id] = current.model_copy(
            update={"phone": phone, "whatsapp_enabled": enabled}
        )
        return True


class MemoryDeliveryLogStore:
    """Log de entrega em memória (append-only)."""

    def __init__(self, max_records: int = 10000) -> None:
        self._records: list[DeliveryLogEntry] = []
        self._max_records = max_records

    async def append(self, entry: DeliveryLogEntry) -> None:
        self._records.append(entry)
        # Limita tamanho para evitar memory leak em dev
        if len(self._records) > self._max_records:
            self._records = self._records[-self._max_records :]

    def get_records(self) -> list[DeliveryLogEntry]:
        """Retorna todos os registros (apenas para testes)."""
        return list(self._records)


class MemoryNotificationStore:
    """Histórico de notificações em memória (append-only)."""

    def __init__(self) -> None:
        self._records: list[NotificationRecord] = []

    async def append(self, record: NotificationRecord) -> None:
        self._records.append(record)

    def get_records(self) -> list[NotificationRecord]:
        """Retorna todos os registros (apenas para testes)."""
        return list(self._records)


class MemoryDedupeStore(AsyncDedupeProtocol):
    """Store de dedupe em memória sobre TTLCache."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._cache: TTLCache[bool] = TTLCache(clock=clock, name="dedupe")
        self._lock = threading.Lock()

    async def seen(self, key: str, ttl: int) -> bool:
        with self._lock:
            if key in self._cache:
                return True
            self._cache.set(key, True, ttl_seconds=ttl)
            return False
