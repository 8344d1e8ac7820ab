# forum/core/sessions.py
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable

from forum.core.security import new_session_id

log = logging.getLogger("uvicorn")


@dataclass
class SessionEntry:
    user_id: int
    expires_at: float


class SessionStore:
    """
    Sesiones de servidor en memoria: session-id -> user id.

    Vive en `app.state.sessions`; se crea en el arranque de la app y la tarea
    de limpieza se para en el apagado. Una sesión vencida se trata como si no
    existiera aunque todavía no se haya podado.
    """

    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, SessionEntry] = {}
        self._prune_task: asyncio.Task | None = None

    def __len__(self) -> int:
        return len(self._entries)

    def create(self, user_id: int) -> str:
        sid = new_session_id()
        self._entries[sid] = SessionEntry(
            user_id=user_id,
            expires_at=self._clock() + self.ttl_seconds,
        )
        return sid

    def get(self, sid: str) -> int | None:
        entry = self._entries.get(sid)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            self._entries.pop(sid, None)
            return None
        return entry.user_id

    def destroy(self, sid: str) -> None:
        self._entries.pop(sid, None)

    def prune(self) -> int:
        now = self._clock()
        expired = [sid for sid, e in self._entries.items() if e.expires_at <= now]
        for sid in expired:
            del self._entries[sid]
        return len(expired)

    # -------------------------
    # tarea periódica de limpieza
    # -------------------------

    async def _prune_loop(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            removed = self.prune()
            if removed:
                log.debug(f"🧹 sesiones vencidas eliminadas: {removed}")

    def start(self, interval: float) -> None:
        if self._prune_task is None:
            self._prune_task = asyncio.create_task(self._prune_loop(interval))

    async def stop(self) -> None:
        task, self._prune_task = self._prune_task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        self._entries.clear()
