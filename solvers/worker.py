"""
solvers/worker.py

Фоновый решатель.

Первые запросы на почти полной доске могут быть долгими. Worker владеет
своим SolvabilityEngine в отдельном потоке; запросы и ответы передаются
через очереди. Пока ответа нет, lookup() возвращает None.
"""

import queue
import threading
import time
from typing import Dict, Optional, Set

from .solvability import SolvabilityEngine
from core.geometry import Geometry
from utils.logging import get_logger

_STOP = None


class SolverWorker:
    """Фоновый поток с собственной таблицей мемоизации."""

    def __init__(self, geometry: Geometry, verbose: bool = False):
        self.geometry = geometry
        self._engine = SolvabilityEngine(geometry, verbose=verbose)
        self._requests: "queue.Queue[Optional[int]]" = queue.Queue()
        self._responses: "queue.Queue[tuple]" = queue.Queue()
        # Общие для потоков-запросчиков, под _lock
        self._lock = threading.RLock()
        self._known: Dict[int, bool] = {}
        self._pending: Set[int] = set()
        self._thread = threading.Thread(target=self._run, name="solver-worker", daemon=True)
        self._thread.start()

    def lookup(self, state: int) -> Optional[bool]:
        """
        Ответ, если он уже известен; иначе ставит запрос в очередь и возвращает None.
        """
        with self._lock:
            self._drain()
            result = self._known.get(state)
            if result is None and state not in self._pending:
                self._pending.add(state)
                self._requests.put(state)
        return result

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Ждёт ответов на все отправленные запросы.

        Returns:
            True, если все ответы получены до истечения timeout
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        self._drain()
        while self._has_pending():
            remaining = None if deadline is None else deadline - time.monotonic()
            if remaining is not None and remaining <= 0:
                return False
            try:
                state, result = self._responses.get(timeout=remaining)
            except queue.Empty:
                return False
            self._accept(state, result)
        return True

    def stop(self) -> None:
        self._requests.put(_STOP)
        self._thread.join()

    @property
    def alive(self) -> bool:
        return self._thread.is_alive()

    def _has_pending(self) -> bool:
        with self._lock:
            return bool(self._pending)

    def _drain(self) -> None:
        while True:
            try:
                state, result = self._responses.get_nowait()
            except queue.Empty:
                return
            self._accept(state, result)

    def _accept(self, state: int, result: bool) -> None:
        with self._lock:
            self._pending.discard(state)
            self._known[state] = result

    def _run(self) -> None:
        while True:
            state = self._requests.get()
            if state is _STOP:
                break
            result = self._engine.is_solvable(state)
            self._responses.put((state, result))
        get_logger().debug(f"[SolverWorker] остановлен, memo {len(self._engine.memo)}")
