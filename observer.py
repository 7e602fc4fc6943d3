"""변경 알림 모듈 — 동기식 발행/구독."""

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class Subject:
    """구독자 콜백을 등록하고, emit 시 호출 스레드에서 순서대로 호출한다."""

    def __init__(self):
        self._observers: list[Callable[[], None]] = []

    def subscribe(self, callback: Callable[[], None]) -> None:
        if callback not in self._observers:
            self._observers.append(callback)

    def unsubscribe(self, callback: Callable[[], None]) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def emit(self) -> None:
        """모든 구독자에게 변경을 알린다 (병합 없이 매번 1회)."""
        logger.debug("변경 알림: 구독자 %d개", len(self._observers))
        for callback in list(self._observers):
            callback()

    def __len__(self) -> int:
        return len(self._observers)
