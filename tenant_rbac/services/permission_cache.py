import logging
import threading
from typing import Any, Callable, Dict, Hashable

logger = logging.getLogger(__name__)


class PermissionCache:
    """
    "스코프 S에서 역할/사용자에게 실제로 부여된 권한"의 해석 결과를 메모이즈합니다.
    부분 무효화는 지원하지 않으며, invalidate()는 모든 항목을 버립니다.
    역할/권한/할당을 변경한 뒤에는 반드시 invalidate()를 호출해야 합니다.
    """

    def __init__(self):
        self._entries: Dict[Hashable, Any] = {}
        self._generation = 0
        self._lock = threading.Lock()

    def get_or_load(self, key: Hashable, loader: Callable[[], Any]) -> Any:
        """
        key의 값을 돌려주고, 없으면 loader()로 계산해 저장합니다.

        loader는 잠금 밖에서 실행됩니다. 실행 도중 invalidate()가 호출되었다면
        계산된 값은 이미 낡았을 수 있으므로 반환만 하고 저장하지 않습니다.
        """
        with self._lock:
            if key in self._entries:
                return self._entries[key]
            generation = self._generation

        value = loader()

        with self._lock:
            if generation == self._generation:
                self._entries.setdefault(key, value)
        return value

    def invalidate(self):
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._generation += 1
        logger.debug("Permission cache invalidated (%d entries dropped).", count)

    def __len__(self):
        with self._lock:
            return len(self._entries)
