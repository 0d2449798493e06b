"""
싱글-플라이트 요청 병합

같은 키로 동시에 들어온 요청은 하나의 진행 중 작업(Task)을 공유합니다.
키 상태: 없음 -> 진행 중 -> (완료 | 실패 후 없음)
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Hashable
from typing import Generic, TypeVar

from avro_registry.common.logger import PipelineLogger

logger = PipelineLogger.get_logger("single_flight", "avro")

T = TypeVar("T")


class PendingRequests(Generic[T]):
    """
    키 단위 진행 중 요청 테이블

    조회 -> 등록 -> 호출 시작 사이에 await가 없으므로 이벤트 루프 안에서 원자적입니다.
    진행 중 항목은 성공/실패와 무관하게 작업이 끝나는 시점에 제거됩니다.
    """

    def __init__(self) -> None:
        self._pending: dict[Hashable, asyncio.Task[T]] = {}

    async def run(self, key: Hashable, factory: Callable[[], Awaitable[T]]) -> T:
        """
        키에 대한 진행 중 작업에 합류하거나 새로 시작합니다.

        Args:
            key: 요청 병합 키
            factory: 실제 요청 코루틴을 만드는 호출 가능 객체

        Returns:
            공유 작업의 결과 (실패 시 같은 예외가 모든 호출자에게 전파)
        """
        task = self._pending.get(key)
        if task is None:
            task = asyncio.ensure_future(self._execute(key, factory))
            task.add_done_callback(self._retrieve_exception)
            self._pending[key] = task
        else:
            logger.debug(f"진행 중 요청에 합류: key={key}")

        # 한 호출자의 취소가 다른 호출자의 공유 작업을 취소하지 않도록 shield
        return await asyncio.shield(task)

    async def _execute(self, key: Hashable, factory: Callable[[], Awaitable[T]]) -> T:
        try:
            return await factory()
        finally:
            self._pending.pop(key, None)

    @staticmethod
    def _retrieve_exception(task: asyncio.Task[T]) -> None:
        # 모든 호출자가 취소된 뒤 실패해도 "exception was never retrieved" 경고가 남지 않도록 소비
        if not task.cancelled():
            task.exception()

    def is_pending(self, key: Hashable) -> bool:
        return key in self._pending

    def __len__(self) -> int:
        return len(self._pending)
