"""
목적: 읽기 공유/쓰기 배타 잠금을 제공한다.
설명: 백엔드 인스턴스 집합처럼 조회가 잦고 갱신이 드문 공유 상태를 보호한다.
디자인 패턴: 리더-라이터 잠금
참조: src/tarot_reading/integrations/interpreter/pool.py
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class ReadWriteLock:
    """쓰기 우선 리더-라이터 잠금.

    대기 중인 쓰기가 있으면 새 읽기는 쓰기가 끝날 때까지 기다린다.
    재진입은 지원하지 않는다.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        with self._condition:
            while self._writer or self._waiting_writers > 0:
                self._condition.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._condition:
            self._readers -= 1
            if self._readers == 0:
                self._condition.notify_all()

    def acquire_write(self) -> None:
        with self._condition:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers > 0:
                    self._condition.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._condition:
            self._writer = False
            self._condition.notify_all()

    @contextmanager
    def read(self) -> Iterator[None]:
        """with 문으로 읽기 잠금을 잡는다."""

        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Iterator[None]:
        """with 문으로 쓰기 잠금을 잡는다."""

        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
