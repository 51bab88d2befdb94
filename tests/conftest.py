# -*- coding: utf-8 -*-
import json
import time
from collections import namedtuple
from typing import Any, Callable, List, Optional

import httpx
import pytest

from camunda_mcp.config.settings import CamundaConfig

BASE_URL = "http://camunda.test/engine-rest"


class FakeEngine:
    """httpx MockTransport that records every request and answers from a route table."""

    def __init__(self, responder: Optional[Callable[[httpx.Request], httpx.Response]] = None):
        self.requests: List[httpx.Request] = []
        self.responder = responder or (lambda request: httpx.Response(200, json=[]))
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def config() -> CamundaConfig:
    return CamundaConfig(base_url=BASE_URL, username="demo", password="demo", timeout=5)


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


class FakeProcess:
    """Stands in for ``psutil.Process`` with a fixed resident set size."""

    def __init__(self, rss_mb: float = 50, started: Optional[float] = None, error: Optional[Exception] = None):
        self.rss = int(rss_mb * 1024 * 1024)
        self.started = time.time() - 120 if started is None else started
        self.error = error

    def memory_info(self):
        if self.error is not None:
            raise self.error
        return pmem(rss=self.rss, vms=self.rss * 2)

    def create_time(self) -> float:
        return self.started


pmem = namedtuple("pmem", ["rss", "vms"])
