"""
Shared fixtures for unit tests.
"""

from collections import defaultdict
from typing import Any

import pytest

from core.backend_interface import BackendGateway, ConversionRequest, GatewayCall
from core.orchestrator import ConversionOrchestrator


class FakeGateway(BackendGateway):
    """
    Scripted backend: every operation returns a pending GatewayCall that the
    test settles by hand.
    """

    def __init__(self) -> None:
        super().__init__()
        self.calls: dict[str, list[tuple[tuple[Any, ...], GatewayCall]]] = defaultdict(list)
        self.shutdown_called = False

    def _call(self, operation: str, *args: Any) -> GatewayCall:
        call = GatewayCall(operation)
        self.calls[operation].append((args, call))
        return call

    def count(self, operation: str) -> int:
        return len(self.calls[operation])

    def last(self, operation: str) -> GatewayCall:
        return self.calls[operation][-1][1]

    def last_args(self, operation: str) -> tuple[Any, ...]:
        return self.calls[operation][-1][0]

    def select_output_folder(self) -> GatewayCall:
        return self._call("select_output_folder")

    def select_input_file(self) -> GatewayCall:
        return self._call("select_input_file")

    def run_conversion(self, request: ConversionRequest) -> GatewayCall:
        return self._call("run_conversion", request)

    def fetch_logs(self) -> GatewayCall:
        return self._call("fetch_logs")

    def clear_logs(self) -> GatewayCall:
        return self._call("clear_logs")

    def open_folder(self, path: str) -> GatewayCall:
        return self._call("open_folder", path)

    def shutdown(self) -> None:
        self.shutdown_called = True


@pytest.fixture
def gateway(qapp):
    """Scripted backend gateway."""
    return FakeGateway()


@pytest.fixture
def orchestrator(gateway):
    """Orchestrator wired to the scripted gateway with long poll intervals."""
    orch = ConversionOrchestrator(gateway, idle_poll_ms=60000, active_poll_ms=30000)
    yield orch
    orch.log_sync.stop()
