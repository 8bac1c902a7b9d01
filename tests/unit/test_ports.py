from __future__ import annotations

import contextlib
import socket

import pytest

from variant_builder import ports
from variant_builder.errors import ConfigurationError, ResourceExhaustedError


@contextlib.contextmanager
def _occupied():
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        s.bind(("0.0.0.0", 0))
        s.listen(1)
        yield s.getsockname()[1]
    finally:
        s.close()


def test_zero_asks_the_os() -> None:
    assert ports.allocate_port(0) > 0


def test_free_preferred_port_is_kept() -> None:
    with _occupied() as taken:
        pass
    # released again; nothing else should grab it this quickly
    assert ports.allocate_port(taken) == taken


def test_busy_port_falls_back_to_a_later_one() -> None:
    with _occupied() as taken:
        got = ports.allocate_port(taken, attempts=10)
    assert taken < got < taken + 10


def test_no_free_port_raises() -> None:
    with _occupied() as taken:
        with pytest.raises(ResourceExhaustedError):
            ports.allocate_port(taken, attempts=1)


def test_resolved_port_is_computed_once(monkeypatch) -> None:
    calls: list[int] = []

    def fake_allocate(preferred: int) -> int:
        calls.append(preferred)
        return preferred + 7

    ports.resolved_port.cache_clear()
    monkeypatch.setattr(ports, "allocate_port", fake_allocate)
    try:
        assert ports.resolved_port(40000) == 40007
        assert ports.resolved_port(40000) == 40007
        assert calls == [40000]
    finally:
        ports.resolved_port.cache_clear()


@pytest.mark.parametrize("preferred", [-1, 65536])
def test_out_of_range_port_is_rejected(preferred: int) -> None:
    with pytest.raises(ConfigurationError):
        ports.allocate_port(preferred)
