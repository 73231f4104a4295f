"""Tests for the response accumulator."""

import pytest

from _engine.claude.accumulator import ResponseAccumulator
from _types.errors import AllocationError


@pytest.mark.parametrize(
    "chunks",
    [
        [],
        [b""],
        [b"", b"", b""],
        [b"{", b"\"", b"a", b"\"", b":", b"1", b"}"],
        [b"hello ", b"", b"world", b"\n"],
        [bytes(range(256)), b"\x00\x00", bytes(range(255, -1, -1))],
        [b"x" * 65536, b"y", b"z" * 10000],
    ],
)
def test_concatenates_chunks_in_order(chunks):
    accumulator = ResponseAccumulator()

    for chunk in chunks:
        assert accumulator.append(chunk) == len(chunk)

    assert accumulator.to_bytes() == b"".join(chunks)
    assert len(accumulator) == sum(len(c) for c in chunks)


def test_multibyte_character_split_across_chunks():
    encoded = "naïve ✓".encode("utf-8")
    accumulator = ResponseAccumulator()

    for i in range(len(encoded)):
        accumulator.append(encoded[i : i + 1])

    assert accumulator.to_text() == "naïve ✓"


def test_invalid_utf8_is_replaced():
    accumulator = ResponseAccumulator()
    accumulator.append(b"ok \xff")

    assert accumulator.to_text() == "ok �"


def test_reports_running_total():
    lines = []
    accumulator = ResponseAccumulator(debug=lines.append)

    accumulator.append(b"abc")
    accumulator.append(b"de")

    assert lines == [
        "Received 3 bytes from API, total size: 3",
        "Received 2 bytes from API, total size: 5",
    ]


class _FullBuffer(bytearray):
    def __iadd__(self, other):
        raise MemoryError


def test_growth_failure_raises_allocation_error():
    accumulator = ResponseAccumulator()
    accumulator._buffer = _FullBuffer(b"partial")

    with pytest.raises(AllocationError, match="Not enough memory"):
        accumulator.append(b"more")
