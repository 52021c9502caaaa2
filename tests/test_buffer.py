# tests/test_buffer.py
import pytest

from estimators.basic.stats.analyze import analyze
from estimators.basic.stats.buffer import CircularBuffer
from scenarios.s1_synthetic.sine_wave import generate_sine_wave
from utils.samples.sample_input import Sample


def _push(buf: CircularBuffer, n: int) -> list[Sample]:
    pushed = [Sample(time=float(i), value=float(i) * 10.0) for i in range(n)]
    for s in pushed:
        buf.update(s)
    return pushed


def test_partial_fill_preserves_order() -> None:
    buf = CircularBuffer(capacity=5)
    pushed = _push(buf, 3)
    assert len(buf) == buf.count == 3
    assert not buf.is_full
    assert buf.snapshot() == pushed


@pytest.mark.parametrize("extra", [0, 1, 4, 5, 12])
def test_overwrite_keeps_last_capacity_samples(extra: int) -> None:
    buf = CircularBuffer(capacity=5)
    pushed = _push(buf, 5 + extra)
    assert buf.is_full
    assert buf.snapshot() == pushed[-5:]


def test_span() -> None:
    buf = CircularBuffer(capacity=4)
    assert buf.span == 0.0
    _push(buf, 10)
    assert buf.span == pytest.approx(3.0)


def test_snapshot_is_a_copy() -> None:
    buf = CircularBuffer(capacity=3)
    _push(buf, 3)
    snap = buf.snapshot()
    snap.clear()
    assert len(buf.snapshot()) == 3


def test_analyze_buffer() -> None:
    buf = CircularBuffer(capacity=1000)
    assert buf.analyze_buffer() == (0.0, 0.0)

    wave = generate_sine_wave(440, 1, 1, 1000)
    for s in wave:
        buf.update(s)
    assert buf.analyze_buffer() == pytest.approx(analyze(wave))


def test_clear() -> None:
    buf = CircularBuffer(capacity=3)
    _push(buf, 7)
    buf.clear()
    assert buf.count == 0
    assert buf.snapshot() == []
    pushed = _push(buf, 2)
    assert buf.snapshot() == pushed


@pytest.mark.parametrize("capacity", [0, -3])
def test_invalid_capacity(capacity: int) -> None:
    with pytest.raises(ValueError):
        CircularBuffer(capacity)


def test_analyze_buffer_reads_ring_storage_directly(monkeypatch: pytest.MonkeyPatch) -> None:
    wave = generate_sine_wave(50, 2, 1, 1000)
    buf = CircularBuffer(capacity=300)
    for s in wave:
        buf.update(s)

    def no_snapshot() -> list[Sample]:
        raise AssertionError("analyze_buffer must not build Sample objects")

    monkeypatch.setattr(buf, "snapshot", no_snapshot)
    assert buf.analyze_buffer() == pytest.approx(analyze(wave[-300:]))


def test_arrays_are_ordered_copies() -> None:
    buf = CircularBuffer(capacity=4)
    _push(buf, 6)
    times, values = buf.arrays()
    assert times.tolist() == [2.0, 3.0, 4.0, 5.0]
    assert values.tolist() == [20.0, 30.0, 40.0, 50.0]
    times[:] = -1.0
    assert [s.time for s in buf.snapshot()] == [2.0, 3.0, 4.0, 5.0]


def test_integral_float_capacity_accepted() -> None:
    assert CircularBuffer(4.0).capacity == 4  # type: ignore[arg-type]


@pytest.mark.parametrize("capacity", [2.7, float("nan"), True, "many"])
def test_non_integral_capacity_rejected(capacity: object) -> None:
    with pytest.raises(ValueError):
        CircularBuffer(capacity)  # type: ignore[arg-type]
