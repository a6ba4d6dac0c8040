import pytest

from physics_lab.history import HistoryBuffer, SamplingGate
from physics_lab.types import HistorySample


def test_eviction_keeps_most_recent():
    """Capacity 100, 150 pushes: 100 retained, the first being the 51st pushed."""
    buf = HistoryBuffer(capacity=100)
    times = [0.1 * i for i in range(1, 151)]
    for t in times:
        buf.push(HistorySample(t, {"y": t * 2}))
    seq = buf.to_sequence()
    assert len(buf) == 100
    assert seq[0].time == times[50]
    assert seq[-1].time == times[-1]
    assert [s.time for s in seq] == times[50:]


@pytest.mark.parametrize("capacity,extra", [(1, 1), (5, 3), (100, 50), (150, 1)])
def test_bound_holds(capacity, extra):
    buf = HistoryBuffer(capacity)
    for i in range(capacity + extra):
        buf.push(HistorySample(float(i), {}))
    assert len(buf) == capacity
    assert [s.time for s in buf] == [float(i) for i in range(extra, capacity + extra)]


def test_empty_buffer_is_readable():
    buf = HistoryBuffer(10)
    assert buf.to_sequence() == ()
    assert buf.to_records() == []
    assert buf.latest is None


def test_push_must_advance_in_time():
    buf = HistoryBuffer(10)
    buf.push(HistorySample(1.0, {"v": 1.0}))
    with pytest.raises(ValueError):
        buf.push(HistorySample(1.0, {"v": 2.0}))
    with pytest.raises(ValueError):
        buf.push(HistorySample(0.5, {"v": 2.0}))
    assert len(buf) == 1


def test_records_and_clear():
    buf = HistoryBuffer(3)
    buf.push(HistorySample(0.05, {"ke": 1.0, "gpe": 2}))
    assert buf.to_records() == [{"time": 0.05, "ke": 1.0, "gpe": 2.0}]
    buf.clear()
    assert len(buf) == 0
    buf.push(HistorySample(0.0, {}))


def test_sample_values_are_read_only():
    s = HistorySample(1.0, {"ke": 3})
    assert s.values["ke"] == 3.0
    with pytest.raises(TypeError):
        s.values["ke"] = 4.0


def test_invalid_capacity():
    with pytest.raises(ValueError):
        HistoryBuffer(0)


def test_gate_admits_one_per_bucket():
    gate = SamplingGate(20.0)
    assert gate.admit(0.0)
    assert not gate.admit(0.01)
    assert not gate.admit(0.049)
    assert gate.admit(0.06)
    assert not gate.admit(0.07)
    assert gate.admit(0.5)

    gate.reset()
    assert gate.admit(0.0)


def test_gate_thins_frame_rate_to_sample_rate():
    """60 frames per second sampled at 20 Hz: 20 samples per simulated second."""
    gate = SamplingGate(20.0)
    admitted = sum(gate.admit(i / 60) for i in range(1, 121))
    assert 39 <= admitted <= 41


def test_gate_rejects_bad_rate():
    with pytest.raises(ValueError):
        SamplingGate(0.0)
