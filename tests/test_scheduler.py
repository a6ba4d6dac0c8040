import pytest

from physics_lab.constants import MAX_FRAME_DT
from physics_lab.host import ManualFrameHost
from physics_lab.scheduler import FrameScheduler, RunState


def _scheduler(**kwargs):
    host = ManualFrameHost()
    steps = []
    return host, FrameScheduler(host, steps.append, **kwargs), steps


def test_starts_idle_and_does_not_subscribe():
    host, sched, steps = _scheduler()
    assert sched.state is RunState.IDLE
    assert host.pending == 0
    host.tick()
    assert steps == []


def test_play_is_idempotent():
    host, sched, steps = _scheduler()
    sched.play()
    sched.play()
    sched.play()
    assert sched.state is RunState.RUNNING
    assert host.pending == 1
    host.tick(1.0)
    host.tick(1.0 + 1 / 60)
    assert host.pending == 1
    assert steps == [pytest.approx(1 / 60)]


def test_first_frame_only_records_timestamp():
    host, sched, steps = _scheduler()
    sched.play()
    host.tick(10.0)
    assert steps == []
    host.tick(10.02)
    assert steps == [pytest.approx(0.02)]
    assert sched.frames == 1


def test_stalled_host_is_clamped():
    host, sched, steps = _scheduler()
    sched.play()
    host.tick(0.0)
    host.tick(5.0)
    assert steps == [MAX_FRAME_DT]
    host.tick(5.0)
    assert steps[-1] == 0.0


def test_custom_max_dt():
    host, sched, steps = _scheduler(max_dt=0.032)
    sched.play()
    host.tick(0.0)
    host.tick(1.0)
    assert steps == [0.032]


def test_pause_unsubscribes_and_freezes():
    host, sched, steps = _scheduler()
    sched.play()
    host.run(duration=0.5)
    n = len(steps)
    sched.pause()
    assert sched.state is RunState.PAUSED
    assert host.pending == 0
    host.run(duration=0.5)
    assert len(steps) == n


def test_resume_does_not_simulate_the_pause():
    host, sched, steps = _scheduler()
    sched.play()
    host.tick(0.0)
    host.tick(0.01)
    sched.pause()
    host.tick(3.0)
    sched.play()
    host.tick(3.01)
    assert steps == [pytest.approx(0.01)]
    host.tick(3.02)
    assert steps[-1] == pytest.approx(0.01)


def test_pause_outside_running_is_noop():
    host, sched, steps = _scheduler()
    sched.pause()
    assert sched.state is RunState.IDLE
    sched.play()
    sched.pause()
    sched.pause()
    assert sched.state is RunState.PAUSED


@pytest.mark.parametrize("prepare", ["idle", "running", "paused"])
def test_stop_from_any_state(prepare):
    host, sched, steps = _scheduler()
    if prepare in ("running", "paused"):
        sched.play()
        host.run(duration=0.1)
    if prepare == "paused":
        sched.pause()
    sched.stop()
    assert sched.state is RunState.IDLE
    assert host.pending == 0
    # Reusable afterwards
    sched.play()
    assert host.pending == 1


def test_step_callback_may_pause():
    host = ManualFrameHost()
    sched = None

    def on_step(dt):
        sched.pause()

    sched = FrameScheduler(host, on_step)
    sched.play()
    host.tick()
    host.tick()
    assert sched.state is RunState.PAUSED
    assert host.pending == 0


def test_host_rejects_time_going_backwards():
    host = ManualFrameHost(start=5.0)
    with pytest.raises(ValueError):
        host.tick(4.0)


def test_host_cancel_is_tolerant():
    host = ManualFrameHost()
    handle = host.request_frame(lambda ts: None)
    host.cancel_frame(handle)
    host.cancel_frame(handle)
    host.cancel_frame(999)
    assert host.pending == 0
