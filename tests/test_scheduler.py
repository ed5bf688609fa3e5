from __future__ import annotations

import logging
import math

import pytest

from fracture2d.core.scheduler import StepScheduler


def test_substeps_follow_stability_heuristic() -> None:
    sched = StepScheduler(fps=60.0, kn=1e7, radius=0.02)

    expected = math.floor((1.0 / 60.0) / (7.5e3 * 0.02**2 / 1e7)) * 10
    assert sched.substeps_per_frame == expected == 555550
    assert sched.dt == pytest.approx(1.0 / 60.0 / 555550)


def test_batch_is_independent_of_substep_count() -> None:
    sched = StepScheduler(fps=60.0, kn=1e7, radius=0.02, batch_size=37)
    calls = []
    sched.run_batch(lambda: calls.append(1))

    assert len(calls) == 37
    assert sched.batch_time == pytest.approx(37 * sched.dt)
    assert sched.realtime_ratio == pytest.approx(37 / sched.substeps_per_frame)


def test_slow_batch_logs_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="fracture2d.core.scheduler"):
        StepScheduler(fps=60.0, kn=1e7, radius=0.02, batch_size=1000)
    assert "of real time" in caplog.text

    caplog.clear()
    with caplog.at_level(logging.WARNING, logger="fracture2d.core.scheduler"):
        StepScheduler(fps=60.0, kn=1e7, radius=0.02, batch_size=600000)
    assert caplog.text == ""


def test_invalid_parameters() -> None:
    with pytest.raises(ValueError, match="fps"):
        StepScheduler(fps=0.0, kn=1e7, radius=0.02)
    with pytest.raises(ValueError, match="kn"):
        StepScheduler(fps=60.0, kn=-1.0, radius=0.02)
    with pytest.raises(ValueError, match="batch_size"):
        StepScheduler(fps=60.0, kn=1e7, radius=0.02, batch_size=0)
    with pytest.raises(ValueError, match="elastic timescale"):
        StepScheduler(fps=60.0, kn=1.0, radius=1.0)
