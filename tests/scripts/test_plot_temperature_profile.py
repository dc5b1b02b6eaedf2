"""
Tests for the step scheduling in scripts/plot_temperature_profile.py.
"""
import importlib.util
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "plot_temperature_profile.py"


@pytest.fixture(scope="module")
def script():
    spec = importlib.util.spec_from_file_location("plot_temperature_profile", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestStepsToReach:

    def test_default_half_hour_steps(self, script):
        assert script._steps_to_reach(6 * 3600.0, 0.0, 1800.0) == 12
        assert script._steps_to_reach(24 * 3600.0, 12 * 3600.0, 1800.0) == 24

    def test_step_longer_than_interval_still_advances(self, script):
        """dt of 15 h with a 6 h target would round to zero steps"""
        assert script._steps_to_reach(6 * 3600.0, 0.0, 15 * 3600.0) == 1

    def test_elapsed_time_tracks_rounding(self, script):
        """With dt = 5000 s the profiles land at the nearest whole step, not at 6/12/24 h"""
        dt = 5000.0
        elapsed_s = 0.0
        labels = []
        for target_h in (6, 12, 24):
            steps = script._steps_to_reach(target_h * script.SECONDS_PER_HOUR, elapsed_s, dt)
            elapsed_s += steps * dt
            labels.append(elapsed_s / script.SECONDS_PER_HOUR)

        # 21600/5000 -> 4 steps, then (43200-20000)/5000 -> 5, then (86400-45000)/5000 -> 8
        assert labels == pytest.approx([20000 / 3600, 45000 / 3600, 85000 / 3600])
