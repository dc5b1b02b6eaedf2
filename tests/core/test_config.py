"""
Tests for configuration loading, environment overrides and logging setup.
"""
import logging

import pytest
import yaml
from pydantic import ValidationError

from soilsim.core.config import (
    InfiltrationConfig,
    LoggingConfig,
    SoilSimConfig,
    get_config,
    set_config,
)
from soilsim.core.exceptions import ConfigurationError
from soilsim.core.logging_setup import configure_logging
from soilsim.physics.infiltration import InfiltrationSolver


@pytest.fixture(autouse=True)
def reset_config():
    set_config(None)
    yield
    set_config(None)


class TestSoilSimConfig:

    def test_defaults(self):
        config = SoilSimConfig()

        assert config.diffusion.stability_limit == 0.5
        assert config.infiltration.tolerance == 1e-6
        assert config.infiltration.max_iterations == 100
        assert config.infiltration.min_derivative == 1e-9
        assert config.logging.log_level == "INFO"
        assert set(config.model_dump()) == {"diffusion", "infiltration", "logging"}

    def test_nested_environment_override(self, monkeypatch):
        monkeypatch.setenv("SOILSIM_INFILTRATION__MAX_ITERATIONS", "25")

        config = SoilSimConfig()

        assert config.infiltration.max_iterations == 25

    def test_invalid_values_rejected(self):
        with pytest.raises(ValidationError):
            InfiltrationConfig(tolerance=-1.0)
        with pytest.raises(ValidationError):
            SoilSimConfig(infiltration={"min_derivative": 1.5})

    def test_yaml_round_trip(self, tmp_path):
        path = tmp_path / "conf" / "soilsim.yaml"
        original = SoilSimConfig(infiltration={"max_iterations": 40}, diffusion={"stability_limit": 0.25})

        original.to_yaml(path)
        loaded = SoilSimConfig.from_yaml(path)

        assert loaded.infiltration.max_iterations == 40
        assert loaded.diffusion.stability_limit == 0.25
        assert loaded.model_dump() == original.model_dump()

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SoilSimConfig.from_yaml(tmp_path / "absent.yaml")

    def test_from_yaml_invalid_content(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"infiltration": {"tolerance": -1}}), encoding="utf-8")

        with pytest.raises(ConfigurationError):
            SoilSimConfig.from_yaml(path)

    def test_from_yaml_requires_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            SoilSimConfig.from_yaml(path)

    def test_from_yaml_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert SoilSimConfig.from_yaml(path).infiltration.max_iterations == 100


class TestGlobalConfig:

    def test_get_config_is_singleton(self):
        assert get_config() is get_config()

    def test_get_config_from_yaml(self, tmp_path):
        path = tmp_path / "soilsim.yaml"
        SoilSimConfig(infiltration={"max_iterations": 12}).to_yaml(path)

        assert get_config(path).infiltration.max_iterations == 12

    def test_solvers_pick_up_global_config(self):
        set_config(SoilSimConfig(infiltration={"max_iterations": 1}))

        result = InfiltrationSolver().solve(1e-5, 0.1, 0.2, [86400.0])

        assert result.iterations.tolist() == [1]
        assert not result.all_converged


class TestConfigureLogging:

    def test_sets_package_logger_level(self):
        package_logger = logging.getLogger("soilsim")
        previous = package_logger.level
        try:
            configure_logging(LoggingConfig(log_level="DEBUG"))
            assert package_logger.level == logging.DEBUG
        finally:
            package_logger.setLevel(previous)
