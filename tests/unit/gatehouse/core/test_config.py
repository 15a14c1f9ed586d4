import pytest
from pydantic import BaseModel, SecretStr

from gatehouse.core import Config, CoreSettings


class Service(BaseModel):
    URL: str = "http://localhost"
    RETRIES: int = 3
    TOKEN: SecretStr = SecretStr("s3cret")


class TestConfig:
    def test_load_defaults_with_attribute_access(self):
        config = Config.load(defaults={"SERVICE": Service().model_dump()})

        assert config.SERVICE.URL == "http://localhost"
        assert config.SERVICE.RETRIES == 3
        assert "URL" in config.SERVICE

    def test_missing_attribute(self):
        with pytest.raises(AttributeError):
            Config({}).MISSING

    def test_secret_values_masked(self):
        config = Config.load(defaults={"SERVICE": Service().model_dump()})

        assert config.SERVICE.TOKEN == Config.MASK
        assert config.get_secret("SERVICE", "TOKEN") == "s3cret"
        assert config.secret_paths() == ["SERVICE.TOKEN"]

    def test_environment_overrides_existing_sections(self, monkeypatch):
        monkeypatch.setenv("SERVICE__RETRIES", "5")
        monkeypatch.setenv("SERVICE__VERBOSE", "true")
        monkeypatch.setenv("UNKNOWN__KEY", "ignored")

        config = Config.load(defaults={"SERVICE": {"RETRIES": 3}})

        assert config.SERVICE.RETRIES == 5
        assert config.SERVICE.VERBOSE is True
        assert "UNKNOWN" not in config

    def test_precedence(self, monkeypatch):
        monkeypatch.setenv("SERVICE__URL", "http://env")

        config = Config.load(
            defaults={"SERVICE": {"URL": "http://default", "RETRIES": 1}},
            file_loader=lambda: {"SERVICE": {"RETRIES": 2}},
            overrides={"SERVICE": {"URL": "http://override"}},
        )

        assert config.SERVICE.URL == "http://override"
        assert config.SERVICE.RETRIES == 2

    def test_clone_with_overrides_leaves_original(self):
        config = Config.load(defaults={"SERVICE": Service().model_dump()})

        clone = config.clone_with_overrides({"SERVICE": {"RETRIES": 9}})

        assert clone.SERVICE.RETRIES == 9
        assert config.SERVICE.RETRIES == 3
        assert clone.get_secret("SERVICE", "TOKEN") == "s3cret"

    def test_model_layers_register_secret_paths(self):
        class Wrapper(BaseModel):
            SERVICE: Service = Service()

        config = Config(Wrapper(), apply_env=False)

        assert config.secret_paths() == ["SERVICE.TOKEN"]
        assert config.SERVICE.TOKEN == Config.MASK

    @pytest.mark.parametrize(
        "raw, expected",
        [("true", True), ("False", False), ("42", 42), ("-3", -3), ("2.5", 2.5), ("text", "text")],
    )
    def test_env_value_coercion(self, raw, expected):
        assert Config._coerce_env_value(raw) == expected


class TestCoreSettings:
    def test_env_prefix_and_nesting(self, monkeypatch, tmp_path):
        monkeypatch.setenv("GATEHOUSE_CORE__LOGGER__LOGGER_DIR", str(tmp_path))
        monkeypatch.setenv("GATEHOUSE_CORE__LOGGER__USE_STRUCTLOG", "true")

        settings = CoreSettings()

        assert settings.logger_dir() == str(tmp_path)
        assert settings.LOGGER.USE_STRUCTLOG is True

    def test_logger_dir_expands_user(self, monkeypatch):
        monkeypatch.delenv("GATEHOUSE_CORE__LOGGER__STRUCT_LOGGER_DIR", raising=False)

        path = CoreSettings().logger_dir(structured=True)

        assert not path.startswith("~")
