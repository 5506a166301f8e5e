"""
Tests for the load / must_load / validate entry points.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Annotated

import pytest
from pydantic import BaseModel

import envbind
from envbind import Env, EnvValidationError, InvalidDefaultError, IPv4, NotARecordError, load, must_load


class DatabaseConfig(BaseModel):
    host: Annotated[str, Env("required,name='DATABASE_URL'")]
    port: Annotated[int, Env("optional,default='8080'")]


class ServerConfig(BaseModel):
    listen_addr: Annotated[IPv4, Env("optional,default='0.0.0.0'")]
    port: Annotated[int, Env("optional,default='8080'")]
    debug: Annotated[bool, Env("optional,default='false'")]
    log_level: Annotated[str, Env("optional,default='info',values='debug,info,warn,error'")]
    allowed_ips: Annotated[list[IPv4], Env("optional,separator=',',default='127.0.0.1,192.168.1.1'")]
    ports: Annotated[list[int], Env("optional,separator='|',default='80|443'")]
    features: Annotated[list[bool], Env("optional,separator=';',default='true;false;true'")]


class TestLoad:
    """Test load() end to end."""

    def test_database_scenario(self):
        """Test the bound instance for a minimal environment."""
        config = load(DatabaseConfig, {"DATABASE_URL": "db:5432"})

        assert config == DatabaseConfig(host="db:5432", port=8080)

    def test_missing_required(self):
        """Test an empty environment raises with the missing label."""
        with pytest.raises(EnvValidationError) as exc_info:
            load(DatabaseConfig, {})

        assert exc_info.value.missing == ["host (DATABASE_URL)"]
        assert str(exc_info.value) == "Missing: [host (DATABASE_URL)]"

    def test_invalid_only_rendering(self):
        """Test the rendering omits the missing line when nothing is missing."""
        with pytest.raises(EnvValidationError) as exc_info:
            load(DatabaseConfig, {"DATABASE_URL": "db", "PORT": "http"})

        assert str(exc_info.value) == "Invalid: [port (PORT)]"

    def test_validation_error_is_value_error(self):
        """Test data problems can be handled as ValueError."""
        with pytest.raises(ValueError):
            load(DatabaseConfig, {})

    def test_server_defaults(self):
        """Test every default is applied when the environment is empty."""
        config = load(ServerConfig, {})

        assert config.listen_addr == "0.0.0.0"
        assert config.port == 8080
        assert config.debug is False
        assert config.log_level == "info"
        assert config.allowed_ips == ["127.0.0.1", "192.168.1.1"]
        assert config.ports == [80, 443]
        assert config.features == [True, False, True]

    def test_server_environment(self):
        """Test environment values replace the defaults."""
        env = {
            "LISTEN_ADDR": "10.1.2.3",
            "PORT": "9090",
            "DEBUG": "1",
            "LOG_LEVEL": "debug",
            "ALLOWED_IPS": "10.0.0.1",
            "PORTS": "8080",
            "FEATURES": "no",
        }
        config = load(ServerConfig, env)

        assert config.listen_addr == "10.1.2.3"
        assert config.port == 9090
        assert config.debug is True
        assert config.log_level == "debug"
        assert config.allowed_ips == ["10.0.0.1"]
        assert config.ports == [8080]
        assert config.features == [False]

    def test_model_instance_accepted(self):
        """Test load() accepts a model instance and returns a new one."""
        template = DatabaseConfig.model_construct()
        config = load(template, {"DATABASE_URL": "db:1"})

        assert config is not template
        assert config.host == "db:1"

    def test_reads_process_environment_by_default(self, monkeypatch):
        """Test the host environment is used when none is passed."""
        monkeypatch.setenv("DATABASE_URL", "from-process:5432")
        monkeypatch.delenv("PORT", raising=False)

        config = load(DatabaseConfig)

        assert config.host == "from-process:5432"
        assert config.port == 8080

    def test_repeated_loads_are_identical(self):
        """Test loading twice from the same environment gives equal instances."""
        env = {"DATABASE_URL": "db:5432", "PORT": "5000"}

        assert load(DatabaseConfig, env) == load(DatabaseConfig, env)


class TestSchemaErrors:
    """Test schema defects surface from the entry points."""

    def test_non_record(self):
        """Test non-model input is rejected."""
        with pytest.raises(NotARecordError):
            load({"host": str}, {})

    def test_bad_default_is_fatal_for_any_environment(self):
        """Test a default outside the allowed values fails even when a valid value is present."""
        class Model(BaseModel):
            port: Annotated[int, Env("optional,values='8000,8080,9000',default='3000'")]

        with pytest.raises(InvalidDefaultError):
            load(Model, {"PORT": "8080"})

    def test_schema_errors_are_not_value_errors(self):
        """Test must_load does not turn schema errors into SystemExit."""
        class Model(BaseModel):
            ratio: Annotated[float, Env()]

        with pytest.raises(envbind.UnknownKindError):
            must_load(Model, {"RATIO": "0.5"})


class TestMustLoad:
    """Test the fail-fast entry point."""

    def test_returns_instance(self):
        """Test a valid environment returns the instance."""
        assert must_load(DatabaseConfig, {"DATABASE_URL": "db"}).host == "db"

    def test_exits_on_error(self):
        """Test problems stop the program with the aggregated message."""
        with pytest.raises(SystemExit) as exc_info:
            must_load(DatabaseConfig, {})

        assert str(exc_info.value.code) == "Configuration error: Missing: [host (DATABASE_URL)]"
        assert isinstance(exc_info.value.__cause__, EnvValidationError)


class TestValidateEntryPoint:
    """Test validate() without binding."""

    def test_report(self):
        """Test the report exposes missing and invalid lists."""
        report = envbind.validate(DatabaseConfig, {"PORT": "x"})

        assert report.missing == ["host (DATABASE_URL)"]
        assert [item.label for item in report.invalid] == ["port (PORT)"]


class TestConcurrentLoads:
    """Test independent loads from several threads."""

    def test_threads_do_not_interfere(self):
        """Test each thread gets the instance for its own environment."""
        envs = [{"DATABASE_URL": f"db{i}:5432", "PORT": str(5000 + i)} for i in range(32)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            configs = list(pool.map(lambda env: load(DatabaseConfig, env), envs))

        assert [c.host for c in configs] == [f"db{i}:5432" for i in range(32)]
        assert [c.port for c in configs] == [5000 + i for i in range(32)]
