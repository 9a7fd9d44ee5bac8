"""Test cases for loading settings from files, environment and command line."""

import logging
from pathlib import Path

import pytest

from autosettings import AutoSettings, IntSettingType, SourceLoadError, get_default_settings
from tests.conftest import cleanup_env_vars, set_env_vars, write_text_file, write_yaml_file


def test_yaml_file_is_flattened(settings: AutoSettings, temp_dir: Path):
    """Given a nested YAML file
    When loading it
    Then nested keys are joined with dots and lists are kept whole
    """
    config_path = temp_dir / "config.yaml"
    write_yaml_file(
        config_path,
        {
            "server": {"port": 8080, "host": "localhost", "tls": {"enabled": True}},
            "hosts": ["a", "b"],
            "empty": {},
        },
    )

    settings.with_config(config_path)

    assert settings.get_all() == {
        "server.port": "8080",
        "server.host": "localhost",
        "server.tls.enabled": "true",
        "hosts": "[a, b]",
    }
    assert settings.get_int("server.port") == 8080
    assert settings.get_bool("server.tls.enabled") is True


def test_yaml_scalars_keep_their_source_text(settings: AutoSettings, temp_dir: Path):
    config_path = temp_dir / "config.yaml"
    write_text_file(config_path, "enabled: yes\nversion: 1.10\nsize: 512kB\nnothing: ~\n")

    settings.with_config(config_path)

    assert settings.get_string("enabled") == "yes"
    assert settings.get_string("version") == "1.10"
    assert settings.get_bytes("size") == 512_000
    assert settings.get_string("nothing") == "~"


def test_json_file(settings: AutoSettings, temp_dir: Path):
    config_path = temp_dir / "config.json"
    write_text_file(config_path, '{"foo": {"bar": 10, "baz": [12]}}')

    settings.with_config(config_path)

    assert settings.get_int("foo.bar") == 10
    assert settings.get_list(IntSettingType, "foo.baz") == [12]


@pytest.mark.parametrize("file_name", [".env", "app.properties"])
def test_key_value_files(settings: AutoSettings, temp_dir: Path, file_name: str):
    config_path = temp_dir / file_name
    write_text_file(config_path, "# comment\nSERVER_PORT=2\nserver.host=localhost\n")

    settings.with_config(config_path)

    assert settings.get_int("serverPort") == 2
    assert settings.get_string("server.host") == "localhost"


def test_missing_file(settings: AutoSettings, temp_dir: Path):
    for name in ["missing.yaml", "missing.env"]:
        with pytest.raises(SourceLoadError, match="Failed to read file: "):
            settings.with_config(temp_dir / name)


def test_invalid_files(settings: AutoSettings, temp_dir: Path):
    list_path = temp_dir / "list.yaml"
    write_text_file(list_path, "- a\n- b\n")
    broken_path = temp_dir / "broken.yaml"
    write_text_file(broken_path, "foo: [1, 2\n")

    with pytest.raises(SourceLoadError, match="The top level must be a mapping"):
        settings.with_config(list_path)
    with pytest.raises(SourceLoadError, match="Failed to read file: "):
        settings.with_config(broken_path)


def test_file_that_is_not_utf8(settings: AutoSettings, temp_dir: Path):
    """Given config files containing bytes that are not valid UTF-8
    When loading them
    Then a SourceLoadError is raised instead of a decoding error
    """
    for name in ["config.yaml", "config.env"]:
        config_path = temp_dir / name
        config_path.write_bytes(b"a: \xff\xfe\n")

        with pytest.raises(SourceLoadError, match="Failed to read file: "):
            settings.with_config(config_path)


def test_empty_file(settings: AutoSettings, temp_dir: Path):
    config_path = temp_dir / "config.yaml"
    write_text_file(config_path, "")

    settings.with_config(config_path)

    assert settings.get_all() == {}


def test_first_config_takes_precedence(settings: AutoSettings, temp_dir: Path):
    first_path = temp_dir / "first.yaml"
    write_yaml_file(first_path, {"name": "first"})
    second_path = temp_dir / "second.yaml"
    write_yaml_file(second_path, {"name": "second", "other": "second"})

    settings.with_configs(first_path, second_path)

    assert settings.get_string("name") == "first"
    assert settings.get_string("other") == "second"


def test_discovered_configs(settings: AutoSettings, temp_dir: Path):
    """Given conventionally named config files and an unrelated YAML file
    When discovering configs in that directory
    Then only the conventional files are loaded and the first by name wins
    """
    write_yaml_file(temp_dir / "app.yaml", {"name": "app"})
    write_yaml_file(temp_dir / "config.yaml", {"name": "config", "fromConfig": "yes"})
    write_yaml_file(temp_dir / "other.yaml", {"unrelated": "value"})
    write_text_file(temp_dir / "config.txt", "ignored=true\n")

    settings.with_discovered_configs(temp_dir)

    assert settings.get_string("name") == "app"
    assert settings.get_bool("fromConfig") is True
    assert "unrelated" not in settings
    assert "ignored" not in settings


def test_environment_variables(settings: AutoSettings):
    set_env_vars(UNIT_TEST_ENV_VARIABLE="value")
    try:
        settings.with_environment_variables()
        assert settings.get_string("unitTestEnvVariable") == "value"
        assert settings.get_string("unit-test-env-variable") == "value"
    finally:
        cleanup_env_vars("UNIT_TEST_ENV_VARIABLE")


def test_command_line_arguments(settings: AutoSettings):
    settings.with_command_line_arguments(["-a", "b", "--server-port", "9090", "--verbose"])

    assert settings.get_string("a") == "b"
    assert settings.get_int("serverPort") == 9090
    assert settings.get_flag("verbose") is True
    assert settings.get_all() == {"a": "b", "server-port": "9090", "verbose": "true"}


def test_later_sources_override_earlier_ones(settings: AutoSettings, temp_dir: Path):
    config_path = temp_dir / "config.yaml"
    write_yaml_file(config_path, {"server": {"port": 8080, "host": "file"}})

    settings.with_config(config_path).with_map({"server.port": "8081"}).with_command_line_arguments(
        ["--server.port", "8082"]
    )

    assert settings.get_int("server.port") == 8082
    assert settings.get_string("server.host") == "file"


def test_clear_and_reload(settings: AutoSettings):
    settings.with_map({"a": "1"})
    settings.clear().with_map({"b": "2"})

    assert "a" not in settings
    assert settings.get_int("b") == 2


def test_resource_config(settings: AutoSettings):
    settings.with_resource_config("tests.data", "resource.yaml")

    assert settings.get_string("setting") == "value"
    assert settings.get_int("nested.number") == 3


def test_missing_resource(settings: AutoSettings):
    with pytest.raises(SourceLoadError, match="Failed to read resource: missing.yaml"):
        settings.with_resource_config("tests.data", "missing.yaml")


def test_loading_is_logged(settings: AutoSettings, caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.DEBUG, logger="autosettings")

    settings.with_map({"a": "1", "b": "2"}, "a test map")

    assert "Loaded 2 settings from a test map" in caplog.text


def test_default_settings(monkeypatch: pytest.MonkeyPatch, temp_dir: Path):
    """Given a working directory with a config file and an environment variable
    When getting the default settings
    Then both are loaded and the instance is shared
    """
    write_yaml_file(temp_dir / "application.yaml", {"appName": "demo"})
    monkeypatch.chdir(temp_dir)
    monkeypatch.setenv("UNIT_TEST_DEFAULT_VARIABLE", "env")
    get_default_settings.cache_clear()
    try:
        default_settings = get_default_settings()
        assert default_settings is get_default_settings()
        assert default_settings.get_string("app-name") == "demo"
        assert default_settings.get_string("unitTestDefaultVariable") == "env"
    finally:
        get_default_settings.cache_clear()
