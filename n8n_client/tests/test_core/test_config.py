import pytest
import json
import os
from pathlib import Path
from n8n_client.core.config import Config, ConfigError

@pytest.fixture
def sample_config():
    """Fixture providing a sample configuration"""
    return {
        "api": {
            "base_url": "https://n8n.example.com",
            "api_key": "file-key",
            "timeout": 10.0
        },
        "retry": {
            "max_retries": 5,
            "base_delay": 0.2,
            "max_delay": 2.0
        },
        "logging": {
            "level": "DEBUG",
            "file": "n8n_client.log"
        }
    }

@pytest.fixture
def config_file(tmp_path, sample_config):
    """Fixture creating a temporary config file"""
    config_path = tmp_path / "test_config.json"
    with open(config_path, "w") as f:
        json.dump(sample_config, f)
    return config_path

def test_config_loading(config_file):
    """Test basic configuration loading from file"""
    config = Config(config_file)
    assert config.get("api.base_url") == "https://n8n.example.com"
    assert config.get("api.api_key") == "file-key"
    assert config.get("retry.max_retries") == 5
    assert config.get("logging.level") == "DEBUG"
    # Untouched defaults survive a partial file
    assert config.get("api.use_session_auth") is False

def test_config_defaults():
    """Test default configuration values"""
    config = Config()
    assert config.get("api.base_url") == ""
    assert config.get("api.timeout") == 30.0
    assert config.get("api.insecure_skip_verify") is False
    assert config.get("retry.max_retries") == 3
    assert config.get("retry.base_delay") == 0.1
    assert config.get("retry.max_delay") == 5.0
    assert config.get("logging.level") == "INFO"
    assert config.get("nonexistent.key", default="default") == "default"

def test_provider_environment_variables():
    """Test the N8N_* variables shared with other n8n tooling"""
    os.environ["N8N_BASE_URL"] = "http://localhost:5678"
    os.environ["N8N_API_KEY"] = "env-key"
    os.environ["N8N_EMAIL"] = "admin@example.com"
    os.environ["N8N_PASSWORD"] = "secret"
    os.environ["N8N_COOKIE_FILE"] = "/tmp/n8n.cookies"
    os.environ["N8N_USE_SESSION_AUTH"] = "true"
    os.environ["N8N_INSECURE_SKIP_VERIFY"] = "TRUE"

    config = Config()

    assert config.get("api.base_url") == "http://localhost:5678"
    assert config.get("api.api_key") == "env-key"
    assert config.get("api.email") == "admin@example.com"
    assert config.get("api.password") == "secret"
    assert config.get("api.cookie_file") == "/tmp/n8n.cookies"
    assert config.get("api.use_session_auth") is True
    assert config.get("api.insecure_skip_verify") is True

@pytest.mark.parametrize("value", ["1", "yes", "false", ""])
def test_provider_flags_only_accept_true(value):
    """Test flags are off unless spelled true"""
    os.environ["N8N_USE_SESSION_AUTH"] = value
    assert Config().get("api.use_session_auth") is False

def test_provider_credentials_stay_strings():
    """Test numeric looking credentials are not converted"""
    os.environ["N8N_API_KEY"] = "12345"
    assert Config().get("api.api_key") == "12345"

def test_prefixed_credentials_stay_strings():
    """Test numeric looking credentials set through generic overrides are not converted"""
    os.environ["N8N_CLIENT_API_API_KEY"] = "12345"
    os.environ["N8N_CLIENT_API_EMAIL"] = "1e3"
    os.environ["N8N_CLIENT_API_PASSWORD"] = "true"

    config = Config()

    assert config.get("api.api_key") == "12345"
    assert config.get("api.email") == "1e3"
    assert config.get("api.password") == "true"

def test_environment_variables():
    """Test generic environment variable overrides"""
    os.environ["N8N_CLIENT_RETRY_MAX_RETRIES"] = "6"
    os.environ["N8N_CLIENT_LOGGING_LEVEL"] = "DEBUG"

    config = Config()

    assert config.get("retry.max_retries") == 6, "N8N_CLIENT_RETRY_MAX_RETRIES not properly loaded"
    assert config.get("logging.level") == "DEBUG", "N8N_CLIENT_LOGGING_LEVEL not properly loaded"

def test_config_type_conversion():
    """Test configuration value type conversion"""
    os.environ["N8N_CLIENT_LOGGING_CONSOLE_OUTPUT"] = "false"
    os.environ["N8N_CLIENT_RETRY_MAX_RETRIES"] = "4"
    os.environ["N8N_CLIENT_API_TIMEOUT"] = "12.5"

    config = Config()
    assert config.get("logging.console_output") is False
    assert isinstance(config.get("retry.max_retries"), int)
    assert config.get("api.timeout") == 12.5

def test_file_overrides_environment(config_file):
    """Test values from a config file win over the environment"""
    os.environ["N8N_API_KEY"] = "env-key"
    os.environ["N8N_EMAIL"] = "admin@example.com"

    config = Config(config_file)

    assert config.get("api.api_key") == "file-key"
    assert config.get("api.email") == "admin@example.com"

def test_config_validation():
    """Test configuration validation rules"""
    with pytest.raises(ConfigError):
        Config().validate({"api": {"timeout": 0}})

    with pytest.raises(ConfigError):
        Config().validate({"retry": {"max_retries": -1}})

    with pytest.raises(ConfigError):
        Config().validate({"retry": {"base_delay": 1.0, "max_delay": 0.5}})

    Config().validate({"retry": {"max_retries": 0, "base_delay": 0, "max_delay": 0}})

def test_invalid_values_in_environment():
    """Test validation also covers values taken from the environment"""
    os.environ["N8N_CLIENT_API_TIMEOUT"] = "-1"
    with pytest.raises(ConfigError):
        Config()

def test_config_update():
    """Test configuration updates"""
    config = Config()
    config.update({
        "retry": {
            "max_retries": 7,
            "base_delay": 0.5
        }
    })
    assert config.get("retry.max_retries") == 7
    assert config.get("retry.base_delay") == 0.5
    assert config.get("retry.max_delay") == 5.0

def test_nested_config_access():
    """Test accessing nested configuration values"""
    config = Config()
    config.set("deep.nested.value", 42)
    assert config.get("deep.nested.value") == 42

    config.update({"another": {"nested": {"key": "value"}}})
    assert config.get("another.nested.key") == "value"
    assert config.get("api.base_url.missing") is None

def test_invalid_config_file(tmp_path):
    """Test handling of invalid configuration file"""
    with pytest.raises(ConfigError):
        Config(Path("nonexistent_config.json"))

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(ConfigError):
        Config(broken)

def test_config_serialization(sample_config, tmp_path):
    """Test configuration serialization and deserialization"""
    config = Config()
    config.update(sample_config)

    save_path = tmp_path / "saved_config.json"
    config.save(save_path)

    loaded_config = Config(save_path)
    assert loaded_config.get("api.base_url") == config.get("api.base_url")
    assert loaded_config.get("retry.max_retries") == config.get("retry.max_retries")
