import socket

import pytest

from tablecfg.adapters import client_settings as cs
from tablecfg.adapters.dynamodb import create_dynamodb_client
from tablecfg.config import Config
from tablecfg.core.errors import ClientConfigurationError, ConfigurationWarning


def _config(**values):
    environ = {
        "TABLECFG_DYNAMODB_CREDENTIAL_ACCESS_KEY": "AKIDEXAMPLE",
        "TABLECFG_DYNAMODB_CREDENTIAL_SECRET_KEY": "secret",
    }
    environ.update({f"TABLECFG_DYNAMODB_{key}": value for key, value in values.items()})
    return Config(environ=environ)


def test_blank_optional_settings_are_skipped():
    settings = cs.load_client_settings(
        _config(LOCAL_ADDRESS="", ENDPOINT="   ", REGION="", REGION_OVERRIDE="")
    )

    assert settings.credentials.access_key == "AKIDEXAMPLE"
    assert settings.local_address is None
    assert settings.endpoint_url is None
    assert settings.region is None
    assert settings.signing_region is None


def test_blank_endpoint_keeps_default_transport():
    settings = cs.load_client_settings(_config(ENDPOINT="", REGION="us-east-1"))

    client = create_dynamodb_client(settings)

    assert client.meta.endpoint_url == "https://dynamodb.us-east-1.amazonaws.com"
    assert client.meta.region_name == "us-east-1"


def test_endpoint_override_is_used():
    settings = cs.load_client_settings(_config(ENDPOINT="http://localhost:8000", REGION="us-east-1"))

    client = create_dynamodb_client(settings)

    assert client.meta.endpoint_url == "http://localhost:8000"


def test_signing_region_override_keeps_endpoint():
    settings = cs.load_client_settings(_config(REGION="us-east-1", REGION_OVERRIDE="us-west-2"))

    client = create_dynamodb_client(settings)

    assert client.meta.endpoint_url == "https://dynamodb.us-east-1.amazonaws.com"
    assert client.meta.region_name == "us-west-2"


def test_enum_style_region_is_normalized():
    settings = cs.load_client_settings(_config(REGION="US_WEST_2"))

    assert settings.region == "us-west-2"


def test_unknown_region_is_fatal():
    with pytest.raises(ClientConfigurationError):
        cs.load_client_settings(_config(REGION="MOON_BASE_1"))


@pytest.mark.parametrize("missing", ["CREDENTIAL_ACCESS_KEY", "CREDENTIAL_SECRET_KEY"])
def test_missing_credentials_are_fatal(missing):
    with pytest.raises(ClientConfigurationError):
        cs.load_client_settings(_config(**{missing: ""}))


def test_unresolvable_local_address_only_warns(monkeypatch, caplog):
    def fail(host):
        raise socket.gaierror(-2, "Name or service not known")

    monkeypatch.setattr(cs.socket, "gethostbyname", fail)

    with pytest.warns(ConfigurationWarning):
        settings = cs.load_client_settings(_config(LOCAL_ADDRESS="no-such-host.invalid"))

    assert settings.local_address is None
    assert "Unable to resolve local address" in caplog.text


def test_local_address_is_resolved(monkeypatch):
    monkeypatch.setattr(cs.socket, "gethostbyname", lambda host: "10.0.0.5")

    settings = cs.load_client_settings(_config(LOCAL_ADDRESS="bootstrap-host"))

    assert settings.local_address == "10.0.0.5"


def test_table_spec_from_config():
    spec = cs.load_table_spec(
        _config(
            TABLE_NAME="StagingProperties",
            READ_CAPACITY="5",
            WRITE_CAPACITY="5",
            WAIT_TIMEOUT="60",
            POLL_INTERVAL="2",
            RECREATE_TABLE="true",
        )
    )

    assert spec.table_name == "StagingProperties"
    assert spec.read_capacity_units == spec.write_capacity_units == 5
    assert (spec.wait_timeout, spec.poll_interval) == (60.0, 2.0)
    assert spec.recreate is True


def test_table_spec_defaults():
    spec = cs.load_table_spec(Config(environ={}))

    assert spec.table_name == "DynamoDbCasProperties"
    assert spec.partition_key == "id"
    assert spec.read_capacity_units == spec.write_capacity_units == 10
    assert spec.recreate is False


@pytest.fixture
def no_aws_region(monkeypatch, tmp_path):
    for name in ("AWS_DEFAULT_REGION", "AWS_REGION", "AWS_PROFILE", "AWS_ENDPOINT_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "missing-config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "missing-credentials"))


def test_blank_region_falls_back_to_default(no_aws_region):
    settings = cs.load_client_settings(_config(REGION=""))

    client = create_dynamodb_client(settings)

    assert client.meta.region_name == "us-east-1"
    assert client.meta.endpoint_url == "https://dynamodb.us-east-1.amazonaws.com"


def test_endpoint_only_builds_client(no_aws_region):
    settings = cs.load_client_settings(_config(ENDPOINT="http://localhost:8000"))

    client = create_dynamodb_client(settings)

    assert client.meta.endpoint_url == "http://localhost:8000"
    assert client.meta.region_name == "us-east-1"


def test_blank_region_uses_aws_environment_region(no_aws_region, monkeypatch):
    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")

    client = create_dynamodb_client(cs.load_client_settings(_config(REGION="")))

    assert client.meta.region_name == "eu-west-1"


@pytest.mark.parametrize(
    "key, value",
    [
        ("READ_CAPACITY", "ten"),
        ("WRITE_CAPACITY", "2.5"),
        ("WAIT_TIMEOUT", "soon"),
        ("POLL_INTERVAL", "0"),
        ("READ_CAPACITY", "-1"),
    ],
)
def test_malformed_table_numbers_are_configuration_errors(key, value):
    with pytest.raises(ClientConfigurationError, match=key):
        cs.load_table_spec(_config(**{key: value}))
