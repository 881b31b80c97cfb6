"""Tests for the rs-mule run_executable command."""
from unittest.mock import MagicMock, patch

import pytest
import requests
import yaml
from click.testing import CliRunner

from rsmule import __version__
from rsmule.cli import main
from rsmule.errors import RightScriptNotFound


AUTH_ARGS = [
    "--rs-auth-hash", "email:foo@bar.baz",
    "--rs-auth-hash", "password:secret",
    "--rs-auth-hash", "account_id:12345",
]


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def mock_client():
    with patch("rsmule.right_api.client.RightApiClient") as client_cls:
        yield client_cls


@pytest.fixture
def mock_run():
    with patch("rsmule.run_executable.RunExecutable.run_executable") as run:
        run.return_value = ["/api/clouds/1/instances/abc123"]
        yield run


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_run_executable_with_auth_hash(runner, mock_client, mock_run):
    result = runner.invoke(main, ["run_executable", "cookbook::recipe", "--tags", "foo", *AUTH_ARGS])

    assert result.exit_code == 0, result.output
    assert "1 instance(s)" in result.output
    assert "/api/clouds/1/instances/abc123" in result.output

    mock_client.assert_called_once()
    kwargs = mock_client.call_args.kwargs
    assert kwargs["email"] == "foo@bar.baz"
    assert kwargs["password"] == "secret"
    assert kwargs["account_id"] == "12345"

    tags, executable, options = mock_run.call_args.args
    assert tags == ["foo"]
    assert executable == "cookbook::recipe"
    assert options.executable_type.value == "auto"
    assert options.right_script_revision == "latest"
    assert options.match_all is True


def test_run_executable_with_auth_file(runner, mock_client, mock_run, tmp_path):
    auth_file = tmp_path / "auth.yaml"
    auth_file.write_text(yaml.dump({"email": "file@bar.baz", "password": "pw", "account_id": 1}))

    result = runner.invoke(main, [
        "run_executable", "cookbook::recipe", "--tags", "foo", "--rs-auth-file", str(auth_file),
    ])

    assert result.exit_code == 0, result.output
    assert mock_client.call_args.kwargs["email"] == "file@bar.baz"


def test_all_options_passed_through(runner, mock_client, mock_run):
    result = runner.invoke(main, [
        "run_executable", "Deploy App",
        "--tags", "role:web", "--tags", "env:prod",
        "--tag-match-strategy", "any",
        "--executable-type", "right_script_name",
        "--right-script-revision", "3",
        "--inputs", "APP_VERSION:text:1.2.3",
        "--inputs", "DB:cred:DB_PASS",
        "--update-inputs", "current_instance",
        "--update-inputs", "deployment",
        *AUTH_ARGS,
    ])

    assert result.exit_code == 0, result.output
    tags, executable, options = mock_run.call_args.args
    assert tags == ["role:web", "env:prod"]
    assert executable == "Deploy App"
    assert options.match_all is False
    assert options.executable_type.value == "right_script_name"
    assert options.right_script_revision == "3"
    assert options.inputs == {"APP_VERSION": "text:1.2.3", "DB": "cred:DB_PASS"}
    assert [t.value for t in options.update_inputs] == ["current_instance", "deployment"]


def test_missing_auth_exits_non_zero(runner, mock_client, mock_run):
    result = runner.invoke(main, ["run_executable", "cookbook::recipe", "--tags", "foo"])

    assert result.exit_code == 1
    assert "authentication" in result.output
    mock_client.assert_not_called()
    mock_run.assert_not_called()


def test_invalid_auth_file_exits_non_zero(runner, mock_client, tmp_path):
    result = runner.invoke(main, [
        "run_executable", "cookbook::recipe", "--tags", "foo",
        "--rs-auth-file", str(tmp_path / "missing.yaml"),
    ])

    assert result.exit_code == 1
    assert "not found" in result.output
    mock_client.assert_not_called()


def test_tags_required(runner, mock_client):
    result = runner.invoke(main, ["run_executable", "cookbook::recipe", *AUTH_ARGS])

    assert result.exit_code == 2
    assert "--tags" in result.output


def test_unknown_executable_type_rejected(runner, mock_client, mock_run):
    result = runner.invoke(main, [
        "run_executable", "barbaz", "--tags", "foo", "--executable-type", "bogus", *AUTH_ARGS,
    ])

    assert result.exit_code != 0
    mock_client.assert_not_called()
    mock_run.assert_not_called()


def test_malformed_auth_hash_rejected(runner, mock_client):
    result = runner.invoke(main, [
        "run_executable", "barbaz", "--tags", "foo", "--rs-auth-hash", "no-colon",
    ])

    assert result.exit_code == 2
    assert "NAME:VALUE" in result.output


def test_right_script_not_found_exits_non_zero(runner, mock_client, mock_run):
    mock_run.side_effect = RightScriptNotFound("No RightScripts with the name (barbaz) were found.")

    result = runner.invoke(main, ["run_executable", "barbaz", "--tags", "foo", *AUTH_ARGS])

    assert result.exit_code == 1
    assert "No RightScripts with the name (barbaz)" in result.output


def test_http_error_exits_non_zero(runner, mock_client, mock_run):
    mock_run.side_effect = requests.HTTPError("422 Client Error")

    result = runner.invoke(main, ["run_executable", "barbaz", "--tags", "foo", *AUTH_ARGS])

    assert result.exit_code == 1
    assert "422" in result.output


def test_login_failure_exits_non_zero(runner, mock_client, mock_run):
    mock_client.side_effect = requests.HTTPError("401 Client Error")

    result = runner.invoke(main, ["run_executable", "barbaz", "--tags", "foo", *AUTH_ARGS])

    assert result.exit_code == 1
    assert "Login failed" in result.output
    mock_run.assert_not_called()


def test_no_matches(runner, mock_client, mock_run):
    mock_run.return_value = []

    result = runner.invoke(main, ["run_executable", "cookbook::recipe", "--tags", "foo", *AUTH_ARGS])

    assert result.exit_code == 0
    assert "No instances matched" in result.output


def test_end_to_end_with_mocked_client(runner, mock_client):
    """The command wires the client into RunExecutable."""
    instance = MagicMock()
    instance.href = "/api/clouds/1/instances/abc123"
    client = mock_client.return_value
    client.by_tag.return_value = [MagicMock(links=[{"rel": "resource", "href": instance.href}])]
    client.resource.return_value = instance

    result = runner.invoke(main, [
        "run_executable", "/api/right_scripts/abc123", "--tags", "foo",
        "--inputs", "FOO:text:bar", *AUTH_ARGS,
    ])

    assert result.exit_code == 0, result.output
    client.by_tag.assert_called_once_with(resource_type="instances", tags=["foo"], match_all=True)
    instance.run_executable.assert_called_once_with(
        {"right_script_href": "/api/right_scripts/abc123", "inputs": {"FOO": "text:bar"}}
    )


def test_log_file_written(runner, mock_client, mock_run, tmp_path):
    log_file = tmp_path / "logs" / "rs-mule.log"

    result = runner.invoke(main, [
        "--log-file", str(log_file),
        "run_executable", "cookbook::recipe", "--tags", "foo", *AUTH_ARGS,
    ])

    assert result.exit_code == 0, result.output
    assert log_file.exists()
