import sys
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from ecs_exec import _create_aws_client, main, parse_args
from ecs_exec.core.config import DEFAULT_MAX_WORKERS, ExecConfig
from ecs_exec.core.errors import MalformedGroupError


def test_parse_args_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))

    config = parse_args([])

    assert config == ExecConfig(cache_path=tmp_path / "ecs-exec.json")
    assert config.max_workers == DEFAULT_MAX_WORKERS
    assert config.service_name == ""


@pytest.mark.parametrize("flag", ["-n", "--name"])
def test_parse_args_service_name(flag):
    assert parse_args([flag, "checkout"]).service_name == "checkout"


def test_parse_args_all_options():
    config = parse_args(
        [
            "-v",
            "--healthy-only",
            "--refresh-cache",
            "--cache-file",
            "/tmp/shells.json",
            "--max-workers",
            "4",
            "--profile",
            "prod",
            "--region",
            "eu-west-1",
            "--dry-run",
        ]
    )

    assert config.verbose is True
    assert config.require_healthy is True
    assert config.refresh_cache is True
    assert config.cache_path == Path("/tmp/shells.json")
    assert config.max_workers == 4
    assert config.profile == "prod"
    assert config.region == "eu-west-1"
    assert config.dry_run is True


def test_parse_args_rejects_zero_workers():
    with pytest.raises(SystemExit):
        parse_args(["--max-workers", "0"])


@patch("ecs_exec.configure_logging")
@patch("ecs_exec.run")
@patch("ecs_exec._create_aws_client")
def test_main_successful_flow(mock_create_client, mock_run, _mock_logging) -> None:
    """Test main function runs the walk with the parsed configuration."""
    with patch.object(sys, "argv", ["ecs-exec", "-n", "checkout", "--profile", "my-profile"]):
        main()

    mock_create_client.assert_called_once_with("my-profile", None, DEFAULT_MAX_WORKERS)
    ecs_service, config = mock_run.call_args.args
    assert ecs_service.ecs_client is mock_create_client.return_value
    assert config.service_name == "checkout"


@patch("ecs_exec.configure_logging")
@patch("ecs_exec._create_aws_client")
@patch("ecs_exec.console")
def test_main_aws_error(mock_console, mock_create_client, _mock_logging) -> None:
    """Test main function with AWS connection error."""
    mock_create_client.side_effect = Exception("No credentials found")

    with patch.object(sys, "argv", ["ecs-exec"]), pytest.raises(SystemExit) as exc_info:
        main()

    assert exc_info.value.code == 1
    mock_console.print.assert_any_call("\n❌ Error: No credentials found", style="red")
    mock_console.print.assert_any_call("Make sure your AWS credentials are configured.", style="dim")


@patch("ecs_exec.configure_logging")
@patch("ecs_exec.run")
@patch("ecs_exec._create_aws_client")
@patch("ecs_exec.console")
def test_main_malformed_group_exits_nonzero(mock_console, _mock_create_client, mock_run, _mock_logging) -> None:
    mock_run.side_effect = MalformedGroupError("arn:task/abc", "broken")

    with patch.object(sys, "argv", ["ecs-exec"]), pytest.raises(SystemExit) as exc_info:
        main()

    assert exc_info.value.code == 1
    mock_console.print.assert_any_call("\n❌ Error: Invalid service group 'broken' on task arn:task/abc", style="red")


@patch("ecs_exec.configure_logging")
@patch("ecs_exec.run")
@patch("ecs_exec._create_aws_client")
@patch("ecs_exec.console")
def test_main_keyboard_interrupt(_mock_console, _mock_create_client, mock_run, _mock_logging) -> None:
    mock_run.side_effect = KeyboardInterrupt

    with patch.object(sys, "argv", ["ecs-exec"]), pytest.raises(SystemExit) as exc_info:
        main()

    assert exc_info.value.code == 130


@patch("ecs_exec.configure_logging")
@patch("ecs_exec.run")
@patch("ecs_exec._create_aws_client")
def test_main_verbose_enables_debug_logging(_mock_create_client, _mock_run, mock_logging) -> None:
    with patch.object(sys, "argv", ["ecs-exec", "-v"]):
        main()

    mock_logging.assert_called_once_with(True)


def test_create_aws_client_without_profile():
    """Test _create_aws_client without profile returns default client."""
    with patch("ecs_exec.boto3.client") as mock_client:
        _create_aws_client(None)
        assert mock_client.call_count == 1
        args, kwargs = mock_client.call_args
        assert args[0] == "ecs"
        assert "config" in kwargs


def test_create_aws_client_with_profile():
    """Test _create_aws_client with profile uses Session."""
    mock_session = Mock()
    mock_client = Mock()
    mock_session.client.return_value = mock_client

    with patch("ecs_exec.boto3.Session", return_value=mock_session) as mock_session_class:
        result = _create_aws_client("my-profile", "eu-west-1", 32)

        mock_session_class.assert_called_once_with(profile_name="my-profile")
        args, kwargs = mock_session.client.call_args
        assert args[0] == "ecs"
        assert kwargs["region_name"] == "eu-west-1"
        assert kwargs["config"].max_pool_connections == 32
        assert result == mock_client
