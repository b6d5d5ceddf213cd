import pytest

from stirling_init.errors import HandoffError
from stirling_init.handoff import exec_command


@pytest.fixture
def mock_execvp(mocker):
    return mocker.patch("stirling_init.handoff.os.execvp")


def test_exec_replaces_process_with_command(mock_execvp, mocker):
    flush_mock = mocker.patch("stirling_init.handoff.flush_logging")

    exec_command(["java", "-jar", "/app.jar"])

    flush_mock.assert_called_once()
    mock_execvp.assert_called_once_with("java", ["java", "-jar", "/app.jar"])


def test_exec_logs_command_line(mock_execvp, mocker):
    logger = mocker.Mock()

    exec_command(["sh", "-c", "echo hi"], current_logger=logger)

    message = logger.info.call_args.args[0]
    assert 'Starting main application: sh -c "echo hi"' in message


def test_missing_command_exits_127(mock_execvp):
    mock_execvp.side_effect = FileNotFoundError(2, "No such file or directory")

    with pytest.raises(HandoffError) as excinfo:
        exec_command(["no-such-binary"])

    assert excinfo.value.exit_code == 127
    assert "no-such-binary" in excinfo.value.detail


def test_not_executable_exits_126(mock_execvp):
    mock_execvp.side_effect = PermissionError(13, "Permission denied")

    with pytest.raises(HandoffError) as excinfo:
        exec_command(["./app.jar"])

    assert excinfo.value.exit_code == 126


def test_other_os_error_exits_1(mock_execvp):
    mock_execvp.side_effect = OSError(8, "Exec format error")

    with pytest.raises(HandoffError) as excinfo:
        exec_command(["./broken"])

    assert excinfo.value.exit_code == 1


def test_empty_command_is_rejected(mock_execvp):
    with pytest.raises(HandoffError):
        exec_command([])

    mock_execvp.assert_not_called()
