"""Unit tests for the command line entry point."""

import io
import logging

import httpx
import pytest
import structlog

from classification_guess import main as cli
from classification_guess.mail.mail import Mail
from classification_guess.stage import GuessClassificationStage


SERVICE_URL = "http://localhost:9000/email/classification/predict"
GUESS = '{"mailboxName":"JAMES"}'


@pytest.fixture(autouse=True)
def restore_logging(monkeypatch, tmp_path):
    """main() reconfigures logging; put the previous setup back afterwards."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CLASSIFICATION_SERVICE_URL", raising=False)
    root_logger = logging.getLogger()
    handlers, level = list(root_logger.handlers), root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def serve(monkeypatch, mock_service):
    """Route the stage built by main() to a mock service."""
    def _serve(handler):
        client, seen = mock_service(handler)
        from_settings = GuessClassificationStage.from_settings

        def _from_settings(settings):
            return from_settings(settings, http_client=client)

        monkeypatch.setattr(cli.GuessClassificationStage, "from_settings", _from_settings)
        return seen

    return _serve


@pytest.fixture
def message_file(tmp_path, fixtures_dir):
    path = tmp_path / "message.eml"
    path.write_bytes((fixtures_dir / "simple_text.eml").read_bytes())
    return path


def test_header_added_to_output(serve, message_file, capsysbinary):
    serve(lambda request: httpx.Response(200, text=GUESS))

    exit_code = cli.main([str(message_file), "--service-url", SERVICE_URL])

    assert exit_code == 0
    output = Mail.from_bytes(capsysbinary.readouterr().out)
    assert output.get_all("X-Classification-Guess") == [GUESS]
    assert output.subject == "my subject"


def test_options_reach_the_stage(serve, message_file, capsysbinary):
    seen = serve(lambda request: httpx.Response(200, text=GUESS))

    cli.main([
        str(message_file),
        "--service-url", SERVICE_URL,
        "--header-name", "X-Guess",
        "--recipient", "a@james.org",
        "--recipient", "b@james.org",
    ])

    output = Mail.from_bytes(capsysbinary.readouterr().out)
    assert output.get_all("X-Guess") == [GUESS]
    assert seen[0].url.params.get_list("recipients") == ["a@james.org", "b@james.org"]


def test_message_unchanged_without_answer(serve, message_file, capsysbinary, refusing_handler):
    serve(refusing_handler)

    assert cli.main([str(message_file), "--service-url", SERVICE_URL]) == 0

    output = Mail.from_bytes(capsysbinary.readouterr().out)
    assert output.get_all("X-Classification-Guess") == []


def test_reads_stdin(serve, fixtures_dir, monkeypatch, capsysbinary):
    serve(lambda request: httpx.Response(200, text=GUESS))
    raw = (fixtures_dir / "simple_text.eml").read_bytes()
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(raw)))

    assert cli.main(["-", "--service-url", SERVICE_URL]) == 0

    output = Mail.from_bytes(capsysbinary.readouterr().out)
    assert output.get_all("X-Classification-Guess") == [GUESS]


def test_configuration_error_exit_code(message_file, capsysbinary):
    assert cli.main([str(message_file)]) == cli.EXIT_CONFIGURATION_ERROR
    assert b"Configuration error" in capsysbinary.readouterr().err


def test_invalid_timeout_rejected(message_file, capsysbinary):
    exit_code = cli.main([str(message_file), "--service-url", SERVICE_URL, "--timeout-ms", "0"])
    assert exit_code == cli.EXIT_CONFIGURATION_ERROR
