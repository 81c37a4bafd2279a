"""
Command line entry point: run one message through the stage.

    classification-guess message.eml --recipient to@example.com > guessed.eml

Reads the message (or stdin with "-"), adds the classification guess header
when the service answers in time, and writes the message to stdout.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

import structlog

from classification_guess.config import load_settings
from classification_guess.exceptions import ConfigurationError
from classification_guess.logging_config import configure_logging
from classification_guess.mail.mail import Mail
from classification_guess.stage import GuessClassificationStage


EXIT_CONFIGURATION_ERROR = 2


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="classification-guess",
        description="Add a classification guess header to an email message",
    )
    parser.add_argument("message", help="Path to an RFC 5322 message, or - for stdin")
    parser.add_argument(
        "--recipient",
        action="append",
        default=None,
        help="Envelope recipient (repeatable); defaults to the header recipients",
    )
    parser.add_argument("--service-url", help="Overrides CLASSIFICATION_SERVICE_URL")
    parser.add_argument("--header-name", help="Overrides CLASSIFICATION_HEADER_NAME")
    parser.add_argument("--timeout-ms", type=int, help="Overrides CLASSIFICATION_TIMEOUT_IN_MS")
    return parser.parse_args(argv)


def read_message(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    overrides = {
        key: value
        for key, value in (
            ("SERVICE_URL", args.service_url),
            ("HEADER_NAME", args.header_name),
            ("TIMEOUT_IN_MS", args.timeout_ms),
        )
        if value is not None
    }
    try:
        settings = load_settings(**overrides)
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return EXIT_CONFIGURATION_ERROR

    configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
    logger = structlog.get_logger(__name__)

    mail = Mail.from_bytes(read_message(args.message), recipients=args.recipient)
    with GuessClassificationStage.from_settings(settings) as stage:
        stage.process(mail)

    logger.info("Message processed", guessed=bool(mail.get_all(settings.HEADER_NAME)))
    sys.stdout.buffer.write(mail.as_bytes())
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
