"""Command line entry point: print the attendance grid of an eldood poll."""
import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from fetcher.poll_fetcher import PollFetcher
from processor.errors import (
    BadStatus,
    ConfigError,
    InvalidDateFormat,
    MalformedResponse,
    TransportError,
    UsageError,
)
from processor.poll_decoder import PollDecoder
from report.renderer import RenderConfig, ReportRenderer

USAGE = "usage: eldood [--no-color] TOKEN"

# Attributes every LogRecord carries; anything else was passed as extra
_RECORD_ATTRS = set(vars(
    logging.LogRecord('', 0, '', 0, '', None, None)
)) | {'message', 'asctime'}


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }
        log_data.update(
            (key, value) for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
        )

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(log_level: str = 'WARNING') -> None:
    """
    Configure logging with JSON formatter on stderr.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.WARNING))


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises UsageError instead of exiting with 2."""

    def error(self, message: str) -> None:
        raise UsageError(message)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = _ArgumentParser(
        prog='eldood',
        description='Print the attendance grid of an eldood poll.'
    )
    parser.add_argument('token', help='poll token')
    parser.add_argument(
        '--no-color',
        action='store_true',
        help='disable ANSI colours'
    )
    return parser.parse_args(argv)


def use_color(no_color_flag: bool) -> bool:
    """Colour is on only for a terminal, without --no-color or NO_COLOR."""
    if no_color_flag or os.environ.get('NO_COLOR'):
        return False
    return sys.stdout.isatty()


def read_timeout() -> int:
    """
    Read the HTTP timeout from TIMEOUT_SECONDS.

    Raises:
        ConfigError: If the value is not a positive integer
    """
    raw = os.environ.get('TIMEOUT_SECONDS', '30')
    try:
        timeout = int(raw)
    except ValueError:
        raise ConfigError(f"TIMEOUT_SECONDS must be an integer, got {raw!r}") from None
    if timeout <= 0:
        raise ConfigError(f"TIMEOUT_SECONDS must be positive, got {timeout}")
    return timeout


def main(argv: Optional[List[str]] = None) -> int:
    """
    Fetch a poll and print its attendance grid.

    Args:
        argv: Command line arguments without the program name

    Returns:
        Process exit code: 0 on success, 1 on any error
    """
    # Read configuration from environment variables
    log_level = os.environ.get('LOG_LEVEL', 'WARNING')

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    try:
        args = parse_args(argv)
        fetcher = PollFetcher(timeout=read_timeout())
        renderer = ReportRenderer(RenderConfig(color=use_color(args.no_color)))

        body = fetcher.fetch_poll(args.token)
        poll = PollDecoder().decode(body)
        renderer.render_to(poll, sys.stdout)
    except UsageError as e:
        logger.debug(f"Usage error: {e}")
        print(USAGE, file=sys.stderr)
        return 1
    except ConfigError as e:
        logger.info(f"Invalid configuration: {e}")
        print(f"config: {e}", file=sys.stderr)
        return 1
    except TransportError as e:
        logger.info(f"Fetching poll failed: {e}")
        print(f"http get: {e}", file=sys.stderr)
        return 1
    except MalformedResponse as e:
        logger.info(f"Malformed poll document: {e}", extra={'field': e.field})
        print(f"json decode: {e}", file=sys.stderr)
        return 1
    except BadStatus as e:
        logger.info(f"Poll rejected: {e}", extra={'status': e.status})
        print(f"bad status (is the token '{args.token}' correct?)", file=sys.stderr)
        return 1
    except InvalidDateFormat as e:
        logger.info(f"Invalid poll date {e.date!r}: {e}")
        print(f"parse date {e.date}: {e}", file=sys.stderr)
        return 1

    logger.info(f"Printed report for poll '{poll.name}'")
    return 0


if __name__ == '__main__':
    sys.exit(main())
