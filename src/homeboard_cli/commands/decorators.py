"""Decorators for command functions."""

import asyncio
import functools
import time
import traceback
from collections.abc import Callable

import typer
from pydantic import ValidationError as PydanticValidationError

from homeboard_cli.exceptions import AppError
from homeboard_cli.utils.exit_codes import ERROR_GENERAL, ERROR_INVALID_ARGS
from homeboard_cli.utils.logger import get_logger
from homeboard_cli.utils.ui.formatters import format_error


def _describe_validation_error(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "input"
    return f"Invalid {field}: {first['msg']}"


def command_wrapper(func: Callable):
    """Run a command (sync or async), log it, and map errors to exit codes."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if asyncio.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            logger.info("command completed: %s (%.3fs)", cmd, time.monotonic() - start)
            return result

        except AppError as e:
            logger.error(
                "command failed: %s (%.3fs) - %s", cmd, time.monotonic() - start, e
            )
            format_error(str(e))
            raise typer.Exit(code=e.exit_code) from e

        except PydanticValidationError as e:
            message = _describe_validation_error(e)
            logger.error(
                "command failed: %s (%.3fs) - %s", cmd, time.monotonic() - start, message
            )
            format_error(message)
            raise typer.Exit(code=ERROR_INVALID_ARGS) from e

        except typer.Exit:
            raise

        except Exception as e:
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                time.monotonic() - start,
                str(e),
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=ERROR_GENERAL) from e

    return wrapper
