"""
CLI Utilities - Shared helper functions for command line operations.

This module provides formatted printing, payload loading with user-facing
error reporting, and reporting of file/clipboard sink results.
"""

from pathlib import Path
from typing import Optional, Type, TypeVar, Union

import click
from pydantic import BaseModel

from ..core.exceptions import SinkError, UpstreamFetchError
from ..core.result import SinkResult
from ..core.source import load_payload

M = TypeVar("M", bound=BaseModel)


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    """
    Print a warning message with a yellow alert symbol.

    Args:
        message (str): The warning message to display.
    """
    click.echo(click.style(f"⚠️  {message}", fg="yellow"), err=True)


def echo_info(message: str) -> None:
    """
    Print an informational message, dimmed.

    Args:
        message (str): The info message to display.
    """
    click.echo(click.style(f"   {message}", dim=True), err=True)


def echo_no_data() -> None:
    """Explain an empty (but valid) response."""
    echo_warning("No dependencies found for this component.")
    echo_info("The service returned a valid response with zero nodes.")


def load_or_report(path: Union[str, Path], model: Type[M]) -> Optional[M]:
    """
    Load a service response, printing the fetch error instead of raising.

    Returns:
        Optional[M]: The validated payload, or None if loading failed.
    """
    try:
        return load_payload(path, model)
    except UpstreamFetchError as e:
        echo_error(str(e))
        return None


def report_sink(result: SinkResult, success_message: str) -> bool:
    """
    Report a file or clipboard write. Failures are warnings, never fatal.
    """
    if result.is_ok():
        echo_success(success_message)
        return True

    error: SinkError = result.unwrap_err()
    echo_warning(f"{success_message} failed: {error.message}")
    return False
