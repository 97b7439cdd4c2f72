"""Invocation of the external ``sslcheck`` certificate checker."""

import logging
import shlex
import subprocess

from .config import Config
from .errors import CheckerError

logger = logging.getLogger(__name__)


def build_command(config: Config) -> list[str]:
    """Build the shell command running the checker against the hosts file.

    Args:
        config: Configuration holding the checker and hosts file paths.

    Returns:
        Argument list for ``subprocess.run``.
    """
    script = f"{shlex.quote(config.checker_path)} -file {shlex.quote(config.hosts_file)}"
    return ["/bin/sh", "-c", script]


def run_checker(config: Config) -> str:
    """Run the checker and return its standard output.

    Args:
        config: Configuration holding paths and the timeout.

    Returns:
        Captured standard output.

    Raises:
        CheckerError: If the checker exits non-zero, times out or cannot be started.
    """
    cmd = build_command(config)
    logger.debug("Running checker: %s", cmd)

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=config.checker_timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise CheckerError(
            f"Checker {cmd[-1]!r} timed out after {config.checker_timeout:g}s"
        ) from e
    except OSError as e:
        raise CheckerError(f"Could not execute checker {cmd[-1]!r}: {e}") from e

    if result.returncode != 0:
        stderr = result.stderr.strip() or "no error output"
        raise CheckerError(
            f"Checker {cmd[-1]!r} exited with status {result.returncode}: {stderr}"
        )

    logger.debug("Checker output:\n%s", result.stdout)
    return result.stdout
