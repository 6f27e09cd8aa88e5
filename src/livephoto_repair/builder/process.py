"""Running the external encoders."""

import logging
import subprocess
from typing import List

from livephoto_repair.common import ToolExecutionError, ToolNotFoundError

logger = logging.getLogger(__name__)


def run_tool(command: List[str], timeout: float) -> subprocess.CompletedProcess:
    """
    Run an external tool and fail loudly on a non-zero exit.

    Args:
        command: Argument list, tool name first
        timeout: Seconds before the process is killed

    Returns:
        The completed process

    Raises:
        ToolNotFoundError: If the executable is not on PATH
        ToolExecutionError: If the tool times out or exits non-zero
    """
    tool = command[0]
    logger.debug(f"Running tool: {{'command': {command!r}}}")

    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            encoding='utf-8',
            errors='replace',
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise ToolNotFoundError(f"{tool} not found on PATH", tool=tool) from e
    except subprocess.TimeoutExpired as e:
        raise ToolExecutionError(f"{tool} timed out after {timeout}s", tool=tool, timeout=timeout) from e

    if result.returncode != 0:
        stderr = (result.stderr or result.stdout or '').strip()
        logger.error(f"Tool failed: {{'tool': {tool!r}, 'returncode': {result.returncode}, 'stderr': {stderr[:500]!r}}}")
        raise ToolExecutionError(
            f"{tool} exited with code {result.returncode}: {stderr[:200]}",
            tool=tool,
            returncode=result.returncode,
            stderr=stderr,
        )

    return result
