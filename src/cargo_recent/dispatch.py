"""Run a cargo command scoped to a single package."""

import logging
import subprocess
from typing import List, Sequence

from .errors import DownstreamFailureError

logger = logging.getLogger(__name__)


def build_cargo_command(args: Sequence[str], crate_name: str, cargo: str = "cargo") -> List[str]:
    """User arguments first, then ``--package <crate_name>``."""
    return [cargo, *args, "--package", crate_name]


def format_command(cmd: Sequence[str]) -> str:
    return "run: " + " ".join(cmd)


def run_cargo(cmd: List[str]) -> int:
    """Run cmd with inherited stdio and wait for it.

    Stdout and stderr are not captured so cargo keeps its colors and
    progress output.

    Raises:
        DownstreamFailureError: If the command can't start or exits non-zero
    """
    logger.debug("Executing: %s", cmd)
    try:
        result = subprocess.run(cmd, check=False)
    except OSError as e:
        raise DownstreamFailureError(cmd, reason=str(e))

    if result.returncode != 0:
        raise DownstreamFailureError(cmd, returncode=result.returncode)
    return result.returncode
