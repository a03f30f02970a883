import logging
import subprocess
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


def capture_stdout(executable: str, args: Sequence[str], timeout: Optional[float] = None) -> Optional[str]:
    """
    Runs `executable` with `args` and returns its stdout as text.

    Returns None when the binary can't be launched, exits non-zero or times out.
    Bytes that are not valid text are replaced rather than failing the probe.
    """
    command = [executable, *args]
    try:
        completed = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding='utf-8',
            errors='replace',
            timeout=timeout,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"Unable to run {command}: {e}")
        return None

    if completed.returncode != 0:
        logger.debug(f"{command} exited with status {completed.returncode}: {completed.stderr.strip()}")
        return None
    return completed.stdout
