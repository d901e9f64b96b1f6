"""Run child processes in the foreground."""

import subprocess
from collections.abc import Sequence


def run_in_foreground(argv: Sequence[str]) -> int:
    """Run argv with inherited streams and wait until it exits.

    Ctrl-C reaches the child through the terminal's process group, so a
    KeyboardInterrupt here only means the child was signalled too. Keep
    waiting so the child can finish its own shutdown and report its status.

    Returns:
        The child's returncode (negative N if killed by signal N)

    Raises:
        FileNotFoundError: If argv[0] cannot be found
    """
    with subprocess.Popen(argv) as process:
        while True:
            try:
                return process.wait()
            except KeyboardInterrupt:
                continue
