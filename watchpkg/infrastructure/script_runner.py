"""Run a notification script as a child process"""

import os
import subprocess
from typing import Mapping, Optional

from watchpkg.infrastructure.logging import get_logger

logger = get_logger(__name__)


def format_arguments(name: str, origin: str) -> str:
    """Quote a package name and origin the way diagnostics show them"""
    return f'"{name}", "{origin}"'


class ScriptRunner:
    """
    Spawns ``script name origin`` and waits for it to exit.

    The child inherits the environment. There is no timeout: a script that
    never exits blocks the caller until it does.
    """

    def __init__(self, env: Optional[Mapping[str, str]] = None):
        # None inherits os.environ at spawn time
        self.env = dict(env) if env is not None else None

    def run(self, script: str, name: str, origin: str) -> bool:
        """
        Invoke a script for one package change.

        Args:
            script: Path of the executable
            name: Package name
            origin: Package origin

        Returns:
            True if the script exited with status zero, False otherwise
        """
        argv = [script, name, origin]
        arguments = format_arguments(name, origin)

        try:
            # Popen.wait retries on EINTR (PEP 475)
            with subprocess.Popen(argv, env=self.env, close_fds=True) as process:
                returncode = process.wait()
        except (OSError, ValueError) as e:
            # ValueError: arguments Popen cannot pass, such as embedded NULs
            errno = getattr(e, "errno", None)
            logger.error(
                "script_spawn_failed",
                script=script,
                arguments=arguments,
                error=os.strerror(errno) if errno else str(e),
            )
            return False

        if returncode != 0:
            logger.error(
                "script_failed",
                message=f'"{script}" returned with error for: {arguments}',
                script=script,
                arguments=arguments,
                returncode=returncode,
            )
            return False

        logger.debug("script_succeeded", script=script, arguments=arguments)
        return True

    __call__ = run
