import os
import platform
from typing import Mapping, Optional


def detect_system_context(environ: Optional[Mapping[str, str]] = None, cwd: Optional[str] = None) -> str:
    """
    Describe the local shell environment for the model.

    Returns:
        e.g. ``OS: Linux 6.1.0; Shell: /bin/zsh; Working directory: /home/me``
    """
    environ = os.environ if environ is None else environ
    shell = environ.get("SHELL") or environ.get("COMSPEC") or "unknown"
    parts = [
        f"OS: {platform.system()} {platform.release()}".strip(),
        f"Shell: {shell}",
        f"Working directory: {cwd or os.getcwd()}",
    ]
    return "; ".join(parts)
