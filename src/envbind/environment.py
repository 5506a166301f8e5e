"""
Host environment loading.

Produces a plain dict snapshot of the process environment, optionally
layered with values from a dotenv file. The process environment itself is
never modified.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

from dotenv import dotenv_values

from .config.settings import get_config

logger = logging.getLogger(__name__)


def load_environment(
    env_file: Optional[Union[str, Path]] = None,
    *,
    override: Optional[bool] = None,
    encoding: Optional[str] = None,
) -> Dict[str, str]:
    """
    Snapshot the host environment.

    Args:
        env_file: Dotenv file to layer in; falls back to ENVBIND_ENV_FILE
        override: Whether dotenv values replace process values; falls back
            to ENVBIND_ENV_FILE_OVERRIDE
        encoding: Dotenv file encoding; falls back to ENVBIND_ENV_FILE_ENCODING

    Returns:
        Mapping of variable names to values

    Raises:
        FileNotFoundError: If the dotenv file does not exist
    """
    settings = get_config()
    env_file = env_file or settings.env_file
    override = settings.env_file_override if override is None else override
    encoding = encoding or settings.env_file_encoding

    environ = dict(os.environ)
    if not env_file:
        return environ

    path = Path(env_file)
    if not path.exists():
        logger.error(f"Dotenv file not found: {path}")
        raise FileNotFoundError(f"Dotenv file not found: {path}")

    loaded = 0
    for key, value in dotenv_values(path, encoding=encoding).items():
        # Keys declared without "=" carry no value
        if value is None:
            continue
        if override or key not in environ:
            environ[key] = value
            loaded += 1

    logger.debug(f"Loaded {loaded} variables from {path}")
    return environ
