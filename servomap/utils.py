"""
Servomap Utilities

Access to the configuration tree on disk.
"""

import logging
from pathlib import Path
from typing import List, Union

from .exceptions import NotFoundError

logger = logging.getLogger(__name__)


def read_config(path: Union[str, Path]) -> str:
    """
    Read a configuration resource as text.

    Args:
        path: File to read

    Returns:
        The file contents

    Raises:
        NotFoundError: If the file does not exist
        OSError: For any other read failure
    """
    path = Path(path)
    logger.debug("Reading configuration %s", path)
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise NotFoundError(path) from None


def list_config_dir(directory: Union[str, Path]) -> List[str]:
    """
    List the configuration files in a directory, sorted by name.

    A missing directory lists as empty.
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.debug("Configuration directory %s does not exist", directory)
        return []
    return sorted(p.name for p in directory.iterdir() if p.is_file())


def list_config_names(directory: Union[str, Path]) -> List[str]:
    """
    List configuration names in a directory: filenames up to the first dot,
    deduplicated, in sorted order.
    """
    names: List[str] = []
    for filename in list_config_dir(directory):
        name = filename.split(".")[0]
        if name and name not in names:
            names.append(name)
    return names
