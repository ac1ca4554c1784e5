"""
Reading the sysprobe TOML configuration file.

Only the ``[probe]`` table is of interest; other top-level tables are
ignored so the settings can live in a shared file next to other tools.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Union

from ..validation import ErrorSeverity, ValidationError, handle_config_error

logger = logging.getLogger(__name__)

PROBE_TABLE = "probe"


def load_toml_file(file_path: Union[str, Path], description: str = "sysprobe configuration") -> Dict[str, Any]:
    """
    Parse a TOML file into a dict.

    ``~`` in ``file_path`` is expanded. Directories and other non-regular
    files are reported the same way as a missing file.

    Raises:
        FileNotFoundError: If ``file_path`` is not a regular file
        tomllib.TOMLDecodeError: If the file is malformed
    """
    path = Path(file_path).expanduser()
    if not path.is_file():
        raise FileNotFoundError(f"{description} is not a readable file: {path}")

    logger.debug(f"Reading {description} from {path}")
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        handle_config_error(
            error=e,
            context=f"parsing {path}",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise


def load_probe_section(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Return the ``[probe]`` table of ``config_path``.

    A file without the table yields an empty dict, i.e. defaults.

    Raises:
        ValidationError: If ``probe`` is present but is not a table
    """
    data = load_toml_file(config_path)
    probe_data = data.get(PROBE_TABLE, {})
    if not isinstance(probe_data, dict):
        raise ValidationError(
            f"{PROBE_TABLE} must be a table, got {type(probe_data).__name__}",
            field_name=PROBE_TABLE,
            value=probe_data,
        )
    ignored = sorted(key for key in data if key != PROBE_TABLE)
    if ignored:
        logger.debug(f"Ignoring non-sysprobe tables in {config_path}: {', '.join(ignored)}")
    return probe_data
