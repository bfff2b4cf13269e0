"""
Reader configuration and YAML I/O for hastycsv.

``ReaderConfig`` is a Pydantic model holding the few knobs a reading
session has. It can be loaded from and saved to a small YAML file, e.g.::

    # hastycsv reader configuration
    delimiter: '|'
    buffer_size: 32768

Key functions:
- load_config(path) -> ReaderConfig: Load and validate from YAML.
- save_config(config, path) -> Path: Write YAML under a commented header.
- validate_delimiter(value) -> int: Shared delimiter check, used by both
  the model and ``Reader.read()``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from hastycsv.exceptions import ConfigValidationError, InvalidDelimiterError

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = ","
DEFAULT_BUFFER_SIZE = 32 * 1024

_LINE_TERMINATORS = (ord("\r"), ord("\n"))


def validate_delimiter(value: str | bytes | int) -> int:
    """Return *value* as a delimiter byte, or raise InvalidDelimiterError.

    Accepts a one-character ASCII ``str``, a one-byte ``bytes`` or an
    ``int`` in ``0``-``255``. The byte must not be ``\\r`` or ``\\n``.
    """
    if isinstance(value, str):
        if len(value) != 1 or not value.isascii():
            raise InvalidDelimiterError(
                f"Delimiter must be a single ASCII character, got {value!r}"
            )
        byte = ord(value)
    elif isinstance(value, (bytes, bytearray)):
        if len(value) != 1:
            raise InvalidDelimiterError(
                f"Delimiter must be a single byte, got {bytes(value)!r}"
            )
        byte = value[0]
    elif isinstance(value, int) and not isinstance(value, bool):
        byte = value
    else:
        raise InvalidDelimiterError(f"Unsupported delimiter type: {type(value).__name__}")

    if not 0 <= byte <= 255:
        raise InvalidDelimiterError(f"Delimiter must be a single byte, got {byte}")
    if byte in _LINE_TERMINATORS:
        raise InvalidDelimiterError("Comma delimiter cannot be \\r or \\n")
    return byte


class ReaderConfig(BaseModel):
    """Settings for a reading session."""

    delimiter: str = Field(
        DEFAULT_DELIMITER,
        description="Single ASCII field delimiter; must not be \\r or \\n",
    )
    buffer_size: int = Field(
        DEFAULT_BUFFER_SIZE,
        gt=0,
        description="Read buffer size in bytes used when opening files",
    )

    @field_validator("delimiter")
    @classmethod
    def _check_delimiter(cls, value: str) -> str:
        try:
            validate_delimiter(value)
        except InvalidDelimiterError as exc:
            raise ValueError(exc.message) from exc
        return value

    @property
    def delimiter_byte(self) -> int:
        """The delimiter as a byte value."""
        return ord(self.delimiter)


_CONFIG_HEADER = """\
# hastycsv reader configuration
# delimiter: one ASCII character, not a line break
# buffer_size: bytes buffered per read when opening files

"""


def load_config(path: str | Path) -> ReaderConfig:
    """Build a ReaderConfig from a YAML file of ``delimiter``/``buffer_size`` keys.

    Keys left out fall back to ``,`` and 32 KiB.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty or its top level is
            not a mapping.
        pydantic.ValidationError: If a delimiter or buffer size is invalid.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Reader config not found: {path}")
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        raise ConfigValidationError(f"Reader config is empty: {path}")
    if not isinstance(raw, dict):
        raise ConfigValidationError(
            f"Reader config must be a mapping of settings, got {type(raw).__name__}: {path}"
        )
    config = ReaderConfig.model_validate(raw)
    logger.info(
        "Loaded reader config from %s (delimiter=%r, buffer_size=%d)",
        path, config.delimiter, config.buffer_size,
    )
    return config


def save_config(config: ReaderConfig, path: str | Path) -> Path:
    """Write *config* as YAML under a commented header and return the path.

    Parent directories are created as needed. The output loads back to an
    equal config with ``load_config``.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    body = yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False)
    path.write_text(_CONFIG_HEADER + body, encoding="utf-8")
    logger.info("Saved reader config to %s", path)
    return path
