"""
Black formatter for generated modules.
"""

from __future__ import annotations

import logging

from ..config import FormatterConfig
from .base import Formatter, split_generation_comment

logger = logging.getLogger(__name__)


class BlackFormatter(Formatter):
    """Formatter using the black library.

    Only the module body goes through black: the generation comment header
    is kept byte for byte, and black runs in safe mode so that the formatted
    module is checked to be equivalent to the generated one.
    """

    name = "black"

    def __init__(self):
        self._black = None
        self._available = None

    def is_available(self) -> bool:
        """Check if black is installed."""
        if self._available is None:
            try:
                import black

                self._black = black
                self._available = True
            except ImportError:
                self._available = False
        return self._available

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format a generated module using black.

        Args:
            code: Python source code to format
            config: Formatter configuration

        Returns:
            Formatted code
        """
        if not self.is_available():
            logger.warning("black is not installed, leaving generated code unformatted")
            return code

        black = self._black
        header, body = split_generation_comment(code)

        try:
            body = black.format_file_contents(body, fast=False, mode=self._mode(config))
        except black.NothingChanged:
            logger.debug("black left the generated code unchanged")
        except black.InvalidInput as e:
            logger.warning("black rejected the generated code: %s", e)
            return code

        return header + body

    def _mode(self, config: FormatterConfig):
        """Build the black mode for ``config``."""
        black = self._black

        # "py312" and "PY312" name the same target; unknown ones let black infer
        target_versions = set()
        version = getattr(black.TargetVersion, config.target_version.upper(), None)
        if version is None:
            logger.warning("black does not know target version %r", config.target_version)
        else:
            target_versions.add(version)

        return black.Mode(
            target_versions=target_versions,
            line_length=config.line_length,
            string_normalization=config.string_normalization,
            magic_trailing_comma=config.magic_trailing_comma,
        )
