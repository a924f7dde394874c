"""
Runtime configuration.

Values come from environment variables (all optional):
* CHESS_LOG_LEVEL: name of the logging level (default INFO)
* CHESS_REJECT_MOVES_AFTER_GAME_OVER: "false" keeps accepting moves after a king was captured
"""

import logging
import os
from typing import Self

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseModel):
    log_level: str = "INFO"
    reject_moves_after_game_over: bool = True

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise InvalidRequestError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls) -> Self:
        """Strings from the environment are parsed by pydantic; unreadable values raise ValidationError."""
        return cls(
            log_level=os.getenv("CHESS_LOG_LEVEL", "INFO"),
            reject_moves_after_game_over=os.getenv(
                "CHESS_REJECT_MOVES_AFTER_GAME_OVER", "true"
            ),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
