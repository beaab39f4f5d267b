"""Runtime settings for FormForge tooling."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from formforge.form.form import DEFAULT_VALIDATE_EVENT


@dataclass
class Settings:
    """Settings read from the environment.

    Attributes:
        log_level: Root log level for the CLI
        validate_on_event: Default trigger event for forms loaded from
            definitions that don't set ``validateOnEvent``
    """

    log_level: str = "WARNING"
    validate_on_event: str = DEFAULT_VALIDATE_EVENT

    @classmethod
    def from_env(cls) -> Settings:
        """Create settings from environment variables.

        - FORMFORGE_LOG_LEVEL (default: WARNING)
        - FORMFORGE_VALIDATE_ON_EVENT (default: onChange)
        """
        return cls(
            log_level=os.environ.get("FORMFORGE_LOG_LEVEL", "WARNING").upper(),
            validate_on_event=os.environ.get(
                "FORMFORGE_VALIDATE_ON_EVENT", DEFAULT_VALIDATE_EVENT
            ),
        )

    def configure_logging(self) -> None:
        level = logging.getLevelName(self.log_level)
        if not isinstance(level, int):
            level = logging.WARNING
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
