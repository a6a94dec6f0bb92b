from __future__ import annotations

import logging
from typing import Optional

from .config import ObservabilityConfig, get_config


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Apply the configured level and format to the root logger.

    The library never calls this on import; applications embedding the
    parser decide when (and whether) to configure logging.
    """
    config = config or get_config().observability
    logging.basicConfig(level=config.level.upper(), format=config.format)
    logging.getLogger(__name__).debug(
        "Logging configured", extra={"level": config.level}
    )
