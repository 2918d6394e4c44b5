from __future__ import annotations

import logging


_LOG_CONFIGURED = False


def configure_logging(level: str = "INFO") -> None:
    global _LOG_CONFIGURED
    resolved = getattr(logging, level.upper(), logging.INFO)
    if not _LOG_CONFIGURED:
        logging.basicConfig(
            level=resolved,
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )
        _LOG_CONFIGURED = True
    # Handlers are installed once; the level follows the latest settings.
    logging.getLogger().setLevel(resolved)
