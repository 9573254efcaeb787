from __future__ import annotations

import logging

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: str = 'INFO') -> logging.Logger:
    """Attach one stream handler to the package logger. Safe to call twice."""
    logger = logging.getLogger('scene_json_parser')
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if not any(getattr(h, '_scene_parser', False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._scene_parser = True
        logger.addHandler(handler)

    return logger
