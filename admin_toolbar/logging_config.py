from __future__ import annotations

"""Central logging configuration for the admin toolbar.

Import and call :func:`setup_logging` once at host application start-up.
"""

import logging
import logging.config
import os
import sys

from admin_toolbar.config import ConfigManager

__all__ = ["setup_logging"]

_PIPELINE_LOGGER = "admin_toolbar.core.pipeline"
_TRUTHY = {'1', 'true', 'yes', 'on'}


def setup_logging() -> None:
    """Configure logging for the toolbar using the packaged YAML config."""
    log_dir = os.environ.get("ADMIN_TOOLBAR_LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, "toolbar.log")

    try:
        logging_config = ConfigManager().get_logging_config()

        if logging_config and isinstance(logging_config, dict) and logging_config.get("version"):
            if "handlers" in logging_config and "file" in logging_config["handlers"]:
                logging_config["handlers"]["file"]["filename"] = log_file

            logging.config.dictConfig(logging_config)
            logging.info("===== Logging initialised from config files =====")
        else:
            _setup_minimal_logging()
    except Exception as exc:
        print(f"Error loading logging config: {exc}", file=sys.stderr)
        _setup_minimal_logging()

    _apply_debug_overrides()


def _setup_minimal_logging() -> None:
    """Set up console-only logging when the config is unavailable."""
    minimal_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'simple': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'simple',
                'level': 'INFO',
            },
        },
        'root': {
            'level': 'INFO',
            'handlers': ['console'],
        },
        'loggers': {
            _PIPELINE_LOGGER: {
                'handlers': ['console'],
                'level': 'INFO',
                'propagate': False,
            }
        }
    }

    logging.config.dictConfig(minimal_config)
    logging.error("===== Logging initialised with minimal fallback (config error) =====")


def _apply_debug_overrides() -> None:
    """Apply environment-driven module-specific debug overrides.

    Supports:
    - ADMIN_TOOLBAR_DEBUG_PIPELINE=true -> DEBUG for the contributor pipeline
      and the node store
    - ADMIN_TOOLBAR_DEBUG_MODULES=comma,separated,logger,names -> DEBUG for listed loggers
    """
    targets = []
    if os.environ.get('ADMIN_TOOLBAR_DEBUG_PIPELINE', '').strip().lower() in _TRUTHY:
        targets.append(_PIPELINE_LOGGER)
        targets.append('admin_toolbar.core.node_store')
    extra_modules = os.environ.get('ADMIN_TOOLBAR_DEBUG_MODULES', '').strip()
    if extra_modules:
        targets.extend(m.strip() for m in extra_modules.split(',') if m.strip())

    for name in targets:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        # Ensure at least one handler emits DEBUG for this logger
        has_debug_handler = any(h.level <= logging.DEBUG for h in logger.handlers)
        if not has_debug_handler:
            h = logging.StreamHandler()
            h.setLevel(logging.DEBUG)
            h.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
            logger.addHandler(h)
        logger.info("Debug override active for logger '%s'", name)
