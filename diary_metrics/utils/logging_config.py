import logging

from diary_metrics.config.config_manager import ConfigManager


def setup_logging(config=None, log_file=None, level=None):
    """
    Configure root logging for scripts.

    Args:
        config: ConfigManager to read ``logging.level`` / ``logging.format`` from
        log_file: Optional path of a log file written alongside the console
        level: Overrides the configured level (name or number)
    """
    config = config or ConfigManager()
    level = level or config.get('logging.level', 'INFO')
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=config.get('logging.format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
        handlers=handlers,
        force=True,
    )
