import logging
import logging.config
from typing import Optional

from habitjournal.config import JournalConfig, load_config


def setup_logger(config: Optional[JournalConfig] = None) -> logging.Logger:
    """Configure the habitjournal logger tree from the journal configuration."""
    config = config or load_config()
    if config.logging.to_file:
        config.logging.log_dir.mkdir(exist_ok=True, parents=True)
    logging.config.dictConfig(config.get_logging_config())
    return logging.getLogger("habitjournal")
