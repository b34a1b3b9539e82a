"""
Logging configuration for Market Climate
"""
import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

MAIN_LOG_NAME = "market_climate.log"
ERRORS_LOG_NAME = "errors.log"


def setup_logging(
    logs_dir: Optional[Union[str, Path]] = None,
    level: Union[int, str] = logging.INFO,
) -> None:
    """Configure logging for the entire application.

    Console output always; rotating files only when ``logs_dir`` is given.
    """

    # Root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    root_logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(console_handler)

    if logs_dir is None:
        logging.debug("Logging configured (console only)")
        return

    logs_path = Path(logs_dir)
    logs_path.mkdir(parents=True, exist_ok=True)

    # Main file handler (all logs)
    main_handler = logging.handlers.RotatingFileHandler(
        logs_path / MAIN_LOG_NAME,
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5
    )
    main_handler.setLevel(level)
    main_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(main_handler)

    # Error file handler (errors only)
    error_handler = logging.handlers.RotatingFileHandler(
        logs_path / ERRORS_LOG_NAME,
        maxBytes=5*1024*1024,  # 5MB
        backupCount=3
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(logging.Formatter(
        LOG_FORMAT + '\n%(pathname)s:%(lineno)d',
        datefmt=DATE_FORMAT
    ))
    root_logger.addHandler(error_handler)

    logging.info("✅ Logging configured successfully")
    logging.info(f"📁 Logs: {logs_path / MAIN_LOG_NAME}")
    logging.info(f"❌ Error logs: {logs_path / ERRORS_LOG_NAME}")
