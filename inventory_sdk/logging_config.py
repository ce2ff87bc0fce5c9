# inventory_sdk/logging_config.py
import logging
import sys

# Имя базового логгера для всего SDK
SDK_LOGGER_NAME = "inventory_sdk"


def setup_sdk_logging(
    level=logging.INFO,
    log_format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
):
    """Настраивает базовый логгер SDK. Повторный вызов ничего не меняет."""
    logger = logging.getLogger(SDK_LOGGER_NAME)

    if logger.handlers:
        logger.debug(f"Logger '{SDK_LOGGER_NAME}' already has handlers. Skipping setup.")
        return logger

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format))
    logger.addHandler(handler)

    logger.info(
        f"SDK logging setup complete for '{SDK_LOGGER_NAME}' at level {logging.getLevelName(level)}"
    )
    return logger


def get_sdk_logger(name: str = SDK_LOGGER_NAME) -> logging.Logger:
    """Возвращает логгер SDK (или его дочерний)."""
    return logging.getLogger(name)
