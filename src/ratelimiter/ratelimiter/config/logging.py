# ABOUTME: Loguru configuration for the rate limiter library
# ABOUTME: Provides unified logging setup with console colorization and file output

import sys
from pathlib import Path
from typing import Optional, Union
from loguru import logger
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class LoggerConfig(BaseModel):
    """Configuration for loguru logger."""

    # Console output configuration
    console_enabled: bool = True
    console_level: str = "INFO"
    console_format: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[name]}</cyan> | "
        "<level>{message}</level>"
    )
    console_colorize: bool = True
    console_backtrace: bool = True
    console_diagnose: bool = True

    # File output configuration
    file_enabled: bool = False
    file_level: str = "DEBUG"
    file_path: Union[str, Path] = "logs/rate-limiter.log"
    file_format: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[name]} | {message}"
    file_rotation: str = "100 MB"
    file_retention: str = "30 days"
    file_compression: str = "gz"

    # Structured logging for file output
    structured_enabled: bool = False
    structured_level: str = "DEBUG"
    structured_path: Union[str, Path] = "logs/rate-limiter-structured.jsonl"

    # Performance settings
    enqueue: bool = True  # Async logging
    catch: bool = True  # Catch exceptions in logging


class LoggingSettings(BaseSettings):
    """Logging settings read from RATE_LIMITER_-prefixed environment variables."""

    log_level: str = Field(default="INFO")
    log_file_enabled: bool = Field(default=False)
    log_file_path: str = Field(default="logs/rate-limiter.log")
    log_structured_enabled: bool = Field(default=False)
    log_console_colorize: bool = Field(default=True)

    model_config = {"env_prefix": "RATE_LIMITER_"}


def _ensure_name(record) -> None:
    """Default the bound name for records emitted through the bare logger."""
    record["extra"].setdefault("name", record["name"])


def setup_logging(config: Optional[LoggerConfig] = None) -> None:
    """
    Setup loguru logger with the specified configuration.

    The library never calls this on import; embedding applications opt in.

    Args:
        config: Logger configuration. If None, uses environment variables.
    """
    if config is None:
        settings = LoggingSettings()
        config = LoggerConfig(
            console_level=settings.log_level,
            file_enabled=settings.log_file_enabled,
            file_path=settings.log_file_path,
            structured_enabled=settings.log_structured_enabled,
            console_colorize=settings.log_console_colorize,
            file_level=settings.log_level,
            structured_level=settings.log_level,
        )

    # Remove default handler
    logger.remove()
    logger.configure(patcher=_ensure_name)

    if config.console_enabled:
        logger.add(
            sys.stdout,
            level=config.console_level,
            format=config.console_format,
            colorize=config.console_colorize,
            backtrace=config.console_backtrace,
            diagnose=config.console_diagnose,
            enqueue=config.enqueue,
            catch=config.catch,
        )

    if config.file_enabled:
        log_path = Path(config.file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            config.file_path,
            level=config.file_level,
            format=config.file_format,
            rotation=config.file_rotation,
            retention=config.file_retention,
            compression=config.file_compression,
            enqueue=config.enqueue,
            catch=config.catch,
        )

    if config.structured_enabled:
        structured_path = Path(config.structured_path)
        structured_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            config.structured_path,
            level=config.structured_level,
            format="{message}",
            serialize=True,
            rotation=config.file_rotation,
            retention=config.file_retention,
            compression=config.file_compression,
            enqueue=config.enqueue,
            catch=config.catch,
        )


def get_logger(name: str):
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance bound to the specified name
    """
    return logger.bind(name=name)


def configure_for_testing() -> None:
    """Configure logging for testing environment."""
    logger.remove()
    logger.configure(patcher=_ensure_name)
    logger.add(
        sys.stdout,
        level="DEBUG",
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <5}</level> | <cyan>{extra[name]}</cyan> | <level>{message}</level>",
        colorize=True,
        backtrace=False,
        diagnose=False,
        enqueue=False,
        catch=False,
    )


def configure_for_production() -> None:
    """Configure logging for production environment."""
    config = LoggerConfig(
        console_level="INFO",
        console_colorize=False,
        console_backtrace=False,
        console_diagnose=False,
        file_enabled=True,
        file_level="INFO",
        structured_enabled=True,
        structured_level="INFO",
    )
    setup_logging(config)


def configure_for_development() -> None:
    """Configure logging for development environment."""
    config = LoggerConfig(
        console_level="DEBUG",
        console_colorize=True,
        console_backtrace=True,
        console_diagnose=True,
    )
    setup_logging(config)
