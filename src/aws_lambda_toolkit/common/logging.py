"""Logging utilities for AWS Lambda handlers.

Provides logging mixins and helper functions for configuring
structured logging with AWS Lambda Powertools.
"""

import logging
from typing import Optional, Union

from aibs_informatics_core.utils.logging import get_all_handlers
from aws_lambda_powertools.logging import Logger

from aws_lambda_toolkit.common.base import HandlerMixins
from aws_lambda_toolkit.common.config import SERVICE_NAME


class LoggingMixins(HandlerMixins):
    """Mixin class providing structured logging capabilities.

    Integrates AWS Lambda Powertools Logger for structured JSON logging
    with automatic context injection.

    Attributes:
        log: Alias for the logger property.
        logger: The AWS Lambda Powertools Logger instance.
    """

    @property
    def log(self) -> Logger:
        return self.logger

    @log.setter
    def log(self, value: Logger):
        self.logger = value

    @property
    def logger(self) -> Logger:
        """Get the Logger instance, creating one for the service if needed."""
        try:
            return self._logger
        except AttributeError:
            self.logger = self.get_logger(self.service_name())
        return self.logger

    @logger.setter
    def logger(self, value: Logger):
        self._logger = value

    @classmethod
    def get_logger(cls, service: Optional[str] = None) -> Logger:
        return get_service_logger(service=service)

    def add_logger_to_root(self):
        """Add this handler's logger to the root logger.

        Log messages from library modules are then emitted with the
        same structured format.
        """
        add_handler_to_logger(self.logger, None)


def get_service_logger(service: Optional[str] = None) -> Logger:
    """Create a structured logger for the service, defaulting to the library name."""
    return Logger(service=service or SERVICE_NAME)


def add_handler_to_logger(
    source_logger: Logger, target_logger: Union[str, logging.Logger, None] = None
):
    """Add a source logger's handler to a target logger.

    Args:
        source_logger (Logger): The Logger whose handler will be copied.
        target_logger (Union[str, logging.Logger, None]): Logger name, Logger instance,
            or None for the root logger.
    """
    handler = source_logger.registered_handler

    if target_logger is None or isinstance(target_logger, str):
        target_logger = logging.getLogger(target_logger)
        log_level = min(source_logger.log_level, target_logger.getEffectiveLevel())
        target_logger.setLevel(log_level)

    if handler not in get_all_handlers(target_logger):
        target_logger.addHandler(handler)
