"""
Logging client configuration.

Logs always go to the console; they are also shipped to a centralized
logging service when LOGGING_HOST is set.
"""
import logging
import logging.handlers
import os


class ServiceNameFilter(logging.Filter):
    """Stamps the component name on every record as ``service``."""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service_name
        return True


def setup_logger(service_name: str) -> logging.Logger:
    """
    Setup logger for a bot component.

    Args:
        service_name: Name of the component (e.g. 'gsoh-bot', 'gsoh-bot-pull')

    Returns:
        Configured logger
    """
    logger = logging.getLogger(service_name)
    logger.setLevel(logging.DEBUG)

    # Remove existing handlers
    logger.handlers = []

    # Add service name to all log records
    logger.filters = []
    logger.addFilter(ServiceNameFilter(service_name))

    # Socket handler only when a logging service is configured
    log_host = os.getenv('LOGGING_HOST')
    if log_host:
        log_port = int(os.getenv('LOGGING_PORT', 9999))
        logger.addHandler(logging.handlers.SocketHandler(log_host, log_port))

    console_handler = logging.StreamHandler()
    console_formatter = logging.Formatter(
        '%(asctime)s - [%(service)s] - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    return logger
