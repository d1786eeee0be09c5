import logging
import structlog
from app.config import settings

def setup_logging(log_level: str = None, log_format: str = None):
    level = getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)
    log_format = log_format or settings.log_format

    logging.basicConfig(level=level, format="%(message)s")
    logging.getLogger().setLevel(level)

    # Configure structlog
    structlog.configure(
        processors=[
            # Add log level to log entry
            structlog.stdlib.filter_by_level,
            # Add logger name
            structlog.stdlib.add_logger_name,
            # Add log level
            structlog.stdlib.add_log_level,
            # Positional arguments are transformed into events
            structlog.stdlib.PositionalArgumentsFormatter(),
            # Format timestamps
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            # Stack info processor
            structlog.processors.StackInfoRenderer(),
            # Format exceptions
            structlog.processors.format_exc_info,
            # Decode unicode
            structlog.processors.UnicodeDecoder(),
            # Add file, line, and function info
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.LINENO,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                ]
            ),
            # JSON renderer for production, console for development
            structlog.processors.JSONRenderer() if log_format == "json"
            else structlog.dev.ConsoleRenderer(colors=True)
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

def get_logger(name: str):
    return structlog.get_logger(name)
