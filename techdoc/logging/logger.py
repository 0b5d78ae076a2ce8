import logging
import sys


class Log:
    """Process-wide logging facade shared by the API, the worker threads and the processor.

    Keyword arguments are attached to the record as ``extra`` fields.
    """

    _logger: logging.Logger = logging.getLogger("techdoc")
    _FORMAT = "%(asctime)s [%(levelname)s] [%(threadName)s] %(message)s"

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level for techdoc and uvicorn and attach a single stdout handler."""
        level = log_level.upper()
        cls._logger.setLevel(level)
        logging.getLogger("uvicorn").setLevel(level)
        if cls._logger.handlers:
            return
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(cls._FORMAT))
        cls._logger.addHandler(handler)

    @classmethod
    def debug(cls, message: str, **context: object) -> None:
        cls._emit(logging.DEBUG, message, context)

    @classmethod
    def info(cls, message: str, **context: object) -> None:
        cls._emit(logging.INFO, message, context)

    @classmethod
    def warning(cls, message: str, **context: object) -> None:
        cls._emit(logging.WARNING, message, context)

    @classmethod
    def error(cls, message: str, **context: object) -> None:
        cls._emit(logging.ERROR, message, context)

    @classmethod
    def critical(cls, message: str, **context: object) -> None:
        """Reserved for failures that leave a document's stored state inconsistent."""
        cls._emit(logging.CRITICAL, message, context)

    @classmethod
    def exception(cls, message: str, **context: object) -> None:
        """Log at ERROR level with the traceback of the exception being handled."""
        cls._logger.exception(message, extra=context)

    @classmethod
    def _emit(cls, level: int, message: str, context: dict[str, object]) -> None:
        cls._logger.log(level, message, extra=context)
