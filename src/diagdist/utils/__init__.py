from .logging import configure_logger, log_elapsed

__all__ = ["configure_logger", "log_elapsed"]
