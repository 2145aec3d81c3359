from .logging import get_logger, setup_rich_logging

__all__ = ["get_logger", "setup_rich_logging"]
