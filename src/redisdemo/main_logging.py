"""Logging configuration for the redisdemo CLI."""
import logging


def configure_logging(verbose: bool) -> None:
    """Configure logging level based on verbosity setting.

    INFO is the floor because RedisManager reports each command's result
    at INFO, and those lines are the demo's visible output.

    Args:
        verbose: If True, set DEBUG level to include connection attempts.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        handlers=[logging.StreamHandler()],
    )
