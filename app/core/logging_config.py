import logging
import sys

def setup_logging():
    """
    Configure application logging.

    Everything goes to stdout with level and logger name so the same output
    works locally and behind a container runtime.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return logging.getLogger("complisa")


# Create global logger instance
logger = setup_logging()
