import logging
from typing import Any, Dict


def setup_logging(log_cfg: Dict[str, Any]) -> None:
    """Configure root logging from the `logging` section of config.yaml."""
    handlers = []
    if log_cfg.get("log_file"):
        handlers.append(logging.FileHandler(log_cfg["log_file"]))
    if log_cfg.get("use_stream_handler", True):
        handlers.append(logging.StreamHandler())
    if not handlers:
        handlers.append(logging.StreamHandler())

    logging.basicConfig(
        level=str(log_cfg.get("level", "INFO")).upper(),
        format=log_cfg.get(
            "format",
            "%(asctime)s - %(levelname)s - %(module)s - %(message)s"
        ),
        handlers=handlers
    )


# Create logger instance
logger = logging.getLogger("CompetitorDashboard")
