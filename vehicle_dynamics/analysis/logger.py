# Logging utilities

import logging
import json
import csv
from pathlib import Path
from typing import Dict, List, Any, Optional
from datetime import datetime

import numpy as np


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """Setup logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file path for logging

    Returns:
        Configured logger
    """
    logger = logging.getLogger("vehicle_dynamics")
    logger.setLevel(getattr(logging, level.upper()))

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper()))
    console_format = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    # File handler
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    return logger


class TelemetryLogger:
    """Per-tick telemetry recording to CSV, with a JSON summary."""

    def __init__(self, log_dir: Path, log_frequency: int = 1):
        """Initialize telemetry logger.

        Args:
            log_dir: Directory for log files
            log_frequency: Record every Nth tick
        """
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.log_frequency = max(1, int(log_frequency))

        self.csv_path = self.log_dir / "telemetry.csv"
        self.json_path = self.log_dir / "telemetry.json"

        self._history: List[Dict[str, Any]] = []
        self._csv_initialized = False
        self._fieldnames: List[str] = []

    def log(self, step: int, record: Dict[str, Any]) -> None:
        """Log one telemetry record.

        Args:
            step: Tick index
            record: Dict of telemetry values
        """
        if step % self.log_frequency != 0:
            return

        row = {"step": step, **record}
        self._history.append(row)

        # Initialize CSV with fieldnames from first record
        if not self._csv_initialized:
            self._fieldnames = list(row.keys())
            with open(self.csv_path, "w", newline="") as f:
                writer = csv.DictWriter(f, fieldnames=self._fieldnames)
                writer.writeheader()
            self._csv_initialized = True

        with open(self.csv_path, "a", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=self._fieldnames, extrasaction="ignore")
            writer.writerow(row)

    def __call__(self, step: int, record: Dict[str, Any]) -> None:
        self.log(step, record)

    def save_summary(self, metrics: Optional[Dict[str, float]] = None) -> None:
        """Save recorded history (and optional run metrics) as JSON."""
        with open(self.json_path, "w") as f:
            json.dump({"metrics": metrics or {}, "records": self._history}, f, indent=2)

    def __len__(self) -> int:
        return len(self._history)

    def get_series(self, name: str) -> List[Any]:
        """Get time series of a specific telemetry column.

        Args:
            name: Column name

        Returns:
            List of values, in tick order
        """
        return [r.get(name) for r in self._history if name in r]

    def get_latest(self, name: str) -> Optional[Any]:
        for r in reversed(self._history):
            if name in r:
                return r[name]
        return None

    def get_summary_stats(self, name: str, window: int = 100) -> Dict[str, float]:
        """Get summary statistics for a column.

        Args:
            name: Column name
            window: Number of recent values to consider

        Returns:
            Dict with mean, std, min, max
        """
        values = [v for v in self.get_series(name)[-window:] if v is not None]
        if not values:
            return {}

        return {
            "mean": float(np.mean(values)),
            "std": float(np.std(values)),
            "min": float(np.min(values)),
            "max": float(np.max(values)),
        }


class RunLogger:
    """Output directory and loggers for one simulation run."""

    def __init__(
        self,
        run_name: str,
        base_dir: Path = Path("runs"),
        level: str = "INFO",
        log_frequency: int = 1,
    ):
        """Initialize run logger.

        Args:
            run_name: Name of run
            base_dir: Base directory for runs
            level: Console logging level
            log_frequency: Record every Nth tick
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.run_dir = Path(base_dir) / f"{timestamp}_{run_name}"
        self.run_dir.mkdir(parents=True, exist_ok=True)

        self.logger = setup_logging(
            level=level,
            log_file=self.run_dir / "run.log",
        )
        self.telemetry = TelemetryLogger(self.run_dir, log_frequency=log_frequency)

    def save_config(self, config: Dict[str, Any]) -> None:
        import yaml

        config_path = self.run_dir / "config.yaml"
        with open(config_path, "w") as f:
            yaml.dump(config, f, default_flow_style=False)

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)
