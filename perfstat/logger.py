from __future__ import annotations

import logging
import os
from datetime import datetime
from logging import Logger
from pathlib import Path
from typing import Optional

LOG_DIR_ENV = "PERFSTAT_LOG_DIR"


class LogManager:
    """
    Gestisce un logger gerarchico 'perfstat.*' con:
    - StreamHandler su console,
    - file UTF-8 giornaliero 'perfstat_YYYYMMDD.log' solo se la variabile
      d'ambiente PERFSTAT_LOG_DIR indica una cartella,
    - prevenzione handler duplicati,
    - livello default INFO (configurabile).
    """

    _configured: bool = False
    _base_logger_name: str = "perfstat"
    _logfile_path: Optional[Path] = None

    def __init__(self, component: str = "app", level: int = logging.INFO) -> None:
        self.component = component.strip() or "app"
        self.level = level
        self._ensure_configured()

    @classmethod
    def _log_dir(cls) -> Optional[Path]:
        raw = os.environ.get(LOG_DIR_ENV, "").strip()
        return Path(raw) if raw else None

    @classmethod
    def _ensure_configured(cls) -> None:
        if cls._configured:
            return

        base_logger = logging.getLogger(cls._base_logger_name)
        base_logger.setLevel(logging.INFO)
        base_logger.propagate = False

        common_fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
        file_fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(lineno)d | %(message)s"

        log_dir = cls._log_dir()
        if log_dir is not None:
            log_dir.mkdir(parents=True, exist_ok=True)
            cls._logfile_path = log_dir / f"perfstat_{datetime.now():%Y%m%d}.log"
            existing_file = any(
                isinstance(h, logging.FileHandler)
                and getattr(h, "baseFilename", None) == str(cls._logfile_path)
                for h in base_logger.handlers
            )
            if not existing_file:
                fh = logging.FileHandler(cls._logfile_path, encoding="utf-8")
                fh.setLevel(logging.INFO)
                fh.setFormatter(logging.Formatter(file_fmt))
                base_logger.addHandler(fh)

        existing_stream = any(
            isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
            for h in base_logger.handlers
        )
        if not existing_stream:
            sh = logging.StreamHandler()
            sh.setLevel(logging.INFO)
            sh.setFormatter(logging.Formatter(common_fmt))
            base_logger.addHandler(sh)

        cls._configured = True
        if cls._logfile_path is not None:
            base_logger.info("Logger configurato. File: %s", cls._logfile_path)

    def get_logger(self, level: Optional[int] = None) -> Logger:
        base = logging.getLogger(self._base_logger_name)
        logger = base.getChild(self.component)
        logger.setLevel(level if level is not None else self.level)
        return logger

    @classmethod
    def logfile_path(cls) -> Optional[Path]:
        return cls._logfile_path
