"""
Centralized logging configuration for the application
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from icecream import ic


class ApplicationLogger:
    def __init__(
        self,
        log_dir: Optional[Union[str, Path]] = None,
        logger_name: str = "wiki_first_link",
        debug: bool = False,
        verbose: bool = False,
        level: Union[int, str] = logging.WARNING,
        max_bytes: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5
    ):
        self.log_dir = Path(log_dir).expanduser() if log_dir else None
        self.logger_name = logger_name
        self.debug = debug
        self.verbose = verbose
        self.level = level
        self.invalid_level: Optional[str] = None
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.logger = self._configure_logger()
        self._configure_icecream()
        if self.invalid_level is not None:
            self.logger.warning(f"Unknown log level {self.invalid_level!r}, using WARNING")

    def _resolve_level(self) -> int:
        if self.debug:
            return logging.DEBUG
        if self.verbose:
            return logging.INFO
        if isinstance(self.level, str):
            resolved = logging.getLevelName(self.level.upper())
            # getLevelName returns "Level X" for names it does not know
            if not isinstance(resolved, int):
                self.invalid_level = self.level
                return logging.WARNING
            return resolved
        return self.level

    def _configure_logger(self) -> logging.Logger:
        logger = logging.getLogger(self.logger_name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(self._resolve_level())
        logger.propagate = False

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        # stderr, stdout carries the results
        console_handler = logging.StreamHandler()
        console_handler.setLevel(self._resolve_level())
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                filename=self.log_dir / f"{self.logger_name}.log",
                maxBytes=self.max_bytes,
                backupCount=self.backup_count,
                encoding='utf-8'
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        logging.captureWarnings(True)

        return logger

    def _configure_icecream(self) -> None:
        trace = self.logger.getChild("trace")
        ic.configureOutput(prefix="ic| ", outputFunction=trace.debug)
        if self.debug:
            ic.enable()
        else:
            ic.disable()

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        if name:
            return self.logger.getChild(name)
        return self.logger
