"""
Logging for the swap tool.

The ``v2swap`` package logger writes to stdout, a daily rotated run log and a
size-capped error log. Module loggers (``logging.getLogger(__name__)``)
propagate into it. Swap results additionally go to a monthly audit file via
the trade logger.
"""

import logging
import os
import sys
from datetime import datetime
from decimal import Decimal
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pathlib import Path
from typing import Optional

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "v2swap"


def get_log_dir() -> Path:
    """Log directory: $V2SWAP_LOG_DIR or ./logs, created on demand."""
    log_dir = Path(os.getenv("V2SWAP_LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def get_package_logger(debug: bool = False) -> logging.Logger:
    """
    Configure the ``v2swap`` package logger once per process.

    Args:
        debug: DEBUG level and file/line in every record

    Returns:
        The package logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(DETAILED_FORMAT if debug else SIMPLE_FORMAT, datefmt=DATE_FORMAT)
    log_dir = get_log_dir()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    run_handler = TimedRotatingFileHandler(
        log_dir / f"{ROOT_LOGGER_NAME}.log",
        when="midnight",
        backupCount=30,
        encoding="utf-8",
    )
    run_handler.setFormatter(formatter)

    error_handler = RotatingFileHandler(
        log_dir / f"{ROOT_LOGGER_NAME}_errors.log",
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT))

    for handler in (console_handler, run_handler, error_handler):
        logger.addHandler(handler)
    return logger


def setup_trade_logger(run_name: str) -> logging.Logger:
    """Audit logger writing one line per swap to ``trades_<run_name>_<YYYYMM>.log``."""
    logger = logging.getLogger(f"trade_{run_name}")
    logger.setLevel(logging.INFO)
    # Audit lines go to the trade file only, not through the package logger
    logger.propagate = False
    if logger.handlers:
        return logger

    trade_path = get_log_dir() / f"trades_{run_name}_{datetime.now().strftime('%Y%m')}.log"
    handler = logging.FileHandler(trade_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(SIMPLE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger


def log_swap(
    logger: logging.Logger,
    token_in: str,
    token_out: str,
    amount_in: Decimal,
    amount_out_min: Decimal,
    tx_hash: Optional[str] = None,
    success: bool = True,
    reason: Optional[str] = None,
):
    """
    Log a swap in structured format.

    Args:
        logger: Trade logger instance
        token_in: Symbol or address of the spent token
        token_out: Symbol or address of the received token
        amount_in: Human-readable amount spent
        amount_out_min: Human-readable minimum output
        tx_hash: Swap transaction hash, if one was broadcast
        success: Whether the swap was mined successfully
        reason: Failure reason, or a note on a failed follow-up step
    """
    status = "SUCCESS" if success else "FAILED"
    msg = (
        f"{status} | {token_in} -> {token_out} | Amount in: {amount_in:f} | "
        f"Min out: {amount_out_min:f}"
    )
    if tx_hash:
        msg += f" | TX: {tx_hash}"
    if reason:
        msg += f" | Reason: {reason}"

    if success:
        logger.info(msg)
    else:
        logger.error(msg)
