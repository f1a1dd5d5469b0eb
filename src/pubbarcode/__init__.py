"""
pubbarcode
==========

Publication barcode generator: ISBN-13, ISSN and generic EAN-13 symbols with
optional EAN-2 (issue number) or EAN-5 (price) add-ons, rendered to SVG, PNG
or JPEG.

Basic usage:
    >>> from pubbarcode import render
    >>> svg = render("svg", "978-0-306-40615-7", "51995")
    >>> png = render("png", "0317-8471", "07")

Object API:
    >>> from pubbarcode import PublicationBarcodeGenerator
    >>> gen = PublicationBarcodeGenerator("9780306406157", options={"bar_width": 2})
    >>> gen.symbol.symbol_type
    <SymbolType.ISBN: 'isbn'>
    >>> jpeg = gen.jpeg()

Logging is controlled by environment variables:
    - PUBBARCODE_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (default INFO)
    - PUBBARCODE_LOG_FILE: optional path of a rotating log file
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

__version__ = "0.1.0"
__author__ = "pubbarcode developers"
__description__ = "Publication barcode generator (ISBN / ISSN / EAN-13 with add-ons)"
__license__ = "MIT"
__python_requires__ = ">=3.11"

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

LOGGER_NAMESPACE = "pubbarcode"


def _setup_logging() -> None:
    """
    Configure the package logger.

    - stderr handler for WARNING and above
    - optional rotating file handler (PUBBARCODE_LOG_FILE) for every level
    - format: [timestamp] LEVEL [module.function:line] message

    Idempotent: a second call does nothing once handlers are installed.
    """
    log_level_str = os.environ.get("PUBBARCODE_LOG_LEVEL", "INFO").upper()
    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.INFO)

    root_logger = logging.getLogger(LOGGER_NAMESPACE)
    if root_logger.handlers:
        return

    root_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_file = os.environ.get("PUBBARCODE_LOG_FILE")
    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_path,
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(
                "Could not initialise file logging at %s: %s. Console only.", log_file, e
            )


def get_logger(module_name: str) -> logging.Logger:
    """
    Return a logger inside the ``pubbarcode`` namespace.

    Args:
        module_name: Usually ``__name__``. Names outside the namespace are
            prefixed with ``pubbarcode.``; ``__main__`` becomes ``pubbarcode.main``.
    """
    if module_name == LOGGER_NAMESPACE or module_name.startswith(LOGGER_NAMESPACE + "."):
        full_name = module_name
    elif module_name == "__main__":
        full_name = f"{LOGGER_NAMESPACE}.main"
    else:
        full_name = f"{LOGGER_NAMESPACE}.{module_name.lstrip('.')}"
    return logging.getLogger(full_name)


# Logging first, then the modules that log at import time.
_setup_logging()

from .config import get_config, load_config  # noqa: E402
from .model.enums import AddonKind, OutputFormat, SymbolType  # noqa: E402
from .model.symbol import (  # noqa: E402
    AddonInfo,
    EncodedBars,
    IssnInfo,
    NormalizedPayload,
    PublicationSymbol,
)
from .barcodegen import (  # noqa: E402
    AddonFormatError,
    BarcodeGenError,
    CheckDigitMismatch,
    IdentifierTypeError,
    InvalidIdentifierLength,
    Layout,
    PayloadFormatError,
    PublicationBarcodeGenerator,
    PublicationRenderOptions,
    RenderingBackendError,
    UnsupportedFormatError,
    classify,
    compute_layout,
    ean13_check_digit,
    encode,
    encode_symbol,
    issn_check_char,
    render,
)

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    # utilities
    "get_logger",
    "load_config",
    "get_config",
    # model
    "SymbolType",
    "AddonKind",
    "OutputFormat",
    "NormalizedPayload",
    "IssnInfo",
    "AddonInfo",
    "EncodedBars",
    "PublicationSymbol",
    "Layout",
    # pipeline
    "classify",
    "ean13_check_digit",
    "issn_check_char",
    "encode",
    "encode_symbol",
    "compute_layout",
    "render",
    "PublicationBarcodeGenerator",
    "PublicationRenderOptions",
    # errors
    "BarcodeGenError",
    "InvalidIdentifierLength",
    "CheckDigitMismatch",
    "AddonFormatError",
    "RenderingBackendError",
    "UnsupportedFormatError",
    "PayloadFormatError",
    "IdentifierTypeError",
]

_logger = get_logger(__name__)
_logger.debug("pubbarcode v%s initialised (Python %s)", __version__, sys.version.split()[0])
