"""
core — 產生器核心

統一匯出例外類別，方便外部 import。

用法：
    from core import PomGeneratorError, EmptyPageError
"""

from core.exceptions import (
    ConfigError,
    EmissionError,
    EmitterError,
    EmptyPageError,
    InvalidConfigError,
    InvalidPageNameError,
    InvalidRootError,
    PageFetchError,
    PageModelError,
    PomGeneratorError,
    ScanError,
    UnsupportedFrameworkOrLanguageError,
)

__all__ = [
    "PomGeneratorError",
    # Scanner
    "ScanError",
    "InvalidRootError",
    "PageFetchError",
    # Page Model
    "PageModelError",
    "EmptyPageError",
    "InvalidPageNameError",
    # Emitter
    "EmitterError",
    "UnsupportedFrameworkOrLanguageError",
    "EmissionError",
    # Config
    "ConfigError",
    "InvalidConfigError",
]
