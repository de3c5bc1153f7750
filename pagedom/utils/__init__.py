"""
Utility modules for pagedom applications.
"""

from pagedom.utils.config import Config
from pagedom.utils.logging import setup_logging, log_exception, PerformanceLogger

__all__ = [
    'Config',
    'setup_logging',
    'log_exception',
    'PerformanceLogger',
]
