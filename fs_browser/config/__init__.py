"""
Config package for fs_browser.

Responsible for:
- config model (GlobalConfig)
- config I/O helpers (load_global_config)
"""

from .model import GlobalConfig
from .io import load_global_config
