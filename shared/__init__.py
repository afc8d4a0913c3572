"""
ELFScope Shared Module
=======================

Configuration, logging and console helpers used by the ``elfscope``
package.
"""

from shared.config import ElfScopeConfig, get_config

__all__ = ["ElfScopeConfig", "get_config"]
