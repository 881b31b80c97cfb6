"""
rs-mule - Run RightScripts and Chef recipes on instances selected by tag.

Resolves an executable (RightScript name or href, or recipe name) once and
runs it on every instance matching a tag set through the RightScale API.
"""

__version__ = "0.1.0"
__author__ = "Ryan Geyer"


__all__ = [
    "RunExecutable",
    "RunExecutableOptions",
    "load_auth_config",
    "RsMuleError",
    "RightScriptNotFound",
    "ConfigError",
]

from .config import RunExecutableOptions, load_auth_config
from .errors import ConfigError, RightScriptNotFound, RsMuleError
from .run_executable import RunExecutable
