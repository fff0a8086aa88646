"""say10 - command safety gateway for an AI server administrator.

Classifies shell commands issued by an agent and makes sure destructive or
privileged ones only run after a human approved them.
"""

__version__ = "0.1.0"

from say10.config import Settings, get_settings, reload_settings

__all__ = ["Settings", "get_settings", "reload_settings", "__version__"]
