from .analysis import register_analysis_tools
from .auth import register_auth_tools

__all__ = [
    "register_analysis_tools",
    "register_auth_tools",
]
