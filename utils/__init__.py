"""
Utils Package
Provides utility modules for the Guild MCP server.
"""

from .monitoring.audit_log import log_admin_action
from .monitoring.logger import setup_smart_logging

__all__ = [
    # Audit
    "log_admin_action",
    # Logger
    "setup_smart_logging",
]
