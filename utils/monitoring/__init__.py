"""Monitoring utilities - Logging and audit trail."""

from .audit_log import AuditLogger, audit, log_admin_action
from .logger import JSONLogFormatter, SmartLogFormatter, setup_smart_logging
