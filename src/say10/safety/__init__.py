"""Command safety gateway.

This module classifies raw command strings, decides whether a human has to
approve them, and gates execution on that decision.
"""

from say10.safety.classifier import (
    CommandClassification,
    classify,
    get_approval_reason,
    is_destructive,
    requires_sudo,
)
from say10.safety.models import (
    ApprovalHandler,
    ApprovalRequest,
    ApprovalResponse,
    CommandValidation,
)
from say10.safety.patterns import sanitize_search_pattern, validate_pattern
from say10.safety.service import ApprovalService
from say10.safety.whitelist import WhitelistConfig, WhitelistStore, is_read_only

__all__ = [
    "ApprovalHandler",
    "ApprovalRequest",
    "ApprovalResponse",
    "ApprovalService",
    "CommandClassification",
    "CommandValidation",
    "WhitelistConfig",
    "WhitelistStore",
    "classify",
    "get_approval_reason",
    "is_destructive",
    "is_read_only",
    "requires_sudo",
    "sanitize_search_pattern",
    "validate_pattern",
]
