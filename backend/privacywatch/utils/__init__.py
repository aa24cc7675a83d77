"""
PrivacyWatch Utility Functions
Shared utilities for log sanitization and document validation
"""

from privacywatch.utils.file_security import DocumentValidationResult, sanitize_filename, validate_document  # noqa: F401
from privacywatch.utils.logging_security import (  # noqa: F401
    configure_logging,
    create_audit_log_entry,
    sanitize_for_log,
    sanitize_id_for_log,
)
