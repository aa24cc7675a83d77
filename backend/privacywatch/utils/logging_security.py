"""
Security Logging Utilities for PrivacyWatch
Prevents log injection attacks (CWE-117) and information disclosure in logs.

SECURITY FEATURES:
- Input sanitization to prevent log injection
- Sensitive data redaction
- Consistent log formatting
"""

import logging
import re
from typing import Any, Optional

logger = logging.getLogger(__name__)

# Patterns for detecting potentially malicious content
LOG_INJECTION_PATTERNS = [
    r"[\r\n]",  # CRLF injection
    r"%0[ad]",  # URL-encoded CRLF
    r"\\[rn]",  # Escaped newlines
    r"\x00",  # Null bytes
    r"[\x01-\x08\x0b\x0c\x0e-\x1f\x7f]",  # Control characters
]

# Word characters include accented letters (sector names, Portuguese prompts)
SAFE_LOG_PATTERN = re.compile(r"^[\w.@\-\s]+$")

UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)
IPV4_PATTERN = re.compile(r"^(?:[0-9]{1,3}\.){3}[0-9]{1,3}$")
IPV6_PATTERN = re.compile(r"^[0-9a-fA-F:]+$")


def sanitize_for_log(value: Optional[Any], max_length: int = 100, allow_special: bool = False) -> str:
    """
    Sanitize any value for safe logging.

    Args:
        value: Value to sanitize
        max_length: Maximum length of output
        allow_special: Whether to allow some special characters

    Returns:
        str: Sanitized string safe for logging
    """
    if value is None:
        return "null"

    str_value = str(value)

    if len(str_value) > max_length:
        str_value = str_value[:max_length] + "..."

    for pattern in LOG_INJECTION_PATTERNS:
        str_value = re.sub(pattern, "", str_value)

    if not allow_special and not SAFE_LOG_PATTERN.match(str_value):
        str_value = re.sub(r"[^\w.@\-\s]", "", str_value)

    if not str_value.strip():
        return "[sanitized]"

    return str_value.strip()


def sanitize_id_for_log(id_value: Optional[Any]) -> str:
    """
    Sanitize ID values for logging.

    Args:
        id_value: ID to sanitize (string, int, UUID, etc.)

    Returns:
        str: Sanitized ID
    """
    if id_value is None:
        return "[no_id]"

    str_id = str(id_value)

    if UUID_PATTERN.match(str_id) or str_id.isdigit():
        return str_id

    return sanitize_for_log(str_id, max_length=50)


def sanitize_ip_for_log(ip_address: Optional[str]) -> str:
    """Sanitize IP address for logging."""
    if not ip_address:
        return "[no_ip]"

    if IPV4_PATTERN.match(ip_address):
        return ip_address

    if IPV6_PATTERN.match(ip_address) and "::" in ip_address:
        return ip_address

    return sanitize_for_log(ip_address, max_length=45)


def sanitize_error_message_for_log(error_msg: Optional[str]) -> str:
    """
    Sanitize error messages for logging to prevent information disclosure.

    Args:
        error_msg: Error message to sanitize

    Returns:
        str: Sanitized error message
    """
    if not error_msg:
        return "[no_error_message]"

    str_msg = str(error_msg)

    sensitive_patterns = [
        (r"password[=:\s]+[^\s]+", "password=[REDACTED]"),
        (r"token[=:\s]+[^\s]+", "token=[REDACTED]"),
        (r"secret[=:\s]+[^\s]+", "secret=[REDACTED]"),
        (r"[0-9a-fA-F]{32,}", "[HEX_REDACTED]"),
    ]

    for pattern, replacement in sensitive_patterns:
        str_msg = re.sub(pattern, replacement, str_msg, flags=re.IGNORECASE)

    return sanitize_for_log(str_msg, max_length=500, allow_special=True)


def create_audit_log_entry(
    action: str,
    user_id: Optional[str] = None,
    resource_type: Optional[str] = None,
    resource_id: Optional[str] = None,
    ip_address: Optional[str] = None,
    success: bool = True,
    error_message: Optional[str] = None,
) -> str:
    """
    Create a standardized single-line audit log entry.

    Returns:
        str: Formatted audit log entry
    """
    safe_type = sanitize_for_log(resource_type) if resource_type else "unknown_type"
    parts = [
        f"action={sanitize_for_log(action)}",
        f"user={sanitize_id_for_log(user_id)}",
        f"resource={safe_type}:{sanitize_id_for_log(resource_id)}",
        f"ip={sanitize_ip_for_log(ip_address)}",
        f"success={success}",
    ]

    if error_message and not success:
        parts.append(f"error={sanitize_error_message_for_log(error_message)}")

    return " | ".join(parts)


def configure_logging(level: str = "INFO", log_format: Optional[str] = None) -> None:
    """Configure the root logger once for the application process."""
    root = logging.getLogger()
    root.setLevel(level)

    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(log_format or "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        root.addHandler(handler)
