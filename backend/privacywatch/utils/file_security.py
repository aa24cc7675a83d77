"""
File Security Utilities
Validates evidence document metadata before upload and sanitizes stored filenames
"""

import os
import re
import unicodedata
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..constants import ALLOWED_DOCUMENT_EXTENSIONS, MAX_DOCUMENT_SIZE

ERROR_MISSING_NAME = "Nome do arquivo é obrigatório"
ERROR_INVALID_NAME = "Nome do arquivo inválido"
ERROR_TOO_LARGE = "Arquivo muito grande. Tamanho máximo: 10MB"
ERROR_INVALID_SIZE = "Tamanho do arquivo inválido"
ERROR_TYPE_NOT_ALLOWED = "Tipo de arquivo não permitido. Tipos aceitos: PDF, DOCX, DOC, JPEG, PNG, GIF"
ERROR_EXTENSION_MISMATCH = "Extensão do arquivo não corresponde ao tipo do arquivo"


@dataclass
class DocumentValidationResult:
    """Outcome of validate_document(). errors lists every failed check."""

    is_valid: bool
    errors: List[str] = field(default_factory=list)


def get_file_extension(filename: Optional[str]) -> str:
    """
    Return the lowercased text after the last dot.

    A name without a dot is returned whole, lowercased.
    """
    if not filename:
        return ""
    return filename.rsplit(".", 1)[-1].lower()


def _has_storable_name(file_name: str) -> bool:
    try:
        sanitize_filename(file_name)
    except ValueError:
        return False
    return True


def validate_document(
    file_name: Optional[str],
    file_size: int,
    mime_type: Optional[str],
    max_size: int = MAX_DOCUMENT_SIZE,
    allowed_extensions: Optional[Dict[str, List[str]]] = None,
) -> DocumentValidationResult:
    """
    Validate evidence document metadata.

    Every check runs; the result carries all failures, not only the first.

    Checks:
    - File name present, not blank and not empty once sanitized
    - 0 < size <= max_size
    - MIME type in the allow-list
    - Extension consistent with the declared MIME type

    Args:
        file_name: Original filename from upload
        file_size: Size in bytes
        mime_type: Declared MIME type
        max_size: Maximum size in bytes (default: 10MB)
        allowed_extensions: MIME type -> accepted extensions

    Returns:
        DocumentValidationResult
    """
    extensions_by_type = allowed_extensions if allowed_extensions is not None else ALLOWED_DOCUMENT_EXTENSIONS
    errors: List[str] = []

    if not file_name or not file_name.strip():
        errors.append(ERROR_MISSING_NAME)
    elif not _has_storable_name(file_name):
        errors.append(ERROR_INVALID_NAME)

    if file_size > max_size:
        errors.append(ERROR_TOO_LARGE)

    if file_size <= 0:
        errors.append(ERROR_INVALID_SIZE)

    if mime_type not in extensions_by_type:
        errors.append(ERROR_TYPE_NOT_ALLOWED)

    # Unknown types already failed above; only compare known ones
    expected = extensions_by_type.get(mime_type or "")
    extension = get_file_extension(file_name)
    if expected and extension and extension not in expected:
        errors.append(ERROR_EXTENSION_MISMATCH)

    return DocumentValidationResult(is_valid=not errors, errors=errors)


def sanitize_filename(filename: str, max_length: int = 255) -> str:
    """
    Sanitize an evidence filename before it is stored on a task

    Security measures:
    - Removes path separators and directory traversal patterns
    - Removes null bytes and control characters
    - Normalizes unicode characters
    - Limits length while preserving the extension

    Raises:
        ValueError: If filename is invalid or becomes empty after sanitization
    """
    if not filename:
        raise ValueError("Filename cannot be empty")

    filename = unicodedata.normalize("NFKD", filename)

    filename = os.path.basename(filename)
    filename = filename.replace("\\", "").replace("/", "")

    filename = "".join(char for char in filename if ord(char) >= 32)
    filename = filename.replace("..", "")
    filename = filename.strip(". ")

    # Keep: alphanumeric, dash, underscore, period
    filename = re.sub(r"[^a-zA-Z0-9._-]", "_", filename)

    if filename.startswith("."):
        filename = "file" + filename

    if len(filename) > max_length:
        name, ext = os.path.splitext(filename)
        name = name[: max_length - len(ext) - 1]
        filename = name + ext

    if not filename or filename in ("", ".", ".."):
        raise ValueError("Invalid filename after sanitization")

    return filename
