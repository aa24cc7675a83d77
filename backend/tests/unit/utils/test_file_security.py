"""
Unit tests for evidence document validation and filename sanitization.
"""

import pytest

from privacywatch.utils.file_security import (
    ERROR_EXTENSION_MISMATCH,
    ERROR_INVALID_NAME,
    ERROR_INVALID_SIZE,
    ERROR_MISSING_NAME,
    ERROR_TOO_LARGE,
    ERROR_TYPE_NOT_ALLOWED,
    get_file_extension,
    sanitize_filename,
    validate_document,
)

MB = 1024 * 1024


@pytest.mark.unit
class TestValidateDocument:
    """Test metadata checks."""

    def test_valid_pdf(self) -> None:
        result = validate_document("doc.pdf", 5 * MB, "application/pdf")
        assert result.is_valid
        assert result.errors == []

    def test_reports_every_failure(self) -> None:
        result = validate_document("doc.exe", 20 * MB, "application/pdf")
        assert not result.is_valid
        assert result.errors == [ERROR_TOO_LARGE, ERROR_EXTENSION_MISMATCH]

    def test_exactly_max_size_accepted(self) -> None:
        assert validate_document("scan.png", 10 * MB, "image/png").is_valid

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_missing_name(self, name) -> None:
        assert ERROR_MISSING_NAME in validate_document(name, 100, "application/pdf").errors

    @pytest.mark.parametrize("name", ["...", "../..", ". ."])
    def test_name_empty_after_sanitizing(self, name) -> None:
        result = validate_document(name, 100, "application/pdf")
        assert result.errors == [ERROR_INVALID_NAME]

    def test_custom_max_size(self) -> None:
        assert validate_document("a.pdf", 2048, "application/pdf", max_size=1000).errors == [ERROR_TOO_LARGE]

    @pytest.mark.parametrize("size", [0, -1])
    def test_invalid_size(self, size) -> None:
        assert validate_document("a.pdf", size, "application/pdf").errors == [ERROR_INVALID_SIZE]

    def test_type_not_allowed(self) -> None:
        result = validate_document("run.sh", 100, "text/x-shellscript")
        assert result.errors == [ERROR_TYPE_NOT_ALLOWED]

    @pytest.mark.parametrize("name", ["foto.jpg", "FOTO.JPEG"])
    def test_jpeg_extensions(self, name) -> None:
        assert validate_document(name, 100, "image/jpeg").is_valid

    def test_extension(self) -> None:
        assert get_file_extension("Relatorio.Final.DOCX") == "docx"
        assert get_file_extension("") == ""


@pytest.mark.unit
class TestSanitizeFilename:
    def test_path_traversal_removed(self) -> None:
        assert sanitize_filename("../../etc/passwd") == "passwd"

    def test_spaces_replaced(self) -> None:
        assert sanitize_filename("politica de privacidade.pdf") == "politica_de_privacidade.pdf"

    def test_long_name_keeps_extension(self) -> None:
        sanitized = sanitize_filename("a" * 300 + ".pdf")
        assert len(sanitized) <= 255
        assert sanitized.endswith(".pdf")

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            sanitize_filename("")
