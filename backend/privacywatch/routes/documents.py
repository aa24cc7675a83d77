"""
Document API Routes
"""

from fastapi import APIRouter, Depends

from ..models import RequestContext
from ..schemas import DocumentValidationResponse, EvidenceUploadRequest
from ..utils.file_security import validate_document
from .dependencies import ServiceContainer, get_container, get_request_context

router = APIRouter(prefix="/documents", tags=["Documents"])


@router.post("/validate", response_model=DocumentValidationResponse)
async def validate_document_metadata(
    request: EvidenceUploadRequest,
    context: RequestContext = Depends(get_request_context),
    container: ServiceContainer = Depends(get_container),
) -> DocumentValidationResponse:
    """
    Check upload metadata before sending the file. Reports every violation.
    """
    result = validate_document(
        request.file_name, request.file_size, request.mime_type, max_size=container.settings.max_upload_size
    )
    return DocumentValidationResponse(is_valid=result.is_valid, errors=result.errors)
