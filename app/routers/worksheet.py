import logging
from typing import Literal
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from app.services.ai import BackendError, VidyaNavClient
from app.services.responses.classifier import classify
from app.services.responses.contracts import AssistantResponse
from app.services.responses.render import build_markdown
from app.singleton import get_vidyanav

router = APIRouter(prefix="/api/worksheet")

# Set up logging
logger = logging.getLogger("worksheet")
logger.setLevel(logging.INFO)

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB
ACCEPTED_IMAGE_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")


# ----------------------------
# Generate Worksheet From Textbook Page
# ----------------------------
@router.post("", response_model=AssistantResponse)
async def generate_worksheet(
    textbook_image: UploadFile = File(...),
    grades: str = Form(..., min_length=1),
    language: Literal["English", "Hindi", "Kannada"] = Form("English"),
    vidyanav: VidyaNavClient = Depends(get_vidyanav),
):
    if textbook_image.content_type not in ACCEPTED_IMAGE_TYPES:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="UNSUPPORTED_IMAGE_TYPE"
        )
    content = await textbook_image.read()
    if len(content) > MAX_FILE_SIZE:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="FILE_TOO_LARGE"
        )

    try:
        raw = await vidyanav.generate_worksheet(
            (textbook_image.filename or "textbook", content, textbook_image.content_type),
            grades.strip(),
            language,
        )
    except BackendError as e:
        logger.error(f"Worksheet generation failed for grades {grades!r}: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="BACKEND_REQUEST_FAILED")

    result = classify(raw)
    return AssistantResponse(result=result, markdown=build_markdown(result, vidyanav.base_url))
