import logging
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from app.services.ai import BackendError, VidyaNavClient
from app.services.responses.classifier import classify
from app.services.responses.contracts import AssistantResponse
from app.services.responses.render import build_markdown
from app.singleton import get_vidyanav

router = APIRouter(prefix="/api/instant-knowledge")

# Set up logging
logger = logging.getLogger("instant_knowledge")
logger.setLevel(logging.INFO)

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB


# ----------------------------
# Answer Student Question From Textbook
# ----------------------------
@router.post("", response_model=AssistantResponse)
async def answer_question(
    question: str = Form(..., min_length=10),
    grade_level: int = Form(..., ge=1, le=12),
    language: str = Form("English"),
    textbook_pdf: UploadFile = File(...),
    vidyanav: VidyaNavClient = Depends(get_vidyanav),
):
    """Answer a student's question grounded in an uploaded textbook PDF."""
    if textbook_pdf.content_type != "application/pdf":
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="PDF_REQUIRED"
        )
    content = await textbook_pdf.read()
    if len(content) > MAX_FILE_SIZE:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="FILE_TOO_LARGE"
        )

    try:
        raw = await vidyanav.answer_question(
            question, grade_level, language,
            (textbook_pdf.filename or "textbook.pdf", content, "application/pdf"),
        )
    except BackendError as e:
        logger.error(f"Instant knowledge request failed: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="BACKEND_REQUEST_FAILED")

    result = classify(raw)
    return AssistantResponse(result=result, markdown=build_markdown(result, vidyanav.base_url))
