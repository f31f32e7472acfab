import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from app.services.ai import BackendError, VidyaNavClient
from app.services.responses.classifier import classify
from app.services.responses.contracts import AssistantResponse
from app.services.responses.render import build_markdown
from app.singleton import get_vidyanav

router = APIRouter(prefix="/api/assistant")

# Set up logging
logger = logging.getLogger("assistant")
logger.setLevel(logging.INFO)


# ----------------------------
# Free-form Teacher Request
# ----------------------------
@router.post("", response_model=AssistantResponse)
async def ask_assistant(
    prompt: str = Form(""),
    file: Optional[UploadFile] = File(None),
    vidyanav: VidyaNavClient = Depends(get_vidyanav),
):
    """
    Forward a free-text request (and an optional textbook image, PDF or DOCX)
    to the AI assistant. The backend picks the intent itself, so the reply can
    be any of the known result shapes.
    """
    prompt = prompt.strip()
    if not prompt and file is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="PROMPT_OR_FILE_REQUIRED"
        )

    upload = None
    if file is not None:
        upload = (file.filename or "upload", await file.read(), file.content_type or "application/octet-stream")

    try:
        raw = await vidyanav.ask_assistant(prompt, upload)
    except BackendError as e:
        logger.error(f"Assistant request failed: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="BACKEND_REQUEST_FAILED")

    result = classify(raw)
    logger.info(f"Assistant replied with a {result.kind} result")
    return AssistantResponse(result=result, markdown=build_markdown(result, vidyanav.base_url))
