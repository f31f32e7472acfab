import logging
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from app.services.ai import BackendError, VidyaNavClient
from app.services.responses.classifier import classify
from app.services.responses.contracts import AssistantResponse
from app.services.responses.render import build_markdown
from app.singleton import get_vidyanav

router = APIRouter(prefix="/api/visual-aid")

# Set up logging
logger = logging.getLogger("visual_aid")
logger.setLevel(logging.INFO)

# ----------------------------
# Pydantic Models
# ----------------------------

class VisualAidRequest(BaseModel):
    prompt: str = Field(..., min_length=1)
    count: int = Field(1, ge=1, le=10)  # how many images


# ----------------------------
# Generate Visual Aid Images
# ----------------------------
@router.post("", response_model=AssistantResponse)
async def generate_visual_aid(
    request: VisualAidRequest,
    vidyanav: VidyaNavClient = Depends(get_vidyanav),
):
    try:
        raw = await vidyanav.generate_visual_aid(request.prompt, request.count)
    except BackendError as e:
        logger.error(f"Visual aid generation failed: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="BACKEND_REQUEST_FAILED")

    result = classify(raw)
    if result.kind != "visual_aid":
        logger.warning(f"Visual aid endpoint returned a {result.kind} result")
    return AssistantResponse(result=result, markdown=build_markdown(result, vidyanav.base_url))
