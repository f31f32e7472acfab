from fastapi import APIRouter, Depends, Request
from app.services.ai import VidyaNavClient
from app.services.responses.classifier import classify_body
from app.services.responses.contracts import AssistantResponse
from app.services.responses.render import build_markdown
from app.singleton import get_vidyanav

router = APIRouter(prefix="/api/classify")


# ----------------------------
# Classify An Already-Fetched Backend Response
# ----------------------------
@router.post("", response_model=AssistantResponse)
async def classify_response(request: Request, vidyanav: VidyaNavClient = Depends(get_vidyanav)):
    body = await request.body()
    result = classify_body(body, request.headers.get("content-type"))
    return AssistantResponse(result=result, markdown=build_markdown(result, vidyanav.base_url))
