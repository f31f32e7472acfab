import logging
from typing import Any, Optional, Tuple

import httpx

from app.secretenv import backend_timeout, backend_url
from app.services.responses.classifier import decode_body

logger = logging.getLogger(__name__)

# (filename, content, content_type) as accepted by httpx `files=`
Upload = Tuple[str, bytes, str]


class BackendError(Exception):
    def __init__(self, status_code: Optional[int], detail: str):
        super().__init__(f"VidyaNav backend error {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class VidyaNavClient:
    """Thin async wrapper over the VidyaNav AI backend. One POST per teacher action, no retries."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def base_url(self) -> str:
        return (self._base_url or backend_url()).rstrip("/")

    async def connect(self):
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self._timeout or backend_timeout(),
                transport=self._transport,
            )
            logger.info(f"VidyaNav client ready for {self.base_url}")

    async def disconnect(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _post(self, path: str, **kwargs) -> Any:
        await self.connect()
        try:
            res = await self._client.post(path, **kwargs)
        except httpx.HTTPError as e:
            raise BackendError(None, str(e)) from e
        if res.is_error:
            raise BackendError(res.status_code, res.text or res.reason_phrase)
        return decode_body(res.content, res.headers.get("content-type"))

    async def ask_assistant(self, prompt: str, file: Optional[Upload] = None) -> Any:
        files = {"file": file} if file else None
        return await self._post("/ai-assistant/", data={"prompt": prompt}, files=files)

    async def generate_worksheet(self, file: Upload, grades: str, language: str) -> Any:
        return await self._post(
            "/generate-worksheet/",
            data={"grades": grades, "language": language},
            files={"file": file},
        )

    async def answer_question(self, question: str, grade_level: int, language: str, textbook: Upload) -> Any:
        return await self._post(
            "/instant-knowledge-upload",
            data={"question": question, "grade_level": str(grade_level), "language": language},
            files={"textbook": textbook},
        )

    async def generate_visual_aid(self, prompt: str, count: int = 1) -> Any:
        return await self._post("/visual-aid", json={"prompt": prompt, "count": count})
