from __future__ import annotations
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# ---------- Base config: camelCase on the wire, immutable once built ----------

class _Normalized(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

# ---------- Payload pieces ----------

class WorksheetEntry(_Normalized):
    grade_level: int
    # list of problems, or one pre-formatted prose block (grade_<n> shape)
    problems: Union[List[str], str]

class VisualAidImage(_Normalized):
    image_url: str = Field(min_length=1)
    caption: str = ""
    topic: str = ""

# ---------- Result variants ----------

class WorksheetResult(_Normalized):
    kind: Literal["worksheet"] = "worksheet"
    worksheets: List[WorksheetEntry] = Field(default_factory=list)

    def raw_equivalent(self) -> Dict[str, Any]:
        return {
            "worksheets": [
                {"gradeLevel": w.grade_level, "problems": w.problems if isinstance(w.problems, str) else list(w.problems)}
                for w in self.worksheets
            ]
        }

class InstantKnowledgeResult(_Normalized):
    kind: Literal["instant_knowledge"] = "instant_knowledge"
    answer: str = Field(min_length=1)
    analogy_used: Optional[bool] = None
    confidence_score: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    model_used: Optional[str] = None
    source_chunks: Optional[List[str]] = None

    def raw_equivalent(self) -> Dict[str, Any]:
        raw: Dict[str, Any] = {"answer": self.answer}
        for key in ("analogy_used", "confidence_score", "model_used", "source_chunks"):
            value = getattr(self, key)
            if value is not None:
                raw[key] = list(value) if key == "source_chunks" else value
        return raw

class VisualAidResult(_Normalized):
    kind: Literal["visual_aid"] = "visual_aid"
    images: List[VisualAidImage] = Field(min_length=1)

    def raw_equivalent(self) -> List[Dict[str, Any]]:
        return [{"image_url": i.image_url, "caption": i.caption, "topic": i.topic} for i in self.images]

class UnknownResult(_Normalized):
    kind: Literal["unknown"] = "unknown"
    raw: Any = None

    def raw_equivalent(self) -> Any:
        return self.raw

NormalizedResult = Annotated[
    Union[WorksheetResult, InstantKnowledgeResult, VisualAidResult, UnknownResult],
    Field(discriminator="kind"),
]

# ---------- Final API response ----------

class AssistantResponse(BaseModel):
    result: NormalizedResult
    markdown: str
