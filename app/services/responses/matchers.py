"""
Shape matchers for VidyaNav backend responses.

The backend has emitted several shapes for the same logical result over time:
worksheets as `grade_<n>` keys, as an explicit `worksheets` array, or inside an
`intent`/`type` envelope; visual aids as a bare array or as a single object.
Each historical shape gets its own matcher here. A matcher returns a
NormalizedResult when it recognizes the value and None otherwise.

Registration order below is the detection order used by `classify`.
"""
from __future__ import annotations
import logging
import math
from typing import Any, List, Optional

from .contracts import (
    InstantKnowledgeResult,
    VisualAidImage,
    VisualAidResult,
    WorksheetEntry,
    WorksheetResult,
)
from .registry import register_matcher
from .tools import (
    as_int,
    grade_keys,
    image_url_of,
    is_mapping,
    is_sequence,
    non_empty_str,
    string_items,
)

logger = logging.getLogger(__name__)

def _text(value) -> str:
    return value if isinstance(value, str) else ""

def _image(item, url: str) -> VisualAidImage:
    return VisualAidImage(
        image_url=url,
        caption=_text(item.get("caption")) if is_mapping(item) else "",
        topic=_text(item.get("topic")) if is_mapping(item) else "",
    )

def _images_from(items) -> List[VisualAidImage]:
    out: List[VisualAidImage] = []
    for item in items:
        url = image_url_of(item)
        if url is None and non_empty_str(item):
            url = item
            item = None
        if url is None:
            continue
        out.append(_image(item, url))
    return out

def _problems(value):
    """Prose stays prose; lists keep their string items; missing means empty."""
    if value is None:
        return []
    if isinstance(value, str):
        return value
    return string_items(value)

def _append_unique(entries: List[WorksheetEntry], grade: int, problems) -> None:
    if any(e.grade_level == grade for e in entries):
        logger.debug("Duplicate grade level %s skipped", grade)
        return
    entries.append(WorksheetEntry(grade_level=grade, problems=problems))

# ---------- 1. visual aid as a bare array ----------

def match_visual_aid_array(raw: Any) -> Optional[VisualAidResult]:
    if not is_sequence(raw) or not raw:
        return None
    if image_url_of(raw[0]) is None:
        return None
    images: List[VisualAidImage] = []
    for item in raw:
        url = image_url_of(item)
        if url is not None:
            images.append(_image(item, url))
    return VisualAidResult(images=images)

# ---------- 2. worksheet as grade_<n> prose blocks ----------

def match_worksheet_grade_keys(raw: Any) -> Optional[WorksheetResult]:
    if not is_mapping(raw):
        return None
    entries: List[WorksheetEntry] = []
    for key, grade in grade_keys(raw):
        text = non_empty_str(raw[key])
        if grade is None or text is None:
            continue
        _append_unique(entries, grade, text)
    if not entries:
        return None
    return WorksheetResult(worksheets=entries)

# ---------- 3. explicit worksheets array / intent envelope ----------

def _entry_from_record(record, entries: List[WorksheetEntry]) -> None:
    if not is_mapping(record):
        logger.debug("Worksheet record is not a mapping: %r", record)
        return
    grade = as_int(record.get("gradeLevel", record.get("grade_level")))
    problems = _problems(record.get("problems"))
    if grade is None or problems is None:
        logger.debug("Malformed worksheet record skipped: %r", record)
        return
    _append_unique(entries, grade, problems)

def match_worksheet_explicit(raw: Any) -> Optional[WorksheetResult]:
    if not is_mapping(raw):
        return None
    worksheets = raw.get("worksheets")
    tagged = raw.get("intent") == "worksheet" or raw.get("type") == "worksheet"
    keys = grade_keys(raw)

    entries: List[WorksheetEntry] = []
    if is_sequence(worksheets) and not tagged and worksheets and not any(is_mapping(w) for w in worksheets):
        # a bare list with no records in it is not a worksheets array
        return None
    if is_sequence(worksheets):
        for record in worksheets:
            _entry_from_record(record, entries)
    elif tagged and keys:
        for key, grade in keys:
            problems = _problems(raw[key])
            if grade is None or problems is None:
                logger.debug("Malformed grade key skipped: %s", key)
                continue
            _append_unique(entries, grade, problems)
    elif tagged and "worksheets" in raw:
        logger.warning("Worksheet envelope with unusable worksheets field: %r", type(worksheets).__name__)
    else:
        return None
    return WorksheetResult(worksheets=entries)

# ---------- 4. instant knowledge answer ----------

def _confidence(value) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    if math.isnan(value) or not 0.0 <= value <= 1.0:
        return None
    return value

def match_instant_knowledge(raw: Any) -> Optional[InstantKnowledgeResult]:
    if not is_mapping(raw):
        return None
    answer = non_empty_str(raw.get("answer"))
    if answer is None or not answer.strip():
        return None
    analogy = raw.get("analogy_used")
    model = raw.get("model_used")
    return InstantKnowledgeResult(
        answer=answer,
        analogy_used=analogy if isinstance(analogy, bool) else None,
        confidence_score=_confidence(raw.get("confidence_score")),
        model_used=model if isinstance(model, str) else None,
        source_chunks=string_items(raw.get("source_chunks")),
    )

# ---------- 5. visual aid as a single object ----------

def match_visual_aid_object(raw: Any) -> Optional[VisualAidResult]:
    if not is_mapping(raw):
        return None
    url = image_url_of(raw)
    if url is not None:
        return VisualAidResult(images=[_image(raw, url)])

    for field in ("images", "visuals"):
        value = raw.get(field)
        if is_sequence(value):
            images = _images_from(value)
        elif is_mapping(value) or non_empty_str(value):
            images = _images_from([value])
        else:
            continue
        if images:
            return VisualAidResult(images=images)
    return None

register_matcher("visual_aid_array", match_visual_aid_array)
register_matcher("worksheet_grade_keys", match_worksheet_grade_keys)
register_matcher("worksheet_explicit", match_worksheet_explicit)
register_matcher("instant_knowledge", match_instant_knowledge)
register_matcher("visual_aid_object", match_visual_aid_object)
