# app/services/responses/render.py
from __future__ import annotations
import json
from typing import List, Optional
from .contracts import (
    InstantKnowledgeResult,
    NormalizedResult,
    UnknownResult,
    VisualAidResult,
    WorksheetEntry,
    WorksheetResult,
)
from .tools import md_text, resolve_image_url

def _worksheet_block(ws: WorksheetEntry) -> str:
    lines = [f"## Grade {ws.grade_level} Worksheet\n"]
    if isinstance(ws.problems, str):
        # pre-formatted by the backend, usually markdown already
        lines.append(ws.problems.strip())
    elif ws.problems:
        for i, p in enumerate(ws.problems, start=1):
            lines.append(f"{i}. {md_text(p)}")
    else:
        lines.append("No problems generated for this grade.")
    return "\n".join(lines)

def _worksheet_md(result: WorksheetResult) -> str:
    blocks = ["# Generated Worksheet"]
    if not result.worksheets:
        blocks.append("No worksheet data found.")
    blocks.extend(_worksheet_block(ws) for ws in result.worksheets)
    return "\n\n".join(blocks)

def _instant_knowledge_md(result: InstantKnowledgeResult) -> str:
    lines = ["## AI Answer\n", md_text(result.answer)]
    meta: List[str] = []
    if result.analogy_used is not None:
        meta.append(f"- **Analogy used:** {'Yes' if result.analogy_used else 'No'}")
    if result.confidence_score is not None:
        meta.append(f"- **Confidence:** {result.confidence_score * 100:.1f}%")
    if result.model_used:
        meta.append(f"- **Model:** {result.model_used}")
    if meta:
        lines.append("")
        lines.extend(meta)
    if result.source_chunks:
        lines.append(f"\n### Source Chunks ({len(result.source_chunks)})\n")
        lines.extend(f"{i}. {md_text(c)}" for i, c in enumerate(result.source_chunks, start=1))
    return "\n".join(lines)

def _visual_aid_md(result: VisualAidResult, base_url: Optional[str]) -> str:
    blocks = ["## Visual Aid"]
    for img in result.images:
        lines = [f"![{img.caption}]({resolve_image_url(img.image_url, base_url)})"]
        if img.caption:
            lines.append(f"**{md_text(img.caption)}**")
        if img.topic:
            lines.append(f"_Topic: {md_text(img.topic)}_")
        blocks.append("\n\n".join(lines))
    return "\n\n".join(blocks)

def _unknown_md(result: UnknownResult) -> str:
    if isinstance(result.raw, str):
        return "\n".join(["## Response", "```", result.raw, "```"])
    body = json.dumps(result.raw, indent=2, ensure_ascii=False, default=str)
    return "\n".join(["## Response", "```json", body, "```"])

def build_markdown(result: NormalizedResult, base_url: Optional[str] = None) -> str:
    if isinstance(result, WorksheetResult):
        return _worksheet_md(result)
    if isinstance(result, InstantKnowledgeResult):
        return _instant_knowledge_md(result)
    if isinstance(result, VisualAidResult):
        return _visual_aid_md(result, base_url)
    return _unknown_md(result)
