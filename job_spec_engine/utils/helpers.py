"""Text helpers shared by the normalizer and the reasoning client."""

import json
import re
from typing import List, Optional

from job_spec_engine.config import MAX_HIGHLIGHTS_PER_EXPERIENCE, MIN_HIGHLIGHT_LENGTH

# Newlines, bullet glyphs, "-"/"*" bullets at line start or after whitespace,
# and whitespace that follows a sentence-ending period
_HIGHLIGHT_SPLIT = re.compile(r"[\r\n•▪◦●]+|(?:^|\s)[-*]\s+|(?<=\.)\s+", re.MULTILINE)


def normalize_whitespace(value: Optional[str]) -> Optional[str]:
    """Collapse runs of whitespace and trim. Returns None for empty strings."""
    if value is None:
        return None
    collapsed = re.sub(r"\s+", " ", value).strip()
    return collapsed or None


def normalize_title_keyword(title: str) -> str:
    """Lowercase, replace punctuation with spaces, collapse whitespace."""
    lowered = (title or "").lower()
    cleaned = re.sub(r"[^a-z0-9\s]", " ", lowered)
    return re.sub(r"\s+", " ", cleaned).strip()


def split_highlights(
    highlights: Optional[str],
    max_items: int = MAX_HIGHLIGHTS_PER_EXPERIENCE,
    min_length: int = MIN_HIGHLIGHT_LENGTH,
) -> List[str]:
    """
    Split free-text highlights into a list. Each fragment is whitespace-normalized,
    loses a single trailing period, and is dropped if shorter than min_length.
    """
    if not highlights:
        return []
    result: List[str] = []
    for fragment in _HIGHLIGHT_SPLIT.split(highlights):
        text = normalize_whitespace(fragment)
        if not text:
            continue
        if text.endswith("."):
            text = text[:-1].rstrip()
        if len(text) < min_length:
            continue
        result.append(text)
        if len(result) >= max_items:
            break
    return result


def parse_llm_json(text: str) -> Optional[dict]:
    """Parse a JSON object from an LLM response, stripping markdown code fences if present."""
    raw = (text or "").strip()
    if raw.startswith("```"):
        raw = re.sub(r"^```(?:json)?\s*", "", raw)
        raw = re.sub(r"\s*```$", "", raw)
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None
