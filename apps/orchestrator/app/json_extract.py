"""
Tolerant extraction of structured data from free-form model text.

The model is asked for bare JSON but routinely wraps it in prose or
markdown fences, truncates it, or answers in plain sentences. Nothing in
here raises on bad input; every helper returns an empty result instead.
"""

from __future__ import annotations

import json
import re
from typing import Any, List, Optional

from shared.logging import get_logger

logger = get_logger(__name__)

_CODE_TOKEN = re.compile(r"\b[A-Za-z]{3}\b")
_IATA_CODE = re.compile(r"^[A-Z]{3}$")


def extract_first_json_object(text: Optional[str]) -> Optional[str]:
    """
    Return the first balanced {...} substring of text, or None.

    Braces inside double-quoted strings do not count towards depth, and a
    backslash inside a string escapes the character after it.
    """
    if not text:
        return None
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def safe_parse_json_candidate(candidate: Optional[str]) -> Optional[Any]:
    if not candidate:
        return None
    try:
        return json.loads(candidate)
    except (ValueError, RecursionError) as e:
        logger.warning("json_candidate_unparsable err=%s candidate=%r", e, candidate[:200])
        return None


def extract_iata_codes(text: Optional[str]) -> List[str]:
    """
    3-letter alphabetic words in text, uppercased, deduplicated in
    first-seen order.

    Words already written in capitals win: in "fly from NYC to the CDG hub"
    only NYC and CDG are codes. Lower/mixed-case words are used only when the
    text has no capitalised ones at all.
    """
    if not text:
        return []
    words = _CODE_TOKEN.findall(text)
    words = [w for w in words if w.isupper()] or words
    seen = dict.fromkeys(w.upper() for w in words)
    return [t for t in seen if _IATA_CODE.match(t)]
