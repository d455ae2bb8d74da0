"""Locate a JSON object embedded in free-form model output."""

from __future__ import annotations

import json


def extract_json_object(text: str) -> str | None:
    """Return the first balanced ``{...}`` substring of `text` that parses as JSON.

    Models tend to wrap JSON in prose or markdown code fences, so the scan
    starts at each opening brace and tracks nesting depth, ignoring braces
    that appear inside string literals. Balanced spans that are not valid
    JSON (prose like ``{see below}``) are skipped. When no span parses, the
    first balanced one is returned so the caller can report it; None means
    no balanced span exists at all.
    """
    first_balanced = None
    start = text.find("{")
    while start != -1:
        end = _match_closing_brace(text, start)
        if end is not None:
            candidate = text[start : end + 1]
            try:
                json.loads(candidate)
            except json.JSONDecodeError:
                if first_balanced is None:
                    first_balanced = candidate
            else:
                return candidate
        start = text.find("{", start + 1)
    return first_balanced


def _match_closing_brace(text: str, start: int) -> int | None:
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
                return i
    return None
