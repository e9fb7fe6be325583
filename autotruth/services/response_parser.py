import json
import re
from typing import Iterator, Optional

from pydantic import ValidationError

from autotruth.models.analysis import AnalysisResult
from autotruth.services.errors import ParseFailureError

JSON_FENCE_RE = re.compile(r"```json\s*([\s\S]*?)\s*```")
STRAY_FENCE_RE = re.compile(r"```json|```")


def iter_balanced_objects(text: str) -> Iterator[str]:
    """
    Yield each top-level {...} span in text, left to right.

    Braces inside JSON string literals are ignored. If the last opened
    object never closes, the greedy span from its first "{" to the final
    "}" in the text is yielded instead.
    """
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        end = -1
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
                    end = i
                    break

        if end == -1:
            last = text.rfind("}")
            if last > start:
                yield text[start:last + 1]
            return

        yield text[start:end + 1]
        start = text.find("{", end + 1)


def _loads_object(candidate: str) -> Optional[dict]:
    try:
        obj = json.loads(candidate)
    except ValueError:
        return None
    return obj if isinstance(obj, dict) else None


def extract_json_candidate(text: str) -> str:
    """
    Pick the substring of a model reply most likely to be the JSON payload.

    Order: a ```json fenced block, then the first brace-balanced object that
    parses (or the first one found if none do), then the raw text.
    """
    m = JSON_FENCE_RE.search(text)
    if m:
        candidate = m.group(1)
    else:
        objects = list(iter_balanced_objects(text))
        candidate = next((o for o in objects if _loads_object(o) is not None), None)
        if candidate is None:
            candidate = objects[0] if objects else text
    return STRAY_FENCE_RE.sub("", candidate).strip()


def parse_analysis(text: str) -> AnalysisResult:
    candidate = extract_json_candidate(text or "")
    try:
        obj = json.loads(candidate)
    except ValueError as e:
        raise ParseFailureError(f"Failed to parse the AI response: {e}") from e

    if not isinstance(obj, dict):
        raise ParseFailureError(f"Failed to parse the AI response: expected an object, got {type(obj).__name__}")

    try:
        return AnalysisResult.model_validate(obj)
    except ValidationError as e:
        raise ParseFailureError(
            f"Failed to parse the AI response: {e.error_count()} schema violation(s)"
        ) from e
