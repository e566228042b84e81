"""JSON extraction from free-form model output."""

import json
import re
from typing import Any, Optional

_FENCE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)
_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def parse_json_object(text: str) -> dict[str, Any]:
    """Parse the JSON object in a model reply.

    Tries a fenced block first, then the outermost ``{...}`` span, then the
    whole text.

    Raises:
        json.JSONDecodeError: If nothing parses.
        ValueError: If the parsed JSON is not an object.
    """
    fence = _FENCE.search(text)
    if fence:
        data = json.loads(fence.group(1))
    else:
        span = _OBJECT.search(text)
        data = json.loads(span.group(0) if span else text)

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def as_text_list(value: Any, originals: Optional[list[str]] = None) -> list[str]:
    """Coerce a model-provided list into strings, one per input slot.

    Entries that are not text (``null``, nested lists, objects without a
    ``text`` string) fall back to the original at the same index, so later
    entries never shift position. Past the end of *originals* they become
    empty strings.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        return []
    originals = originals or []
    items: list[str] = []
    for index, item in enumerate(value):
        if isinstance(item, dict):
            item = item.get("text")
        if isinstance(item, str):
            items.append(item)
        elif isinstance(item, (int, float)) and not isinstance(item, bool):
            items.append(str(item))
        else:
            items.append(originals[index] if index < len(originals) else "")
    return items
