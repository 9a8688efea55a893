"""Helpers that turn a model reply into a JSON value.

Models sometimes wrap JSON in markdown fences, leave trailing commas or add a
sentence before the object. load_reply_json() tries the raw text first and
then progressively cleaned variants.
"""
import json
import re
from typing import Any, Optional


def strip_code_fences(text: str) -> str:
    """Remove common markdown code fences and leading/trailing whitespace."""
    text = re.sub(r"```(?:json)?\s*\n(.*?)```", r"\1", text, flags=re.S)
    text = re.sub(r"^```|```$", "", text.strip())
    return text.strip()


def remove_trailing_commas(text: str) -> str:
    """Remove trailing commas before a closing brace/bracket."""
    return re.sub(r",\s*(\}|\])", r"\1", text)


def extract_json_by_balancing(text: str) -> Optional[str]:
    """Extract the first JSON object/array by balancing braces/brackets."""
    start = None
    stack = []
    in_string = False
    escape = False

    for i, ch in enumerate(text):
        if escape:
            escape = False
            continue
        if in_string:
            if ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            if start is not None:
                in_string = True
            continue
        if ch in "{[":
            if start is None:
                start = i
            stack.append(ch)
        elif ch in "}]":
            if not stack:
                continue
            opening = stack.pop()
            if (opening == "{" and ch != "}") or (opening == "[" and ch != "]"):
                return None
            if not stack and start is not None:
                return text[start:i + 1]
    return None


def load_reply_json(text: str) -> Any:
    """Parse a model reply as JSON.

    Raises:
        ValueError: when no JSON value can be recovered.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    cleaned = remove_trailing_commas(strip_code_fences(text))
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    candidate = extract_json_by_balancing(cleaned)
    if candidate:
        try:
            return json.loads(remove_trailing_commas(candidate))
        except json.JSONDecodeError:
            pass
    raise ValueError("Reply is not valid JSON")


__all__ = ['strip_code_fences', 'remove_trailing_commas', 'extract_json_by_balancing', 'load_reply_json']
