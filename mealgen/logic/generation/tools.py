"""Callback registry for tools the model may call while composing a reply.

Tools are plain functions taking keyword arguments decoded from the model's
JSON arguments and returning a string. They must be pure: the model decides
whether, how often and in which order to call them.

    registry = ToolRegistry()
    registry.register("avoidUnsafeCombinations", "...", avoid_unsafe_combinations, {...})
    registry.definitions()   # -> OpenAI "tools" payload
    registry.call("avoidUnsafeCombinations", '{"ingredients": "rice, beans"}')
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Dict, List

from mealgen.utilities.constants import UNSAFE_COMBINATIONS_TOOL

logger = logging.getLogger(__name__)


class ToolRegistry:
    def __init__(self):
        self._tools: Dict[str, Dict[str, Any]] = {}

    def register(self, name: str, description: str, func: Callable[..., str],
                 parameters: Dict[str, Any]):
        """Register (or replace) a tool under the name the model will use."""
        self._tools[name] = {
            "description": description,
            "func": func,
            "parameters": parameters,
        }

    def names(self) -> List[str]:
        return list(self._tools)

    def __len__(self):
        return len(self._tools)

    def definitions(self) -> List[Dict[str, Any]]:
        """Tool declarations in the OpenAI function-calling format."""
        return [
            {
                "type": "function",
                "function": {
                    "name": name,
                    "description": entry["description"],
                    "parameters": entry["parameters"],
                },
            }
            for name, entry in self._tools.items()
        ]

    def call(self, name: str, arguments: str | None) -> str:
        """Run a tool with the JSON-encoded arguments sent by the model.

        Problems are reported back to the model as text; they never abort generation.
        """
        entry = self._tools.get(name)
        if entry is None:
            logger.warning("Model requested unknown tool %r", name)
            return f"Error: unknown tool '{name}'"
        try:
            kwargs = json.loads(arguments or "{}")
        except json.JSONDecodeError:
            logger.warning("Malformed arguments for tool %s: %r", name, arguments)
            return "Error: arguments must be a JSON object"
        if not isinstance(kwargs, dict):
            return "Error: arguments must be a JSON object"
        try:
            result = entry["func"](**kwargs)
        except TypeError as e:
            logger.warning("Bad arguments for tool %s: %s", name, e)
            return f"Error: {e}"
        except Exception as e:
            logger.exception("Tool %s failed", name)
            return f"Error: {e}"
        logger.info("Tool %s called", name)
        return str(result)


_SPLIT = re.compile(r"[,\n;]")


def avoid_unsafe_combinations(ingredients: str = "") -> str:
    """Return the ingredient list with blanks and duplicates removed.

    Input and output are comma-separated lists; applying the function twice
    gives the same result as applying it once.
    """
    seen = set()
    kept = []
    for raw in _SPLIT.split(ingredients or ""):
        name = raw.strip().lstrip("-*").strip()
        key = name.lower()
        if not name or key in seen:
            continue
        seen.add(key)
        kept.append(name)
    return ", ".join(kept)


UNSAFE_COMBINATIONS_PARAMETERS: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "ingredients": {
            "type": "string",
            "description": "A list of ingredients for the meal plan",
        }
    },
    "required": ["ingredients"],
}


def default_tools() -> ToolRegistry:
    """Registry with the tools offered during meal plan generation."""
    registry = ToolRegistry()
    registry.register(
        UNSAFE_COMBINATIONS_TOOL,
        "This tool is used to avoid unsafe food combinations, ensuring the generated meal plan "
        "is safe and healthy. Returns the list of ingredients that do not have unsafe combinations.",
        avoid_unsafe_combinations,
        UNSAFE_COMBINATIONS_PARAMETERS,
    )
    return registry


__all__ = ['ToolRegistry', 'avoid_unsafe_combinations', 'default_tools']
