"""Generation invocation: one structured request to the language model.

GenerationClient.invoke(prompt, output_schema, tools) sends the rendered
prompt together with the JSON Schema of the expected reply, lets the model
call registered tools, and validates the final answer against the schema.
There is no retry: every failure is raised to the caller as a GenerationError.
"""
import logging
import os
from typing import Any, Dict, List, Optional, Type, TypeVar

import openai
from openai import OpenAI

from mealgen.domain.Errors import (
    ContractValidationError,
    EmptyResponseError,
    SchemaMismatchError,
    TransportError,
)
from mealgen.logic.generation.json_cleanup import load_reply_json
from mealgen.logic.generation.tools import ToolRegistry
from mealgen.logic.prompting.templates import SYSTEM_MESSAGE
from mealgen.utilities import config
from mealgen.utilities.validators import ContractModel, output_json_schema, validate

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=ContractModel)


# === Helper: Get OpenAI Client ===
def _get_openai_client():
    """Return an OpenAI client if OPENAI_API_KEY is set, otherwise None."""
    api_key = os.environ.get("OPENAI_API_KEY") or config.OPENAI_API_KEY
    if not api_key:
        return None
    return OpenAI(api_key=api_key)


def _response_format(schema: Type[ContractModel]) -> Dict[str, Any]:
    return {
        "type": "json_schema",
        "json_schema": {
            "name": schema.__name__,
            "schema": output_json_schema(schema),
            "strict": False,
        },
    }


class GenerationClient:
    def __init__(self, client=None, model: Optional[str] = None,
                 temperature: Optional[float] = None, max_tool_rounds: Optional[int] = None):
        self._client = client
        self.model = model or config.OPENAI_MODEL
        self.temperature = config.OPENAI_TEMPERATURE if temperature is None else temperature
        self.max_tool_rounds = config.MAX_TOOL_ROUNDS if max_tool_rounds is None else max_tool_rounds

    def _resolve_client(self):
        if self._client is None:
            self._client = _get_openai_client()
        if self._client is None:
            raise TransportError("OPENAI_API_KEY not set, cannot reach the model service")
        return self._client

    def _create(self, messages: List[Dict[str, Any]], schema: Type[ContractModel],
                tools: Optional[ToolRegistry]):
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
            "response_format": _response_format(schema),
        }
        if tools:
            kwargs["tools"] = tools.definitions()
        try:
            return self._resolve_client().chat.completions.create(**kwargs)
        except openai.OpenAIError as e:
            logger.error("Model call failed: %s", e)
            raise TransportError(str(e) or type(e).__name__) from e

    def invoke(self, prompt: str, output_schema: Type[ModelT],
               tools: Optional[ToolRegistry] = None) -> ModelT:
        """Send ``prompt`` and return the reply validated against ``output_schema``.

        Raises:
            TransportError: the service could not be reached.
            EmptyResponseError: no usable output (no choices, empty content, refusal,
                or the model kept calling tools).
            SchemaMismatchError: the reply is not JSON or does not match the schema.
        """
        messages: List[Dict[str, Any]] = [
            {"role": "system", "content": SYSTEM_MESSAGE},
            {"role": "user", "content": prompt},
        ]
        logger.debug("Invoking %s for %s (tools=%s)", self.model, output_schema.__name__,
                     tools.names() if tools else [])

        for _ in range(self.max_tool_rounds + 1):
            response = self._create(messages, output_schema, tools)
            choices = getattr(response, "choices", None)
            if not choices:
                raise EmptyResponseError("The model returned no choices")
            message = choices[0].message

            tool_calls = getattr(message, "tool_calls", None)
            if tool_calls and tools:
                messages.append({
                    "role": "assistant",
                    "content": message.content or "",
                    "tool_calls": [
                        {
                            "id": tc.id,
                            "type": "function",
                            "function": {"name": tc.function.name, "arguments": tc.function.arguments},
                        }
                        for tc in tool_calls
                    ],
                })
                for tc in tool_calls:
                    messages.append({
                        "role": "tool",
                        "tool_call_id": tc.id,
                        "content": tools.call(tc.function.name, tc.function.arguments),
                    })
                continue

            return self._parse(message, output_schema)

        raise EmptyResponseError(
            f"The model did not produce a reply after {self.max_tool_rounds} tool round(s)"
        )

    @staticmethod
    def _parse(message, output_schema: Type[ModelT]) -> ModelT:
        refusal = getattr(message, "refusal", None)
        if refusal:
            raise EmptyResponseError(f"The model declined to answer: {refusal}")
        content = message.content or ""
        if not content.strip():
            raise EmptyResponseError("The model returned an empty reply")

        try:
            data = load_reply_json(content)
        except ValueError as e:
            logger.warning("Model reply is not JSON (%d chars)", len(content))
            raise SchemaMismatchError("The model reply is not valid JSON", raw_text=content) from e

        try:
            return validate(output_schema, data)
        except ContractValidationError as e:
            logger.warning("Model reply failed %s validation at %s", output_schema.__name__, e.path)
            raise SchemaMismatchError(
                f"The model reply does not match the expected format. {e}",
                raw_text=content,
                path=e.path,
            ) from e


__all__ = ['GenerationClient']
