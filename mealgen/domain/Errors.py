"""Error taxonomy shared by the schema, store and generation layers."""
from typing import List, Optional, Tuple


class MealGenError(Exception):
    """Base class for every failure surfaced through the action boundary."""


class ContractValidationError(MealGenError):
    """A payload does not match its schema contract.

    ``path`` is the dotted location of the first offending field and
    ``errors`` lists every (path, message) pair reported by the validator.
    """

    def __init__(self, schema_name: str, errors: List[Tuple[str, str]]):
        self.schema_name = schema_name
        self.errors = list(errors)
        self.path = self.errors[0][0] if self.errors else ""
        super().__init__(self._format())

    def _format(self) -> str:
        if not self.errors:
            return f"Invalid {self.schema_name}"
        details = "; ".join(f"{path or '<root>'}: {msg}" for path, msg in self.errors)
        return f"Invalid {self.schema_name}: {details}"


class StoreError(MealGenError):
    """The profile store could not be written."""


class GenerationError(MealGenError):
    """Base class for failures talking to the language model."""


class TransportError(GenerationError):
    """The model service could not be reached (network, auth, missing key)."""


class EmptyResponseError(GenerationError):
    """The model answered without any usable output."""


class SchemaMismatchError(GenerationError):
    """The model reply is not JSON or does not match the requested schema."""

    def __init__(self, message: str, raw_text: str = "", path: Optional[str] = None):
        super().__init__(message)
        self.raw_text = raw_text
        self.path = path


__all__ = [
    'MealGenError', 'ContractValidationError', 'StoreError', 'GenerationError',
    'TransportError', 'EmptyResponseError', 'SchemaMismatchError',
]
