# utils/results.py
"""Outcomes of a lookup. Callers branch on the type instead of probing for an error key."""
from dataclasses import dataclass
from typing import Union

from schemas.verse_schemas import VerseResult


@dataclass(frozen=True)
class Found:
    result: VerseResult
    status = 200

    def to_dict(self):
        return self.result.model_dump()


class ErrorOutcome:
    error = ''
    status = 404

    def to_dict(self):
        return {'error': self.error}

    def __eq__(self, other):
        return type(self) is type(other)

    def __hash__(self):
        return hash(type(self))

    def __repr__(self):
        return f'<{type(self).__name__}>'


class TranslationNotFound(ErrorOutcome):
    error = 'translation not found'


class ReferenceNotFound(ErrorOutcome):
    """Reference text could not be parsed, or a range did not resolve."""
    error = 'not found'


class InvalidParameter(ErrorOutcome):
    error = 'unrecognized value for parameter'


LookupOutcome = Union[Found, TranslationNotFound, ReferenceNotFound, InvalidParameter]
