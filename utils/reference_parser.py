# utils/reference_parser.py
"""Free-text scripture references to book/chapter/verse ranges and back.

Handles the usual forms, in the name table of the translation's language:

- "John 3:16", "Jn 3:16", "1 John 4:8", "I John 4:8"
- verse and chapter ranges: "John 3:16-18", "Genesis 1-2", "Genesis 1:31-2:3"
- lists: "Romans 12:1-2,5-7,9,13:1-9&10", "John 3:16; 1 John 4:8"
- whole chapters and books: "Psalm 23", "Jude"
- ranges across books: "Genesis 50 - Exodus 2"
- single-chapter books, where a bare number is a verse: "Jude 3"

Verse numbers are taken as written; whether a verse exists is left to the
datastore, since versifications differ between translations.
"""
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional

from utils.books import SINGLE_CHAPTER_BOOKS, book_names, book_num_for, display_name, language_key, normalize_name

logger = logging.getLogger(__name__)

DASHES = '-–—'
SEPARATORS = ',;&'
TOKEN_RE = re.compile(r'\d+|\S')


class ReferenceSyntaxError(ValueError):
    """Text after a book name is not a chapter/verse list."""


@dataclass(frozen=True)
class Endpoint:
    """One end of a range.

    ``verse`` of None means the chapter boundary; ``chapter`` of None means the
    book boundary.
    """
    book: str
    chapter: Optional[int] = None
    verse: Optional[int] = None


@dataclass(frozen=True)
class SemanticRange:
    start: Endpoint
    end: Endpoint


@lru_cache(maxsize=None)
def _book_pattern(language):
    names = sorted(book_names(language), key=len, reverse=True)
    alternatives = '|'.join(r'\s*'.join(re.escape(part) for part in name.split(' ')) for name in names)
    return re.compile(rf"(?<![a-z0-9])({alternatives})(?![a-z])")


@lru_cache(maxsize=None)
def _compact_names(language):
    # Names may match without their inner spaces ("1john")
    return {name.replace(" ", ""): book_id for name, book_id in book_names(language).items()}


def _tokens(spec):
    tokens = []
    for token in TOKEN_RE.findall(spec):
        if token.isdigit():
            number = int(token)
            if number == 0:
                raise ReferenceSyntaxError(token)
            tokens.append(number)
        elif token in DASHES:
            tokens.append('-')
        elif token in SEPARATORS:
            tokens.append(',')
        elif token == ':':
            tokens.append(':')
        else:
            raise ReferenceSyntaxError(token)
    return tokens


def _point(tokens):
    """(number, verse) from ``[n]`` or ``[chapter, ':', verse]``."""
    if len(tokens) == 1 and isinstance(tokens[0], int):
        return tokens[0], None
    if len(tokens) == 3 and tokens[1] == ':' and isinstance(tokens[0], int) and isinstance(tokens[2], int):
        return tokens[0], tokens[2]
    raise ReferenceSyntaxError(tokens)


def _items(tokens):
    """Split a chapter/verse list into (start_point, end_point) pairs.

    A start of None means the item was only a dash; an end of ``'-'`` means the
    range continues into the next book.
    """
    items = []
    current = []
    for token in tokens + [',']:
        if token != ',':
            current.append(token)
            continue
        if not current:
            continue
        if current.count('-') > 1:
            raise ReferenceSyntaxError(current)
        if '-' in current:
            split = current.index('-')
            left, right = current[:split], current[split + 1:]
            start = _point(left) if left else None
            end = _point(right) if right else '-'
            if start is None and end != '-':
                raise ReferenceSyntaxError(current)
        else:
            start, end = _point(current), None
        items.append((start, end))
        current = []
    return items


class _Cursor:
    """Reading state inside one book: a bare number is a verse once a verse was named."""

    def __init__(self, book):
        self.book = book
        self.chapter = None
        self.verse_mode = False

    def endpoint(self, point):
        number, verse = point
        if verse is not None:
            self.chapter, self.verse_mode = number, True
            return Endpoint(self.book, number, verse)
        if self.verse_mode:
            return Endpoint(self.book, self.chapter, number)
        if self.book in SINGLE_CHAPTER_BOOKS:
            self.chapter, self.verse_mode = 1, True
            return Endpoint(self.book, 1, number)
        self.chapter = number
        return Endpoint(self.book, number)


def _in_order(start, end):
    if start.book != end.book:
        return book_num_for(end.book) > book_num_for(start.book)
    if start.chapter is None or end.chapter is None:
        return True
    if end.chapter != start.chapter:
        return end.chapter > start.chapter
    return start.verse is None or end.verse is None or end.verse >= start.verse


def _segments(text, language):
    """(book_id, spec) pairs: each book name with the chapter/verse text after it."""
    matches = list(_book_pattern(language).finditer(text))
    if not matches or text[:matches[0].start()].strip(' ,;&'):
        return None
    names = _compact_names(language)
    segments = []
    for match, following in zip(matches, matches[1:] + [None]):
        spec_end = following.start() if following else len(text)
        book_id = names[re.sub(r"\s", "", match.group(1))]
        segments.append((book_id, text[match.end():spec_end]))
    return segments


def _ranges(segments):
    ranges = []
    pending = None
    for book_id, spec in segments:
        cursor = _Cursor(book_id)
        items = _items(_tokens(spec))
        if pending is not None:
            # End of a range that started in the previous book
            if items:
                start, end = items.pop(0)
                if start is None or end is not None:
                    raise ReferenceSyntaxError(spec)
                ranges.append(SemanticRange(pending, cursor.endpoint(start)))
            else:
                ranges.append(SemanticRange(pending, Endpoint(book_id)))
            pending = None
        elif not items:
            ranges.append(SemanticRange(Endpoint(book_id), Endpoint(book_id)))
            continue

        for index, (start, end) in enumerate(items):
            start_endpoint = cursor.endpoint(start) if start else Endpoint(book_id)
            if end == '-':
                if index != len(items) - 1:
                    raise ReferenceSyntaxError(spec)
                pending = start_endpoint
            elif end is None:
                ranges.append(SemanticRange(start_endpoint, start_endpoint))
            else:
                ranges.append(SemanticRange(start_endpoint, cursor.endpoint(end)))
    if pending is not None:
        raise ReferenceSyntaxError('range has no end')
    return ranges


class ReferenceParser:
    """Parses reference text into ranges and renders ranges for display."""

    def parse(self, text: str, language_code: Optional[str] = None) -> Optional[List[SemanticRange]]:
        """Return the ranges named by ``text``, or None when it cannot be parsed."""
        language = language_key(language_code)
        if language is None:
            logger.debug(f"No book names for language '{language_code}', using English")
        segments = _segments(normalize_name(text or ''), language)
        if not segments:
            logger.info(f"No book name found in reference '{text}'")
            return None
        try:
            ranges = _ranges(segments)
        except ReferenceSyntaxError as e:
            logger.info(f"Unparseable reference '{text}': {e}")
            return None
        if not ranges or not all(_in_order(r.start, r.end) for r in ranges):
            return None
        return ranges

    def normalize(self, ranges: List[SemanticRange], language_code: Optional[str] = None) -> str:
        """Canonical display string for ``ranges``, e.g. ``John 3:16-18``.

        Ranges keep their order. Book and chapter are left out when they repeat
        the previous range: ``Romans 12:1-2,5-7,9,13:1-9,10``.
        """
        text = ''
        previous = None
        for semantic_range in ranges:
            start, end = semantic_range.start, semantic_range.end
            # A chapter-only range after a verse would read as a verse, so it repeats the book
            new_book = previous is None or previous.book != start.book
            if new_book or (start.verse is None and previous.verse is not None):
                if previous is not None:
                    text += '; '
                text += display_name(start.book, language_code)
                if start.chapter is not None:
                    text += f" {_location(start, previous=None)}"
            else:
                text += ',' + _location(start, previous)
            if end != start:
                text += _range_end(start, end, language_code)
            previous = end
        return text


def _location(endpoint, previous):
    """"C", "C:V", or just "V" when ``previous`` already named the chapter."""
    if endpoint.chapter is None:
        return ''
    if endpoint.verse is None:
        return str(endpoint.chapter)
    if previous is not None and previous.chapter == endpoint.chapter and previous.verse is not None:
        return str(endpoint.verse)
    return f"{endpoint.chapter}:{endpoint.verse}"


def _range_end(start, end, language_code):
    if end.book != start.book:
        text = ' - ' + display_name(end.book, language_code)
        if end.chapter is not None:
            text += f" {_location(end, previous=None)}"
        return text
    return '-' + _location(end, start)
