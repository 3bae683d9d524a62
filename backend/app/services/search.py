"""Relevance ranking for note full-text search."""

import re
from typing import List, Sequence

from rank_bm25 import BM25Plus

from app.models.note import Note

_TOKEN_RE = re.compile(r"\w+", re.UNICODE)


def tokenize(text: str) -> List[str]:
    return _TOKEN_RE.findall(text.lower())


def note_document(note: Note) -> List[str]:
    """Title, content and tags indexed as a single text document."""
    parts = [note.title or "", note.content or "", " ".join(note.tags or [])]
    return tokenize(" ".join(parts))


def matches_any_term(note: Note, terms: Sequence[str]) -> bool:
    document = set(note_document(note))
    return any(term in document for term in terms)


def rank_notes(notes: Sequence[Note], query: str) -> List[Note]:
    """Return the notes containing at least one query term, best match first.

    Scores are BM25+ over the candidate set (its idf stays positive on small
    sets); equal scores keep newest first.
    """
    terms = tokenize(query)
    if not terms:
        return []

    candidates = [note for note in notes if matches_any_term(note, terms)]
    if not candidates:
        return []

    bm25 = BM25Plus([note_document(note) for note in candidates])
    scores = bm25.get_scores(terms)

    ranked = sorted(
        zip(candidates, scores),
        key=lambda pair: (-float(pair[1]), -pair[0].created_at.timestamp()),
    )
    return [note for note, _ in ranked]
