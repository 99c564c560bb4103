"""Tests for prompt rendering."""

import json

from app.prompts.templates import (
    RECOMMEND_BOOKS,
    render_recommendation_prompt,
    serialize_candidates,
)


def test_serialized_candidates_carry_only_matching_fields(books):
    rows = json.loads(serialize_candidates(books))
    assert len(rows) == len(books)
    assert set(rows[0]) == {"id", "title", "author", "genre", "description"}


def test_prompt_mentions_focal_and_history(books):
    prompt = render_recommendation_prompt(books[3], [books[0], books[1]], books[4:])
    assert prompt["system"] == RECOMMEND_BOOKS.system
    assert '"Dune" by Frank Herbert (Science Fiction)' in prompt["user"]
    assert "[The Great Gatsby, 1984]" in prompt["user"]
    assert "select exactly 3 books" in prompt["user"]


def test_prompt_with_empty_history(books):
    prompt = render_recommendation_prompt(books[0], [], books[1:])
    assert "interest in: []." in prompt["user"]
