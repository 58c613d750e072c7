"""
Pure tests for the in-memory stage of thought listing (no database).
"""
from types import SimpleNamespace

from unsaid.thoughts.service import ThoughtFilter, apply_filters, make_excerpt


def _thought(id, title="", content="", excerpt=None, tags=()):
    return SimpleNamespace(
        id=id,
        title=title,
        content=content,
        excerpt=excerpt,
        tags=[SimpleNamespace(slug=slug) for slug in tags],
    )


# newest first, as the query hands them over
THOUGHTS = [
    _thought("t5", title="On Silence", content="quiet mornings", tags=["philosophy"]),
    _thought("t4", title="Coffee", content="Philosophy of the bean", tags=["food"]),
    _thought("t3", title="Stoics", content="Marcus wrote", excerpt="Notes on SILENCE", tags=["philosophy", "history"]),
    _thought("t2", title="Walks", content="long walks", tags=[]),
    _thought("t1", title="First", content="silence again", tags=["philosophy"]),
]


def ids(thoughts):
    return [t.id for t in thoughts]


def test_no_filters_keeps_order():
    assert ids(apply_filters(THOUGHTS, ThoughtFilter())) == ["t5", "t4", "t3", "t2", "t1"]


def test_tag_filter_matches_slug():
    assert ids(apply_filters(THOUGHTS, ThoughtFilter(tag="philosophy"))) == ["t5", "t3", "t1"]
    assert apply_filters(THOUGHTS, ThoughtFilter(tag="missing")) == []


def test_exclude_drops_one_id():
    assert ids(apply_filters(THOUGHTS, ThoughtFilter(exclude="t4"))) == ["t5", "t3", "t2", "t1"]


def test_search_is_case_insensitive_over_title_excerpt_and_content():
    result = apply_filters(THOUGHTS, ThoughtFilter(search="silence"))
    # t5 by title, t3 by excerpt, t1 by content
    assert ids(result) == ["t5", "t3", "t1"]


def test_search_tolerates_missing_excerpt():
    assert ids(apply_filters(THOUGHTS, ThoughtFilter(search="bean"))) == ["t4"]


def test_limit_is_a_prefix_cap():
    assert ids(apply_filters(THOUGHTS, ThoughtFilter(limit=2))) == ["t5", "t4"]
    assert len(apply_filters(THOUGHTS, ThoughtFilter(limit=50))) == 5


def test_combined_filters_equal_sequential_application():
    combined = apply_filters(THOUGHTS, ThoughtFilter(tag="philosophy", search="silence", limit=2, exclude="t5"))

    step = [t for t in THOUGHTS if any(tag.slug == "philosophy" for tag in t.tags)]
    step = [t for t in step if t.id != "t5"]
    step = [
        t for t in step
        if "silence" in t.title.lower() or "silence" in (t.excerpt or "").lower() or "silence" in t.content.lower()
    ]
    step = step[:2]

    assert ids(combined) == ids(step) == ["t3", "t1"]


def test_limit_applies_after_tag_filter():
    assert ids(apply_filters(THOUGHTS, ThoughtFilter(tag="philosophy", limit=1))) == ["t5"]


def test_make_excerpt():
    assert make_excerpt("short") == "short"
    assert make_excerpt("x" * 200) == "x" * 200
    assert make_excerpt("a" * 250) == "a" * 200 + "..."
