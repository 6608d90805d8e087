import pytest
from services.slide_schema import Slide, Deck, SlideKind, DEFAULT_SLIDE_TITLE
from pydantic import ValidationError

def test_valid_slide():
    slide = Slide(kind="content", title="Intro", body="Some text")
    assert slide.kind == SlideKind.CONTENT
    assert slide.title == "Intro"
    assert slide.bullets == []
    assert slide.subtitle is None

def test_valid_deck():
    deck = Deck(title="A", slides=[Slide(title="A", bullets=["B"])])
    assert deck.slide_count == 1
    assert deck.original_prompt is None

def test_missing_title_uses_placeholder():
    assert Slide(kind="section").title == DEFAULT_SLIDE_TITLE

def test_unknown_kind_falls_back_to_content():
    assert Slide(kind="conclusion", title="End").kind == SlideKind.CONTENT
    assert Slide(kind=None, title="End").kind == SlideKind.CONTENT
    assert Slide(kind="IMAGE", title="Pic").kind == SlideKind.IMAGE

def test_bullets_force_bullets_kind():
    slide = Slide(kind="title", title="Foo", bullets=["one"])
    assert slide.kind == SlideKind.BULLETS

def test_null_bullets_become_empty():
    assert Slide(title="A", bullets=None).bullets == []

def test_invalid_slide_bullets_type():
    with pytest.raises(ValidationError):
        Slide(title="A", bullets="notalist")

def test_slide_is_immutable():
    slide = Slide(title="A")
    with pytest.raises(ValidationError):
        slide.title = "B"

def test_deck_json_uses_kind_values():
    deck = Deck(title="T", slides=[Slide(kind=SlideKind.TITLE, title="T")])
    dumped = deck.model_dump(mode="json")
    assert dumped["slides"][0]["kind"] == "title"
    assert dumped["slides"][0]["bullets"] == []

@pytest.mark.parametrize("level,kind", [
    (1, SlideKind.TITLE),
    (2, SlideKind.SECTION),
    (3, SlideKind.CONTENT),
    (7, SlideKind.CONTENT),
])
def test_kind_from_heading_level(level, kind):
    assert SlideKind.from_heading_level(level) == kind
