import pytest
from services.outline_compiler import compile_outline, parse_structured, is_natural_language
from services.slide_schema import SlideKind

def test_title_matches_first_slide():
    deck = compile_outline("# Quarterly Review\n## Results\nRevenue grew")
    assert deck.title == "Quarterly Review"
    assert deck.title == deck.slides[0].title

def test_heading_order_preserved_across_blank_lines():
    deck = compile_outline("# One\n\n\n## Two\n   \n### Three\n\n")
    assert [s.title for s in deck.slides] == ["One", "Two", "Three"]
    assert [s.kind for s in deck.slides] == [SlideKind.TITLE, SlideKind.SECTION, SlideKind.CONTENT]

def test_bullets_override_heading_kind():
    deck = compile_outline("# Foo\ncontent line\n- bullet one")
    assert len(deck.slides) == 1
    slide = deck.slides[0]
    assert slide.kind == SlideKind.BULLETS
    assert slide.body == "content line"
    assert slide.bullets == ["bullet one"]

def test_content_before_first_heading_is_dropped():
    deck = compile_outline("stray line\n# Real Title\nbody")
    assert len(deck.slides) == 1
    assert deck.slides[0].title == "Real Title"
    assert deck.slides[0].body == "body"
    assert "stray line" not in deck.model_dump_json()

def test_bullets_before_first_heading_are_dropped():
    deck = compile_outline("- orphan\n* another\n## Section\n- kept")
    assert len(deck.slides) == 1
    assert deck.slides[0].bullets == ["kept"]

def test_only_orphan_lines_gives_empty_deck():
    deck = compile_outline("- a\n- b")
    assert deck.slides == []
    assert deck.title == "Presentation"

@pytest.mark.parametrize("text", ["", "   \n  ", "\n\n", None])
def test_degenerate_input(text):
    deck = compile_outline(text)
    assert deck.title == "Presentation"
    assert len(deck.slides) == 1
    slide = deck.slides[0]
    assert slide.kind == SlideKind.TITLE
    assert slide.title == "Presentation"
    assert slide.body == ""
    assert slide.bullets == []

def test_body_lines_joined_with_single_newline():
    deck = compile_outline("### Notes\n  first  \n\nsecond\nthird")
    assert deck.slides[0].body == "first\nsecond\nthird"

def test_heading_level_has_no_upper_bound():
    deck = compile_outline("########## Deep heading")
    assert deck.slides[0].kind == SlideKind.CONTENT
    assert deck.slides[0].title == "Deep heading"

def test_heading_without_space_and_empty_heading():
    deck = compile_outline("##Tight\n#")
    assert deck.slides[0].title == "Tight"
    assert deck.slides[0].kind == SlideKind.SECTION
    assert deck.slides[1].title == ""
    assert deck.slides[1].kind == SlideKind.TITLE

def test_bullet_markers_are_stripped():
    deck = compile_outline("## List\n-dash\n*   star\n- spaced  ")
    assert deck.slides[0].bullets == ["dash", "star", "spaced"]

def test_bullet_kind_is_sticky_after_more_text():
    deck = compile_outline("## Mixed\n- point\nmore text after the bullet")
    slide = deck.slides[0]
    assert slide.kind == SlideKind.BULLETS
    assert slide.body == "more text after the bullet"

def test_each_slide_starts_clean():
    deck = compile_outline("## A\n- one\n## B\ntext")
    assert deck.slides[0].bullets == ["one"]
    assert deck.slides[1].bullets == []
    assert deck.slides[1].kind == SlideKind.SECTION
    assert deck.slides[1].body == "text"

def test_indented_lines_are_trimmed():
    deck = compile_outline("   # Title\n     - indented bullet")
    assert deck.slides[0].title == "Title"
    assert deck.slides[0].bullets == ["indented bullet"]

def test_compile_is_deterministic():
    text = "# Plan\n## Goals\n- grow\n- hire\n### Details\nsome body"
    assert compile_outline(text) == compile_outline(text)

def test_dispatch_on_markers():
    assert is_natural_language("Make a deck about cats")
    assert not is_natural_language("well-known topic")
    assert not is_natural_language("a * b")
    # A hyphen anywhere selects the structured parser, which finds no heading
    assert compile_outline("A well-known topic").slides == []

def test_parse_structured_handles_crlf():
    deck = parse_structured("# Title\r\nbody\r\n- point\r\n")
    assert deck.slides[0].body == "body"
    assert deck.slides[0].bullets == ["point"]
