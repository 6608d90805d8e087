import time
import pytest
from services.outline_compiler import (
    compile_outline, parse_natural_language, extract_title, extract_topic,
    extract_slide_count, title_case, TITLE_RULES, TOPIC_RULES, SECTION_TEMPLATES,
    DEFAULT_PROMPT_TITLE, DEFAULT_TOPIC, MAX_PROMPT_CHARS, normalize_prompt,
)
from services.slide_schema import SlideKind

def test_requested_slide_count_is_respected():
    deck = compile_outline("Create a presentation about solar panels with 4 slides")
    assert len(deck.slides) == 4
    assert deck.slides[0].kind == SlideKind.TITLE
    assert all(s.kind == SlideKind.BULLETS for s in deck.slides[1:])
    assert deck.title == "Solar Panels"
    assert deck.slides[0].title == "Solar Panels"
    assert deck.slides[0].body == "Presentation about solar panels"
    assert deck.original_prompt == "Create a presentation about solar panels with 4 slides"

def test_slide_count_is_clamped():
    assert extract_slide_count("I need 20 slides") == 10
    deck = compile_outline("Create a presentation about oceans with 20 slides")
    assert len(deck.slides) <= 10
    # Only the fixed templates are used, never repeated
    assert len(deck.slides) == 1 + len(SECTION_TEMPLATES)
    assert len({s.title for s in deck.slides[1:]}) == len(deck.slides) - 1

def test_default_slide_count():
    assert extract_slide_count("Tell me about coffee") == 5
    deck = compile_outline("Tell me about coffee")
    assert len(deck.slides) == 5

def test_single_slide_request_yields_title_only():
    deck = compile_outline("Create a presentation about tea with 1 slide")
    assert len(deck.slides) == 1
    assert deck.slides[0].kind == SlideKind.TITLE

def test_spanish_prompt():
    deck = compile_outline("Crea una presentación sobre energía solar con 3 diapositivas")
    assert deck.title == "Energía Solar"
    assert len(deck.slides) == 3
    assert deck.slides[0].body == "Presentation about energía solar"

def test_section_slides_follow_template_order():
    deck = parse_natural_language("Create a presentation about robots with 6 slides")
    titles = [s.title for s in deck.slides[1:]]
    assert titles == [t.title for t in SECTION_TEMPLATES]
    for slide in deck.slides[1:]:
        assert len(slide.bullets) == 3
    assert "robots" in deck.slides[1].bullets[1]

def test_title_rule_priority():
    # The request rule wins over the catch-all phrase rule
    assert extract_title("Please create a presentation about green energy") == "Green Energy"
    assert extract_title("presentation of the annual budget with charts") == "The Annual Budget"

def test_title_falls_back_to_leading_phrase():
    assert extract_title("quarterly sales numbers") == "Quarterly Sales Numbers"

def test_title_fallback_literal():
    assert extract_title("...") == DEFAULT_PROMPT_TITLE

def test_topic_extraction():
    assert extract_topic("Make slides about machine learning with 5 slides") == "machine learning"
    assert extract_topic("Una presentación sobre café") == "café"
    assert extract_topic("hello there") == DEFAULT_TOPIC

def test_title_case():
    assert title_case("sOLAR paNELS") == "Solar Panels"
    assert title_case("a") == "A"

@pytest.mark.parametrize("rule", TITLE_RULES + TOPIC_RULES, ids=lambda r: r.name)
def test_rules_ignore_unrelated_text(rule):
    assert rule.extract("") is None

def test_rules_are_case_insensitive():
    assert extract_title("CREATE A PRESENTATION ABOUT MARS") == "Mars"

def test_prompt_spread_over_lines():
    deck = compile_outline("Create a presentation\nabout solar panels\nwith 3 slides")
    assert deck.title == "Solar Panels"
    assert len(deck.slides) == 3
    assert deck.original_prompt == "Create a presentation\nabout solar panels\nwith 3 slides"

def test_long_repetitive_prompt_compiles_quickly():
    prompt = "create presentation on " * 3000 + "\nx"
    assert len(normalize_prompt(prompt)) == MAX_PROMPT_CHARS
    start = time.monotonic()
    deck = compile_outline(prompt)
    assert time.monotonic() - start < 1
    assert len(deck.slides) == 5
