"""
Outline compiler.

Turns loosely structured outline text into a `Deck`:

    # Deck title          -> title slide
    ## Section            -> section slide
    ### Topic             -> content slide
    - point / * point     -> bullet on the current slide (slide becomes `bullets`)
    anything else         -> body text of the current slide

Text without any `#`, `-` or `*` is treated as a natural-language request
("Create a presentation about solar panels with 4 slides") and expanded into a
title slide plus generic section slides.
"""
import re
from typing import List, NamedTuple, Optional, Pattern, Sequence
from services.slide_schema import Deck, Slide, SlideKind, DEFAULT_DECK_TITLE

STRUCTURE_MARKERS = ("#", "-", "*")
BULLET_MARKERS = ("-", "*")

HEADING_RE = re.compile(r"^(#+)\s*(.*)$")
BULLET_RE = re.compile(r"^[-*]\s*")

DEFAULT_PROMPT_TITLE = "Corporate Presentation"
DEFAULT_TOPIC = "corporate topic"
DEFAULT_SLIDE_COUNT = 5
MAX_SLIDE_COUNT = 10
# Prompt rules only look at this much of the request
MAX_PROMPT_CHARS = 500

class PromptRule(NamedTuple):
    name: str
    pattern: Pattern
    group: int = 1

    def extract(self, prompt: str) -> Optional[str]:
        match = self.pattern.search(prompt)
        if not match or not match.group(self.group):
            return None
        value = match.group(self.group).strip().strip(".,;:!?").strip()
        return value or None

def _rule(name: str, pattern: str) -> PromptRule:
    return PromptRule(name, re.compile(pattern, re.IGNORECASE | re.UNICODE))

# Trailing "with N slides" / "con N diapositivas" clauses end the captured phrase
_TAIL = r"(?:\s+(?:with|con)\b|\s*$)"

TITLE_RULES: List[PromptRule] = [
    _rule("request_about", r"\b(?:create|generate|make|build|prepare)\b.*?\bpresentation\b.*?\b(?:about|on)\s+(.+?)" + _TAIL),
    _rule("request_sobre", r"\b(?:crea|genera|haz|prepara)\b.*?\bpresentaci[oó]n\b.*?\bsobre\s+(.+?)" + _TAIL),
    _rule("presentation_of", r"\bpresentation\b.*?\bof\s+(.+?)" + _TAIL),
    _rule("presentacion_de", r"\bpresentaci[oó]n\b.*?\bde\s+(.+?)" + _TAIL),
    _rule("presentation_about", r"\bpresentation\b.*?\b(?:about|on)\s+(.+?)" + _TAIL),
    _rule("presentacion_sobre", r"\bpresentaci[oó]n\b.*?\bsobre\s+(.+?)" + _TAIL),
    _rule("leading_phrase", r"^\s*(.+?)(?:\s+presentation\b|\s+presentaci[oó]n\b|\s*$)"),
]

TOPIC_RULES: List[PromptRule] = [
    _rule("about", r"\babout\s+(.+?)" + _TAIL),
    _rule("sobre", r"\bsobre\s+(.+?)" + _TAIL),
    _rule("on", r"\bon\s+(.+?)" + _TAIL),
    _rule("of", r"\bof\s+(.+?)" + _TAIL),
    _rule("de", r"\bde\s+(.+?)" + _TAIL),
]

SLIDE_COUNT_RE = re.compile(r"(\d+)\s*(?:slides?|diapositivas?)\b", re.IGNORECASE)

class SectionTemplate(NamedTuple):
    title: str
    body: str
    bullets: Sequence[str]

SECTION_TEMPLATES: List[SectionTemplate] = [
    SectionTemplate(
        "Introduction",
        "Overview of {topic}",
        ("Objectives of the presentation", "Scope of {topic}", "Key points to cover"),
    ),
    SectionTemplate(
        "Key Characteristics",
        "Highlights of {topic}",
        ("Main characteristics of {topic}", "Distinctive features", "Current state and trends"),
    ),
    SectionTemplate(
        "Practical Applications",
        "Where {topic} is applied",
        ("Relevant use cases", "Examples of {topic} in practice", "Lessons learned"),
    ),
    SectionTemplate(
        "Benefits",
        "Advantages of {topic}",
        ("Value delivered", "Efficiency gains", "Return on investment of {topic}"),
    ),
    SectionTemplate(
        "Conclusions",
        "Summary and next steps",
        ("Key takeaways", "Recommendations", "Next steps"),
    ),
]

class _SlideDraft:
    """Slide under construction while walking the outline"""

    def __init__(self, kind: SlideKind, title: str):
        self.kind = kind
        self.title = title
        self.body_lines: List[str] = []
        self.bullets: List[str] = []

    def add_bullet(self, text: str):
        self.bullets.append(text)
        # Any bullet re-tags the slide, whatever its heading level said
        self.kind = SlideKind.BULLETS

    def add_text(self, text: str):
        self.body_lines.append(text)

    def build(self) -> Slide:
        return Slide(
            kind=self.kind,
            title=self.title,
            body="\n".join(self.body_lines),
            bullets=list(self.bullets),
        )

def is_natural_language(text: str) -> bool:
    """True when the text carries none of the outline markers"""
    return not any(marker in text for marker in STRUCTURE_MARKERS)

def parse_structured(text: str) -> Deck:
    """Single pass over the non-blank lines of an outline"""
    slides: List[Slide] = []
    current: Optional[_SlideDraft] = None

    lines = [line.strip() for line in (text or "").splitlines()]
    for line in lines:
        if not line:
            continue

        heading = HEADING_RE.match(line)
        if heading:
            if current:
                slides.append(current.build())
            level = len(heading.group(1))
            current = _SlideDraft(SlideKind.from_heading_level(level), heading.group(2).strip())
        elif line.startswith(BULLET_MARKERS):
            # Nothing to attach to before the first heading
            if current:
                current.add_bullet(BULLET_RE.sub("", line, count=1))
        elif current:
            current.add_text(line)

    if current:
        slides.append(current.build())

    return Deck(
        title=slides[0].title if slides else DEFAULT_DECK_TITLE,
        slides=slides,
    )

def normalize_prompt(prompt: str) -> str:
    """Prompt as one line with collapsed whitespace, cut to MAX_PROMPT_CHARS"""
    return " ".join((prompt or "").split())[:MAX_PROMPT_CHARS]

def first_match(rules: Sequence[PromptRule], prompt: str) -> Optional[str]:
    """Value captured by the highest-priority rule that matches"""
    prompt = normalize_prompt(prompt)
    for rule in rules:
        value = rule.extract(prompt)
        if value:
            return value
    return None

def title_case(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" "))

def extract_title(prompt: str) -> str:
    value = first_match(TITLE_RULES, prompt)
    return title_case(value) if value else DEFAULT_PROMPT_TITLE

def extract_topic(prompt: str) -> str:
    return first_match(TOPIC_RULES, prompt) or DEFAULT_TOPIC

def extract_slide_count(prompt: str) -> int:
    """Requested slide count including the title slide, capped at MAX_SLIDE_COUNT"""
    match = SLIDE_COUNT_RE.search(normalize_prompt(prompt))
    if not match:
        return DEFAULT_SLIDE_COUNT
    return min(int(match.group(1)), MAX_SLIDE_COUNT)

def build_section_slides(topic: str, count: int) -> List[Slide]:
    slides = []
    for template in SECTION_TEMPLATES[:max(count, 0)]:
        slides.append(Slide(
            kind=SlideKind.BULLETS,
            title=template.title,
            body=template.body.format(topic=topic),
            bullets=[bullet.format(topic=topic) for bullet in template.bullets],
        ))
    return slides

def parse_natural_language(prompt: str) -> Deck:
    title = extract_title(prompt)
    topic = extract_topic(prompt)
    slide_count = extract_slide_count(prompt)

    slides = [Slide(kind=SlideKind.TITLE, title=title, body=f"Presentation about {topic}")]
    slides.extend(build_section_slides(topic, slide_count - 1))

    return Deck(title=title, slides=slides, original_prompt=prompt)

def fallback_deck() -> Deck:
    return Deck(
        title=DEFAULT_DECK_TITLE,
        slides=[Slide(kind=SlideKind.TITLE, title=DEFAULT_DECK_TITLE)],
    )

def compile_outline(text: Optional[str]) -> Deck:
    """Compile outline text or a natural-language request into a Deck. Never raises."""
    if text is None or not text.strip():
        return fallback_deck()
    if is_natural_language(text):
        return parse_natural_language(text)
    return parse_structured(text)
