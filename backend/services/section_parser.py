"""Resume structure detection and contact extraction.

Works on raw resume text (before normalization) because line breaks,
bullet markers and punctuation are the structural cues. Every detector is
independent: none reads another's result.
"""

import re
from dataclasses import dataclass
from functools import lru_cache

from models.schemas.advisor_report import SectionFlags
from services.vocabulary import SectionRules, default_rules

# Contact info patterns
EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)*\.[a-zA-Z]{2,}")
# Ten or more digits: "(555) 123-4567", "555.123.4567", "+1 555 123 4567", "+44 20 7946 0958"
PHONE_RE = re.compile(
    r"(?<![\w.])(?:"
    r"(?:\+?\d{1,3}[ .-]?)?(?:\(\d{3}\)|\d{3})[ .-]?\d{3}[ .-]?\d{4}"
    r"|\+\d{1,3}(?:[ .-]?\(?\d{1,4}\)?){2,5}"
    r")(?![\w])"
)
LINKEDIN_RE = re.compile(r"linkedin\.com/in/[\w-]+", re.IGNORECASE)
GITHUB_RE = re.compile(r"github\.com/[\w-]+", re.IGNORECASE)

# Numbered bullets: "1.", "12.", "1)", "12)"
_NUMBERED_RE = re.compile(r"^\d{1,2}[.)]\s+")
_MIN_PHONE_DIGITS = 10


@dataclass(frozen=True)
class _CompiledRules:
    skills_heading: re.Pattern
    experience_heading: re.Pattern
    education: re.Pattern
    bullet: re.Pattern
    quantity: re.Pattern
    action_verbs: frozenset[str]
    markers: str


def _phrase(term: str) -> str:
    return re.escape(term).replace(r"\ ", r"[ \t]+")


def _terms(terms: tuple[str, ...]) -> str:
    return "|".join(_phrase(t) for t in sorted(terms, key=len, reverse=True))


def _heading_pattern(terms: tuple[str, ...], qualifier: bool = False) -> re.Pattern:
    """Heading on its own line (optionally decorated), or heading followed by a colon."""
    words = _terms(terms)
    prefix = r"(?:[a-z]+[ \t]+)?" if qualifier else ""
    return re.compile(
        rf"^[ \t#*=_]*{prefix}(?:{words})[ \t]*:?[ \t#*=_]*$"
        rf"|(?<![\w-]){prefix}(?:{words})[ \t]*:",
        re.IGNORECASE | re.MULTILINE,
    )


def _word_term(term: str) -> str:
    body = _phrase(term)
    if term.endswith("."):
        # "B.S." also written "B.S"
        return body + "?"
    # Plural or possessive forms of word terms: "masters", "master's", "degrees"
    return rf"{body}(?:'?s)?" if term[-1].isalpha() else body


@lru_cache(maxsize=8)
def _compile(rules: SectionRules) -> _CompiledRules:
    education = "|".join(_word_term(t) for t in sorted(rules.education_terms, key=len, reverse=True))
    units = _terms(rules.quantity_units)
    markers = "".join(rules.bullet_markers)
    return _CompiledRules(
        skills_heading=_heading_pattern(rules.skills_headings),
        experience_heading=_heading_pattern(rules.experience_headings, qualifier=True),
        education=re.compile(rf"(?<![\w.])(?:{education})(?!\w)", re.IGNORECASE),
        bullet=re.compile(rf"^[ \t]*[{re.escape(markers)}][ \t]+\S", re.MULTILINE),
        quantity=re.compile(
            rf"\d\s*%|\$\s?\d|\d(?:[.,]\d+)?\+?\s*(?:{units})(?!\w)",
            re.IGNORECASE,
        ),
        action_verbs=frozenset(rules.action_verbs),
        markers=markers,
    )


def _lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def _strip_marker(line: str, markers: str) -> str:
    """Remove a leading bullet marker or number from a stripped line."""
    if line[0] in markers:
        return line.lstrip(markers + " \t").strip()
    return _NUMBERED_RE.sub("", line, count=1).strip()


def _leading_words(line: str, n: int) -> list[str]:
    return [w.strip(".,;:()").lower() for w in line.split()[:n]]


def extract_contact_info(text: str) -> dict[str, str | None]:
    """Extract contact information from resume text."""
    email_match = EMAIL_RE.search(text)
    phone = None
    for match in PHONE_RE.finditer(text):
        if sum(ch.isdigit() for ch in match.group()) >= _MIN_PHONE_DIGITS:
            phone = match.group().strip()
            break
    linkedin_match = LINKEDIN_RE.search(text)
    github_match = GITHUB_RE.search(text)

    return {
        "email": email_match.group() if email_match else None,
        "phone": phone,
        "linkedin": linkedin_match.group() if linkedin_match else None,
        "github": github_match.group() if github_match else None,
    }


def extract_bullets(text: str, rules: SectionRules | None = None) -> list[str]:
    """Extract bullet-point lines (marker or numbered) with the marker removed."""
    compiled = _compile(rules or default_rules())
    bullets = []
    for line in _lines(text):
        if line[0] in compiled.markers or _NUMBERED_RE.match(line):
            cleaned = _strip_marker(line, compiled.markers)
            if cleaned:
                bullets.append(cleaned)
    return bullets


# ---------------------------------------------------------------------------
# Detectors
# ---------------------------------------------------------------------------


def has_contact_info(text: str, rules: SectionRules | None = None) -> bool:
    info = extract_contact_info(text)
    return bool(info["email"] or info["phone"])


def has_skills_section(text: str, rules: SectionRules | None = None) -> bool:
    return bool(_compile(rules or default_rules()).skills_heading.search(text))


def has_projects_or_experience(text: str, rules: SectionRules | None = None) -> bool:
    return bool(_compile(rules or default_rules()).experience_heading.search(text))


def has_education(text: str, rules: SectionRules | None = None) -> bool:
    return bool(_compile(rules or default_rules()).education.search(text))


def has_action_verbs(text: str, rules: SectionRules | None = None) -> bool:
    """True if a strong verb appears within the first few words of any line."""
    rules = rules or default_rules()
    compiled = _compile(rules)
    for line in _lines(text):
        body = _strip_marker(line, compiled.markers)
        if any(w in compiled.action_verbs for w in _leading_words(body, rules.action_verb_window)):
            return True
    return False


def has_quantified_achievements(text: str, rules: SectionRules | None = None) -> bool:
    """True if a bullet-like line carries a measured outcome ("40%", "$2M", "3x", "10k users").

    A line is bullet-like when it starts with a bullet marker, a list number
    or a strong action verb.
    """
    rules = rules or default_rules()
    compiled = _compile(rules)
    for line in _lines(text):
        body = _strip_marker(line, compiled.markers)
        bullet_like = (
            line[0] in compiled.markers
            or bool(_NUMBERED_RE.match(line))
            or any(w in compiled.action_verbs for w in _leading_words(body, rules.action_verb_window))
        )
        if bullet_like and compiled.quantity.search(body):
            return True
    return False


def has_bullet_formatting(text: str, rules: SectionRules | None = None) -> bool:
    rules = rules or default_rules()
    return len(_compile(rules).bullet.findall(text)) >= rules.min_bullet_lines


def detect_sections(text: str, rules: SectionRules | None = None) -> SectionFlags:
    """Run every structural detector over raw resume text."""
    rules = rules or default_rules()
    return SectionFlags(
        has_contact_info=has_contact_info(text, rules),
        has_skills_section=has_skills_section(text, rules),
        has_projects_or_experience=has_projects_or_experience(text, rules),
        has_education=has_education(text, rules),
        has_quantified_achievements=has_quantified_achievements(text, rules),
        has_action_verbs=has_action_verbs(text, rules),
        has_bullet_formatting=has_bullet_formatting(text, rules),
    )
