"""Loadable skill vocabulary and section-detection rules.

Both are plain data kept in YAML files so the domain vocabulary can change
without touching the scoring code. Loaded objects are immutable and safe to
share between threads.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from config import settings
from services.text_normalizer import normalize

logger = logging.getLogger(__name__)


class VocabularyError(RuntimeError):
    """A vocabulary or ruleset file is missing or malformed."""


def _load_yaml(path: str | Path) -> dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise VocabularyError(f"Vocabulary file not found: '{path}'")
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise VocabularyError(f"Failed to read '{path}': {exc}") from exc
    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise VocabularyError(f"Invalid YAML in '{path}': {exc}") from exc
    if not isinstance(parsed, dict):
        raise VocabularyError(f"Invalid vocabulary '{path}': expected a top-level mapping.")
    return parsed


# ---------------------------------------------------------------------------
# Skill vocabulary: canonical skill -> surface-form aliases
# ---------------------------------------------------------------------------


def _alias_pattern(aliases: Iterable[str]) -> re.Pattern:
    """Whole-word pattern over normalized text for a set of aliases.

    "java" must not match inside "javascript", "c" not inside "c++", "c#" or
    "objective-c", "react" not inside "react-native", ".net" not inside
    "asp.net". A slash still separates: "java/javascript" yields both.
    """
    alternation = "|".join(re.escape(a) for a in sorted(aliases, key=len, reverse=True))
    return re.compile(rf"(?<![\w.#+-])(?:{alternation})(?![\w#+-]|\.\w)")


@dataclass(frozen=True)
class SkillVocabulary:
    """Canonical skill names mapped to the normalized aliases searched for in text.

    A canonical name always resolves through ``canonicalize`` but is only
    searched for when it is listed among its own aliases.
    """

    aliases: dict[str, tuple[str, ...]]
    patterns: dict[str, re.Pattern] = field(init=False, repr=False, compare=False)
    _lookup: dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        lookup: dict[str, str] = {skill: skill for skill in self.aliases}
        for skill, alias_list in self.aliases.items():
            for alias in alias_list:
                owner = lookup.setdefault(alias, skill)
                if owner != skill:
                    logger.debug("Alias %r already maps to %r, ignoring for %r", alias, owner, skill)
        object.__setattr__(self, "_lookup", lookup)
        object.__setattr__(
            self,
            "patterns",
            {
                skill: _alias_pattern(alias_list)
                for skill, alias_list in self.aliases.items()
                if alias_list
            },
        )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "SkillVocabulary":
        """Build a vocabulary, normalizing names and aliases.

        Each value is a list of aliases (or None), or a mapping with
        ``aliases`` and ``match_canonical``. The canonical name is one of its
        own aliases unless ``match_canonical`` is false, which keeps ambiguous
        words like "go" or "c" from matching ordinary prose.
        """
        merged: dict[str, list[str]] = {}
        for name, entry in mapping.items():
            canonical = normalize(str(name))
            if not canonical:
                continue
            if isinstance(entry, Mapping):
                alias_list = entry.get("aliases") or []
                match_canonical = entry.get("match_canonical", True)
            else:
                alias_list = entry or []
                match_canonical = True
            forms = merged.setdefault(canonical, [])
            for alias in [canonical, *alias_list] if match_canonical else alias_list:
                norm = normalize(str(alias))
                if norm and norm not in forms:
                    forms.append(norm)
        return cls(aliases={skill: tuple(forms) for skill, forms in merged.items()})

    @classmethod
    def load(cls, path: str | Path) -> "SkillVocabulary":
        """Load a vocabulary from YAML shaped as ``skills: {canonical: [alias, ...]}``.

        An entry may instead be ``{aliases: [...], match_canonical: false}``.
        """
        data = _load_yaml(path)
        skills = data.get("skills")
        if not isinstance(skills, dict):
            raise VocabularyError(f"Invalid vocabulary '{path}': 'skills' must be a mapping.")
        for name, entry in skills.items():
            if isinstance(entry, dict):
                alias_list = entry.get("aliases")
                if not isinstance(entry.get("match_canonical", True), bool):
                    raise VocabularyError(
                        f"Invalid vocabulary '{path}': 'match_canonical' for '{name}' must be true or false."
                    )
            else:
                alias_list = entry
            if alias_list is not None and not isinstance(alias_list, list):
                raise VocabularyError(
                    f"Invalid vocabulary '{path}': aliases for '{name}' must be a list."
                )
        vocabulary = cls.from_mapping(skills)
        logger.info("Loaded skill vocabulary with %d skills from %s", len(vocabulary), path)
        return vocabulary

    @property
    def skills(self) -> frozenset[str]:
        return frozenset(self.aliases)

    def canonicalize(self, name: str) -> str:
        """Resolve a skill name or alias to its canonical form.

        Unknown names are returned normalized.
        """
        norm = normalize(name)
        return self._lookup.get(norm, norm)

    def canonicalize_all(self, names: Iterable[str]) -> frozenset[str]:
        return frozenset(c for c in (self.canonicalize(n) for n in names) if c)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.canonicalize(name) in self.aliases

    def __len__(self) -> int:
        return len(self.aliases)


# ---------------------------------------------------------------------------
# Section-detection rules
# ---------------------------------------------------------------------------

_RULE_LISTS = (
    "skills_headings",
    "experience_headings",
    "education_terms",
    "action_verbs",
    "quantity_units",
    "bullet_markers",
)


@dataclass(frozen=True)
class SectionRules:
    """Heading terms, verb and unit lists and thresholds used by the section detectors."""

    skills_headings: tuple[str, ...]
    experience_headings: tuple[str, ...]
    education_terms: tuple[str, ...]
    action_verbs: tuple[str, ...]
    quantity_units: tuple[str, ...]
    bullet_markers: tuple[str, ...]
    min_bullet_lines: int = 2
    action_verb_window: int = 3

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], source: str = "<mapping>") -> "SectionRules":
        values: dict[str, Any] = {}
        for key in _RULE_LISTS:
            items = mapping.get(key)
            if not isinstance(items, list) or not all(isinstance(i, str) for i in items):
                raise VocabularyError(f"Invalid section rules '{source}': '{key}' must be a list of strings.")
            values[key] = tuple(i.strip().lower() for i in items if i.strip())
        for key in ("min_bullet_lines", "action_verb_window"):
            if key in mapping:
                value = mapping[key]
                if not isinstance(value, int) or value < 1:
                    raise VocabularyError(f"Invalid section rules '{source}': '{key}' must be a positive integer.")
                values[key] = value
        return cls(**values)

    @classmethod
    def load(cls, path: str | Path) -> "SectionRules":
        rules = cls.from_mapping(_load_yaml(path), source=str(path))
        logger.info("Loaded section rules from %s", path)
        return rules


# Process-wide read-only defaults, loaded on first use
_default_vocabulary: SkillVocabulary | None = None
_default_rules: SectionRules | None = None


def default_vocabulary() -> SkillVocabulary:
    """Return the vocabulary named by ``settings.skill_vocabulary_path``."""
    global _default_vocabulary
    if _default_vocabulary is None:
        _default_vocabulary = SkillVocabulary.load(settings.skill_vocabulary_path)
    return _default_vocabulary


def default_rules() -> SectionRules:
    """Return the ruleset named by ``settings.section_rules_path``."""
    global _default_rules
    if _default_rules is None:
        _default_rules = SectionRules.load(settings.section_rules_path)
    return _default_rules
