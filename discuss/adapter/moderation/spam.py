"""Heuristic spam and profanity filter.

Runs a handful of cheap text checks in a fixed order and reports the first
one that trips. The order matters only for the reason shown to the user.
"""

import re

import logfire

from discuss.config import ModerationSettings
from discuss.domain.service.moderation import ContentPolicy
from discuss.domain.value import PolicyVerdict

URL_PATTERN = re.compile(r"https?://\S+")
SPECIAL_CHAR_PATTERN = re.compile(r"[A-Za-z0-9\s]")


class HeuristicContentPolicy(ContentPolicy):
    """Content policy built from text heuristics and a blocked-terms list."""

    def __init__(self, settings: ModerationSettings | None = None) -> None:
        """Initialize the filter.

        Args:
            settings: Thresholds and blocked terms (defaults if omitted)
        """
        self.settings = settings or ModerationSettings()
        # "." skips newlines, so blank lines between paragraphs never count
        self._repeated = re.compile(
            rf"(.)\1{{{self.settings.repeated_char_threshold - 1},}}"
        )
        self._blocked: re.Pattern[str] | None = None
        if self.settings.blocked_terms:
            terms = "|".join(re.escape(t) for t in self.settings.blocked_terms)
            self._blocked = re.compile(rf"\b({terms})\b", re.IGNORECASE)

    def has_repeated_characters(self, text: str) -> bool:
        """Same character repeated threshold times in a row ("!!!!!", "aaaaa")."""
        return self._repeated.search(text) is not None

    def is_all_caps(self, text: str) -> bool:
        """Shouting: long enough, has letters, and no lowercase."""
        if len(text) < self.settings.all_caps_min_length:
            return False
        return text == text.upper() and re.search(r"[A-Z]", text) is not None

    def has_excessive_special_chars(self, text: str) -> bool:
        """Share of characters outside letters, digits and whitespace."""
        if not text:
            return False
        special = SPECIAL_CHAR_PATTERN.sub("", text)
        return len(special) / len(text) > self.settings.special_char_ratio

    def has_excessive_urls(self, text: str) -> bool:
        """Link dumping."""
        return len(URL_PATTERN.findall(text)) >= self.settings.max_urls

    def contains_blocked_term(self, text: str) -> bool:
        """Whole-word, case-insensitive match against the blocked list."""
        return self._blocked is not None and self._blocked.search(text) is not None

    def check(self, text: str) -> PolicyVerdict:
        """Inspect comment text.

        Args:
            text: Trimmed comment body

        Returns:
            Verdict with the first failing heuristic as the reason
        """
        checks = (
            (self.has_repeated_characters, "Too many repeated characters"),
            (self.is_all_caps, "Message is all caps"),
            (self.has_excessive_special_chars, "Too many special characters"),
            (self.has_excessive_urls, "Too many URLs"),
            (self.contains_blocked_term, "Message contains blocked language"),
        )
        for predicate, reason in checks:
            if predicate(text):
                logfire.info("Content flagged", reason=reason, length=len(text))
                return PolicyVerdict(flagged=True, reason=reason)

        return PolicyVerdict(flagged=False)
