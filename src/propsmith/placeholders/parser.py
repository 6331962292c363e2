"""Parser for locating placeholder spans in text."""

import logging

from .models import Placeholder, PlaceholderConfig, ValidationResult
from .syntax import split_default, substring_match

logger = logging.getLogger(__name__)


class PlaceholderParser:
    """Find balanced placeholder spans for a given marker configuration."""

    def __init__(self, config: PlaceholderConfig):
        self.config = config

    def find_placeholder_end(self, text: str, start_index: int) -> int:
        """
        Find the suffix that closes the placeholder opened at *start_index*.

        Nested openings are counted on the simple prefix, so for "${" / "}"
        the text "${a{b}c}" closes on the last brace, not the first.

        Args:
            text: The text being scanned
            start_index: Index of the placeholder prefix

        Returns:
            Index of the closing suffix, or -1 if the placeholder is unterminated
        """
        prefix = self.config.prefix
        suffix = self.config.suffix
        simple_prefix = self.config.simple_prefix

        index = start_index + len(prefix)
        within_nested = 0
        while index < len(text):
            if substring_match(text, index, suffix):
                if within_nested > 0:
                    within_nested -= 1
                    index += len(suffix)
                else:
                    return index
            elif substring_match(text, index, simple_prefix):
                within_nested += 1
                index += len(simple_prefix)
            else:
                index += 1
        return -1

    def extract_placeholders(self, text: str) -> list[Placeholder]:
        """
        Extract all top-level placeholders from text.

        Nested placeholders are reported as part of their enclosing span
        (with ``nested=True``), not as separate entries. Unterminated
        prefixes are skipped.

        Args:
            text: The text to parse

        Returns:
            List of Placeholder objects in order of appearance
        """
        prefix = self.config.prefix
        suffix = self.config.suffix
        placeholders = []

        start_index = text.find(prefix)
        while start_index != -1:
            end_index = self.find_placeholder_end(text, start_index)
            if end_index == -1:
                start_index = text.find(prefix, start_index + len(prefix))
                continue

            key = text[start_index + len(prefix):end_index]
            name, default = split_default(key, self.config.separator)
            span_end = end_index + len(suffix)
            placeholder = Placeholder(
                key=key,
                name=name,
                default=default,
                syntax=text[start_index:span_end],
                start_pos=start_index,
                end_pos=span_end,
                nested=prefix in key,
            )
            placeholders.append(placeholder)
            logger.debug(f"Found placeholder: {placeholder.syntax}")

            start_index = text.find(prefix, span_end)

        return placeholders

    def validate_syntax(self, text: str) -> ValidationResult:
        """
        Validate placeholder syntax in text.

        Args:
            text: The text to validate

        Returns:
            ValidationResult with validation status and any errors
        """
        prefix = self.config.prefix
        errors = []
        warnings = []

        start_index = text.find(prefix)
        while start_index != -1:
            end_index = self.find_placeholder_end(text, start_index)
            if end_index == -1:
                errors.append(
                    f"Unterminated placeholder at position {start_index}: "
                    f"missing '{self.config.suffix}'"
                )
                start_index = text.find(prefix, start_index + len(prefix))
                continue

            key = text[start_index + len(prefix):end_index]
            name, _ = split_default(key, self.config.separator)
            if not name.strip():
                warnings.append(f"Empty placeholder name at position {start_index}")

            start_index = text.find(prefix, end_index + len(self.config.suffix))

        return ValidationResult(
            valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )

    def has_placeholders(self, text: str) -> bool:
        """Check whether text contains at least one complete placeholder."""
        return bool(self.extract_placeholders(text))
