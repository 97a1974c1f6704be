"""Regex-based discovery of the data fields a template depends on."""

from __future__ import annotations

import re
from collections.abc import Iterable

_WS = r"[\t\n\f\r ]"
_FIELD_PATH = r"[A-Za-z][A-Za-z0-9_]*(?:\.[A-Za-z][A-Za-z0-9_]*)*"
_IDENT = r"[A-Za-z][A-Za-z0-9_]*"

_COMMENT = re.compile(r"\{\{/\*.*?\*/\}\}")

_ASSIGNMENT = re.compile(
    rf"\{{\{{{_WS}*\$({_IDENT}){_WS}*:={_WS}*\.({_FIELD_PATH}){_WS}*\}}\}}"
)

_VARIABLE_USAGE = re.compile(rf"\{{\{{{_WS}*\$({_IDENT}){_WS}*\}}\}}")

# Order matters: references are reported pattern by pattern.
_DIRECT_PATTERNS = tuple(
    re.compile(pattern)
    for pattern in (
        rf"\{{\{{{_WS}*\.({_FIELD_PATH}){_WS}*\}}\}}",
        rf"\{{\{{{_WS}*if{_WS}+\.({_FIELD_PATH}){_WS}*\}}\}}",
        rf"\{{\{{{_WS}*range{_WS}+\.({_FIELD_PATH}){_WS}*\}}\}}",
        rf"\{{\{{{_WS}*with{_WS}+\.({_FIELD_PATH}){_WS}*\}}\}}",
        rf'\{{\{{{_WS}*template{_WS}+"[^"]+"{_WS}+\.({_FIELD_PATH}){_WS}*\}}\}}',
        rf'\{{\{{{_WS}*block{_WS}+"[^"]+"{_WS}+\.({_FIELD_PATH}){_WS}*\}}\}}',
        rf"len{_WS}+\.({_FIELD_PATH})",
    )
)


def strip_comments(template_text: str) -> str:
    """Remove single-line ``{{/* ... */}}`` comments from template text."""
    return _COMMENT.sub("", template_text)


def remove_duplicates(items: Iterable[str]) -> list[str]:
    """Return the items without repeats, keeping first-seen order."""
    return list(dict.fromkeys(items))


class TemplateAnalyzer:
    """Finds field dependencies, following ``$var := .Field`` assignments."""

    def __init__(self) -> None:
        self.variable_mappings: dict[str, str] = {}

    def analyze(
        self, template_text: str | None, associated_texts: Iterable[str] = ()
    ) -> list[str]:
        """Return the unique fields used by a template and its associated templates."""
        dependencies: list[str] = []
        if template_text is not None:
            self.build_variable_mappings(template_text)
            dependencies.extend(self.field_references(template_text))
        for text in associated_texts:
            dependencies.extend(self.field_references(text))
        return remove_duplicates(dependencies)

    def build_variable_mappings(self, template_text: str) -> None:
        """Reset the variable mappings and rebuild them from the given text."""
        self.variable_mappings = {}
        self.extract_variable_assignments(strip_comments(template_text))

    def field_references(self, template_text: str) -> list[str]:
        """Return direct and variable-derived field references.

        Variable assignments are collected first, but only when no
        mappings exist yet.
        """
        clean = strip_comments(template_text)
        if not self.variable_mappings:
            self.extract_variable_assignments(clean)
        return self.direct_field_references(clean) + self.variable_usages(clean)

    def field_references_with_existing_mappings(self, template_text: str) -> list[str]:
        """Return field references using the mappings already collected."""
        clean = strip_comments(template_text)
        return self.direct_field_references(clean) + self.variable_usages(clean)

    def extract_variable_assignments(self, template_text: str) -> None:
        """Record every ``{{$var := .Field}}`` assignment in the mappings."""
        for match in _ASSIGNMENT.finditer(template_text):
            self.variable_mappings[match.group(1)] = match.group(2)

    def direct_field_references(self, template_text: str) -> list[str]:
        """Return fields referenced directly, such as ``{{.Field}}`` or ``{{if .Field}}``."""
        return [
            match.group(1)
            for pattern in _DIRECT_PATTERNS
            for match in pattern.finditer(template_text)
            if match.group(1)
        ]

    def variable_usages(self, template_text: str) -> list[str]:
        """Return the source fields of known variables used as ``{{$var}}``."""
        return [
            self.variable_mappings[match.group(1)]
            for match in _VARIABLE_USAGE.finditer(template_text)
            if match.group(1) in self.variable_mappings
        ]