"""Splitting templates into small, individually addressable fragments."""

from __future__ import annotations

import re
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field

from statetemplate.analyzer import TemplateAnalyzer

_ID_CHARSET = "abcdefghijklmnopqrstuvwxyz0123456789"
_ID_LENGTH = 6
_EXPRESSION = re.compile(r"\{\{[^}]*\}\}")
_WHITESPACE = " \t\n\r"


def generate_random_id() -> str:
    """Return a random six-character lower-case alphanumeric identifier."""
    return "".join(secrets.choice(_ID_CHARSET) for _ in range(_ID_LENGTH))


@dataclass
class TemplateFragment:
    """A piece of template text cut out around one template expression."""

    id: str
    content: str
    dependencies: list[str] = field(default_factory=list)
    start_pos: int = 0
    end_pos: int = 0


class FragmentExtractor:
    """Extracts minimal fragments around ``{{ ... }}`` expressions."""

    def __init__(
        self,
        analyzer: TemplateAnalyzer | None = None,
        id_factory: Callable[[], str] = generate_random_id,
    ) -> None:
        self.analyzer = analyzer if analyzer is not None else TemplateAnalyzer()
        self.id_factory = id_factory

    def extract_fragments(
        self, template_content: str
    ) -> tuple[list[TemplateFragment], str]:
        """Return the fragments found and the template with them replaced by calls."""
        fragments = [
            fragment
            for match in _EXPRESSION.finditer(template_content)
            if (fragment := self._minimal_fragment(template_content, match.start(), match.end()))
            is not None
        ]
        return fragments, self.replace_fragments_with_calls(template_content, fragments)

    def _minimal_fragment(
        self, content: str, expr_start: int, expr_end: int
    ) -> TemplateFragment | None:
        start = self.find_fragment_start(content, expr_start)
        end = self.find_fragment_end(content, expr_end)
        text = content[start:end].strip()
        if len(text) < 3 or "{{" not in text:
            return None
        return TemplateFragment(
            id=self.id_factory(),
            content=text,
            dependencies=self.analyzer.field_references_with_existing_mappings(text),
            start_pos=start,
            end_pos=end,
        )

    def find_fragment_start(self, content: str, expr_start: int) -> int:
        """Return where the text node holding the expression begins."""
        i = expr_start
        while i > 0 and content[i - 1] in _WHITESPACE:
            i -= 1

        if i > 0 and content[i - 1] == ">":
            # Directly after a tag: the fragment starts past any whitespace.
            while i < len(content) and content[i] in _WHITESPACE:
                i += 1
            return i

        while i > 0 and content[i - 1] not in "<>":
            i -= 1
        return i

    def find_fragment_end(self, content: str, expr_end: int) -> int:
        """Return where the text node holding the expression ends."""
        i = expr_end
        length = len(content)
        while i < length and content[i] in _WHITESPACE:
            i += 1

        if i < length and content[i] == "<":
            return i
        if content.startswith("{{", i):
            return i

        while i < length:
            if content[i] in "<>" or content.startswith("{{", i):
                break
            i += 1
        return i

    def replace_fragments_with_calls(
        self, original: str, fragments: list[TemplateFragment]
    ) -> str:
        """Replace each fragment's span with a ``{{template "id" .}}`` call."""
        result = original
        # Replace from the end so earlier positions stay valid.
        for fragment in sorted(fragments, key=lambda f: f.start_pos, reverse=True):
            call = f'{{{{template "{fragment.id}" .}}}}'
            result = result[: fragment.start_pos] + call + result[fragment.end_pos :]
        return result

    def named_templates(
        self, name: str, template_content: str
    ) -> tuple[dict[str, str], list[TemplateFragment]]:
        """Return the main template and one named template per fragment.

        The mapping holds the rewritten main template under ``name``
        followed by each fragment's content under its identifier.
        """
        fragments, modified = self.extract_fragments(template_content)
        templates = {name: modified}
        templates.update((fragment.id, fragment.content) for fragment in fragments)
        return templates, fragments