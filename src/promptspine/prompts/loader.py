"""
Filesystem template loader.

Reads ``.md`` / ``.txt`` templates from one directory, parses them once and
caches the :class:`ParsedTemplate` by filename. The parsed template's name
is the filename without extension, so error messages read
``Template "deep-research" ...``.

Usage::

    loader = PromptTemplateLoader("prompts")
    template = loader.load("deep-research.md")
"""

from __future__ import annotations

from pathlib import Path

from promptspine.core.errors import TemplateLoadError
from promptspine.core.logging import get_logger
from promptspine.prompts.template import ParsedTemplate, parse_template

logger = get_logger(__name__)

TEMPLATE_EXTENSIONS = frozenset({".md", ".txt"})


class PromptTemplateLoader:
    """Loads and caches templates from ``base_dir``."""

    def __init__(self, base_dir: Path | str):
        self.base_dir = Path(base_dir).resolve()
        if not self.base_dir.is_dir():
            raise TemplateLoadError(
                str(self.base_dir),
                f"Template directory does not exist: {self.base_dir}",
            )
        self._cache: dict[str, ParsedTemplate] = {}

    def path_for(self, filename: str) -> Path:
        return self.base_dir / filename

    def load(self, filename: str) -> ParsedTemplate:
        """Load, parse and cache one template.

        Raises:
            TemplateLoadError: file missing, unreadable or unsupported extension
            TemplateParseError: the template itself is invalid
        """
        cached = self._cache.get(filename)
        if cached is not None:
            return cached

        path = self.path_for(filename)
        if not path.is_file():
            raise TemplateLoadError(str(path), f"Template file not found: {path}")

        ext = path.suffix.lower()
        if ext not in TEMPLATE_EXTENSIONS:
            raise TemplateLoadError(
                str(path),
                f'Unsupported template extension "{ext}". Use: {", ".join(sorted(TEMPLATE_EXTENSIONS))}',
            )

        try:
            source = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateLoadError(str(path), f"Failed to read template {path}: {e}", cause=e) from e

        parsed = parse_template(source, path.stem)
        self._cache[filename] = parsed
        logger.debug("template_loaded", filename=filename, variables=len(parsed.variables))
        return parsed

    def load_all(self) -> dict[str, ParsedTemplate]:
        """Load every template in the directory, keyed by filename."""
        return {name: self.load(name) for name in self.list_templates(self.base_dir)}

    def clear_cache(self) -> None:
        self._cache.clear()

    @staticmethod
    def list_templates(directory: Path | str) -> list[str]:
        """Template filenames in ``directory``, sorted. Empty if it does not exist."""
        directory = Path(directory)
        if not directory.is_dir():
            return []
        return sorted(
            entry.name
            for entry in directory.iterdir()
            if entry.is_file() and entry.suffix.lower() in TEMPLATE_EXTENSIONS
        )


__all__ = ["TEMPLATE_EXTENSIONS", "PromptTemplateLoader"]
