"""Rule document data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Dict, List, Optional

RULE_SUFFIX = ".mdc"


@dataclass(frozen=True)
class RuleMetadata:
    """Typed view of the frontmatter fields the editor understands."""

    description: str = ""
    globs: List[str] = field(default_factory=list)
    always_apply: bool = False

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "RuleMetadata":
        description = data.get("description") or ""
        return cls(
            description=str(description).strip(),
            globs=normalize_globs(data.get("globs")),
            always_apply=data.get("alwaysApply") is True,
        )


def normalize_globs(value: Any) -> List[str]:
    """Accept ``globs`` as a YAML list or a comma-separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        return [g.strip() for g in value.split(",") if g.strip()]
    if isinstance(value, (list, tuple)):
        return [str(g).strip() for g in value if str(g).strip()]
    return []


@dataclass
class RuleDocument:
    """A Markdown rule file split into frontmatter and body.

    ``frontmatter`` is the raw text between the ``---`` delimiters, or None
    when the file has no (or an unterminated) frontmatter block. ``body`` is
    everything after the closing delimiter, or the whole text when there is
    no frontmatter.
    """

    path: Path
    relpath: str
    text: str
    frontmatter: Optional[str]
    body: str
    body_start: int = 1
    _data: Optional[Dict[str, Any]] = field(default=None, init=False, repr=False, compare=False)
    _data_error: Optional[Exception] = field(default=None, init=False, repr=False, compare=False)

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def stem(self) -> str:
        name = self.path.name
        if name.endswith(RULE_SUFFIX):
            return name[: -len(RULE_SUFFIX)]
        return self.path.stem

    def category(self, categories_dir: str = "categories") -> Optional[str]:
        """Return the category directory this rule lives in, if any."""
        parts = PurePosixPath(self.relpath).parts
        if len(parts) >= 3 and parts[0] == categories_dir:
            return parts[1]
        return None

    @property
    def data(self) -> Dict[str, Any]:
        """Parsed frontmatter mapping, empty when there is no block.

        The block is parsed once; a parse failure is remembered and raised
        again as the same FrontmatterError on every access.
        """
        if self.frontmatter is None:
            return {}
        if self._data_error is not None:
            raise self._data_error
        if self._data is None:
            from rulekit.documents.frontmatter import FrontmatterError, parse_frontmatter

            try:
                self._data = parse_frontmatter(self.frontmatter)
            except FrontmatterError as exc:
                self._data_error = exc
                raise
        return self._data

    @property
    def lines(self) -> List[str]:
        return self.text.splitlines()

    @property
    def frontmatter_start(self) -> int:
        """Line number of the first line inside the frontmatter block."""
        if self.frontmatter is None:
            return 1
        return self.body_start - 1 - len(self.frontmatter.splitlines())

    def field_line(self, key: str) -> int:
        """Line number where top-level *key* is declared, or 0."""
        if self.frontmatter is None:
            return 0
        prefix = f"{key}:"
        for offset, line in enumerate(self.frontmatter.splitlines()):
            if line.startswith(prefix):
                return self.frontmatter_start + offset
        return 0
