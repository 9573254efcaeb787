from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, List, Optional, Tuple

from .errors import InputMissingError, NoMatchingFieldsError, NothingToExportError, SceneParserError
from .extraction import GroupedData, extract_grouped_fields
from .formatting import format_field_content

logger = logging.getLogger(__name__)


def export_filename(name: str) -> str:
    return f"{name}.txt"


@dataclass(frozen=True)
class SceneSession:
    """UI-visible state of one browser session.

    Instances are never mutated: every operation returns a new session, so a
    render reading an old instance can't see a half-applied change.
    """

    raw_text: str = ""
    grouped: Optional[GroupedData] = None
    keys: Tuple[str, ...] = ()
    selected: FrozenSet[str] = field(default_factory=frozenset)
    error: Optional[str] = None

    @property
    def has_data(self) -> bool:
        return self.grouped is not None

    @property
    def selected_keys(self) -> List[str]:
        return [k for k in self.keys if k in self.selected]

    def field_counts(self) -> Dict[str, int]:
        if self.grouped is None:
            return {}
        return {k: len(self.grouped.get(k, [])) for k in self.keys}

    def parse(self, raw_text: str) -> "SceneSession":
        """Parse `raw_text`; on any failure only `error` changes."""
        raw_text = raw_text or ""
        try:
            if not raw_text.strip():
                raise InputMissingError()
            result = extract_grouped_fields(raw_text)
            if not result.keys:
                raise NoMatchingFieldsError()
        except SceneParserError as e:
            logger.warning("Parse rejected (%s): %s", e.error_code, e.message)
            return replace(self, error=e.message)

        logger.info("Parsed %d field(s) from scene JSON", len(result.keys))
        return SceneSession(
            raw_text=raw_text,
            grouped=result.grouped,
            keys=tuple(result.keys),
            selected=frozenset(result.keys),
            error=None,
        )

    def clear(self) -> "SceneSession":
        return SceneSession()

    def toggle_field(self, name: str) -> "SceneSession":
        if name in self.selected:
            return replace(self, selected=self.selected - {name})
        if name not in self.keys:
            return self
        return replace(self, selected=self.selected | {name})

    def format_field(self, name: str) -> str:
        if self.grouped is None:
            return ""
        return format_field_content(self.grouped.get(name, []))

    def export_field(self, name: str) -> Tuple[str, str]:
        return export_filename(name), self.format_field(name)

    def export_selected_entries(self) -> List[Tuple[str, str]]:
        """One (filename, content) pair per selected field, in key order."""
        names = self.selected_keys
        if not names:
            raise NothingToExportError()
        return [self.export_field(name) for name in names]
