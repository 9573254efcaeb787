from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from .accessors import get_mapping_by_path
from .errors import InvalidJsonError
from .paths import EXTRACTION_PATHS

logger = logging.getLogger(__name__)

GroupedData = Dict[str, List[str]]


@dataclass(frozen=True)
class ParsedResult:
    grouped: GroupedData = field(default_factory=dict)
    keys: List[str] = field(default_factory=list)


def group_scene_fields(scenes: List[Any], paths: Iterable[str] = EXTRACTION_PATHS) -> GroupedData:
    """Group string values by field name across scenes.

    Scenes are visited in order; within a scene each path is visited in order
    and its mapping in insertion order. All paths share one namespace.
    """
    paths = tuple(paths)
    grouped: GroupedData = {}

    for scene in scenes:
        if not isinstance(scene, dict):
            continue
        for path in paths:
            mapping = get_mapping_by_path(scene, path)
            if mapping is None:
                continue
            for key, value in mapping.items():
                if isinstance(value, str):
                    grouped.setdefault(key, []).append(value)

    return grouped


def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant {name}")


def decode_scene_array(raw_text: str) -> List[Any]:
    try:
        data = json.loads(raw_text, parse_constant=_reject_constant)
    except (TypeError, ValueError, RecursionError) as e:
        logger.debug("JSON decode failed: %s", e)
        raise InvalidJsonError() from e

    if not isinstance(data, list):
        logger.debug("Top-level JSON value is %s, expected a list", type(data).__name__)
        raise InvalidJsonError()
    return data


def extract_grouped_fields(raw_text: str, paths: Iterable[str] = EXTRACTION_PATHS) -> ParsedResult:
    """Parse a scene array and group its string fields.

    Raises InvalidJsonError for malformed JSON or a non-array top level. An
    empty `keys` list is a valid result; callers decide what it means.
    """
    scenes = decode_scene_array(raw_text)
    grouped = group_scene_fields(scenes, paths)
    return ParsedResult(grouped=grouped, keys=sorted(grouped))
