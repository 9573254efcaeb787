from __future__ import annotations

from typing import List, Tuple

# Order matters: values are appended per scene in this order.
EXTRACTION_PATHS: Tuple[str, ...] = (
    'master_prompts',
    'layers.audio_engineering',
    'layers.tiktok_native',
)


def split_path(path: str) -> List[str]:
    """Split an extraction path like 'layers.audio_engineering' into keys."""
    if not path:
        return []
    return [p for p in str(path).split('.') if p]
