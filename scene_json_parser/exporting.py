from __future__ import annotations

import io
import logging
import os
import re
import tempfile
import zipfile
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

UNSAFE_FILENAME_CHARS = re.compile(r'[\\/\x00]+')
# json.loads hands back lone surrogates as-is; UTF-8 can't encode them.
LONE_SURROGATES = re.compile('[\ud800-\udfff]')


def to_utf8(text: str) -> bytes:
    return LONE_SURROGATES.sub('\ufffd', text).encode('utf-8')


def safe_filename(filename: str) -> str:
    """Replace path separators so a field name can't leave the export dir."""
    cleaned = UNSAFE_FILENAME_CHARS.sub('_', LONE_SURROGATES.sub('\ufffd', filename or ''))
    if cleaned.strip() in ('', '.', '..'):
        cleaned = '_'
    return cleaned


def unique_filenames(filenames: Iterable[str]) -> List[str]:
    """Sanitize names, suffixing ' (2)', ' (3)'... where two collide."""
    used = set()
    result: List[str] = []
    for filename in filenames:
        name = safe_filename(filename)
        stem, ext = os.path.splitext(name)
        n = 1
        while name in used:
            n += 1
            name = f"{stem} ({n}){ext}"
        used.add(name)
        result.append(name)
    return result


def resolve_output_dir(output_dir: Optional[str] = None) -> str:
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
        return output_dir
    return tempfile.mkdtemp(prefix='scene_export_')


def write_text_file(filename: str, content: str, output_dir: Optional[str] = None) -> str:
    payload = to_utf8(content)
    path = os.path.join(resolve_output_dir(output_dir), safe_filename(filename))
    with open(path, 'wb') as f:
        f.write(payload)
    logger.info("Wrote %s (%d bytes)", path, len(payload))
    return path


def build_zip_archive(entries: Iterable[Tuple[str, str]]) -> bytes:
    """Bundle (filename, content) pairs into a flat zip archive."""
    entries = list(entries)
    names = unique_filenames(filename for filename, _ in entries)
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w', compression=zipfile.ZIP_DEFLATED) as archive:
        for name, (_, content) in zip(names, entries):
            archive.writestr(name, to_utf8(content))
    return buffer.getvalue()


def write_zip_archive(
    entries: Iterable[Tuple[str, str]],
    archive_name: str = 'scene_assets.zip',
    output_dir: Optional[str] = None,
) -> str:
    entries = list(entries)
    payload = build_zip_archive(entries)
    path = os.path.join(resolve_output_dir(output_dir), safe_filename(archive_name))
    with open(path, 'wb') as f:
        f.write(payload)
    logger.info("Wrote archive %s with %d entries", path, len(entries))
    return path
