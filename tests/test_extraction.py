"""Extraction and formatting tests (pure functions, no UI)."""

from __future__ import annotations

import json

import pytest

from scene_json_parser.accessors import get_mapping_by_path
from scene_json_parser.errors import InvalidJsonError
from scene_json_parser.extraction import extract_grouped_fields, group_scene_fields
from scene_json_parser.formatting import context_preview, field_title, format_field_content
from scene_json_parser.paths import split_path


SAMPLE = json.dumps([
    {
        "scene_id": 1,
        "master_prompts": {"visual": "wide shot", "camera": "dolly in", "duration": 4},
        "layers": {
            "audio_engineering": {"music": "lofi beat", "visual": "from audio"},
            "tiktok_native": {"caption": "POV: you wake up", "sticker": None},
        },
    },
    {
        "master_prompts": {"visual": "close up"},
        "layers": {"tiktok_native": {"caption": "wait for it", "hashtags": ["#a", "#b"]}},
    },
])


class TestPaths:
    def test_split_plain_path(self):
        assert split_path("layers.audio_engineering") == ["layers", "audio_engineering"]

    def test_split_ignores_empty_segments(self):
        assert split_path("layers..tiktok_native.") == ["layers", "tiktok_native"]
        assert split_path("") == []

    def test_mapping_lookup_is_dict_only(self):
        scene = {"layers": [{"audio_engineering": {"x": "y"}}]}
        assert get_mapping_by_path(scene, "layers.audio_engineering") is None
        assert get_mapping_by_path({"layers": {"audio_engineering": "flat"}}, "layers.audio_engineering") is None
        assert get_mapping_by_path({"master_prompts": {"a": "b"}}, "master_prompts") == {"a": "b"}


class TestExtract:
    def test_merge_across_scenes_skips_numbers(self):
        raw = '[{"master_prompts":{"x":"hello"}},{"layers":{"audio_engineering":{"x":"world","y":42}}}]'
        result = extract_grouped_fields(raw)
        assert result.grouped == {"x": ["hello", "world"]}
        assert result.keys == ["x"]

    def test_scene_then_source_then_entry_order(self):
        result = extract_grouped_fields(SAMPLE)
        assert result.grouped["visual"] == ["wide shot", "from audio", "close up"]
        assert result.grouped["caption"] == ["POV: you wake up", "wait for it"]

    def test_non_string_values_skipped(self):
        result = extract_grouped_fields(SAMPLE)
        for name in ("duration", "sticker", "hashtags"):
            assert name not in result.grouped

    def test_non_string_instance_does_not_block_string_merge(self):
        raw = json.dumps([
            {"master_prompts": {"x": 5}},
            {"master_prompts": {"x": "s"}},
            {"layers": {"tiktok_native": {"x": None}}},
        ])
        assert extract_grouped_fields(raw).grouped == {"x": ["s"]}

    def test_booleans_and_objects_skipped(self):
        raw = json.dumps([{"master_prompts": {"a": True, "b": {"c": "d"}, "e": 1.5, "a2": "ok"}}])
        assert extract_grouped_fields(raw).grouped == {"a2": ["ok"]}

    def test_keys_sorted(self):
        raw = json.dumps([{"master_prompts": {"zeta": "1", "alpha": "2", "Mid": "3"}}])
        assert extract_grouped_fields(raw).keys == ["Mid", "alpha", "zeta"]

    def test_deterministic(self):
        first = extract_grouped_fields(SAMPLE)
        second = extract_grouped_fields(SAMPLE)
        assert first.grouped == second.grouped
        assert first.keys == second.keys
        assert json.dumps(first.grouped) == json.dumps(second.grouped)

    def test_unrecognised_structure_yields_no_keys(self):
        result = extract_grouped_fields('[{"foo": "bar"}]')
        assert result.grouped == {}
        assert result.keys == []

    def test_non_dict_scenes_and_sub_structures_skipped(self):
        raw = json.dumps([1, "two", None, {"master_prompts": ["x"], "layers": "flat"}])
        assert extract_grouped_fields(raw).keys == []

    @pytest.mark.parametrize("raw", [
        '"not an array"',
        '{"master_prompts": {}}',
        "[1, 2",
        "",
        "null",
        "[" * 100000,
        '[{"master_prompts": {"x": "a", "n": NaN}}]',
        '[{"master_prompts": {"x": "a", "n": Infinity}}]',
        "[-Infinity]",
    ])
    def test_invalid_json(self, raw):
        with pytest.raises(InvalidJsonError) as exc:
            extract_grouped_fields(raw)
        assert exc.value.message == "Invalid JSON format. Please check your input."
        assert exc.value.error_code == "INVALID_JSON"

    def test_custom_paths(self):
        scenes = [{"extra": {"notes": {"n": "kept"}}, "master_prompts": {"m": "ignored"}}]
        assert group_scene_fields(scenes, paths=["extra.notes"]) == {"n": ["kept"]}


class TestFormatting:
    def test_numbered_blank_line_separated(self):
        assert format_field_content(["a", "b"]) == "1. a\n\n2. b"

    def test_empty(self):
        assert format_field_content([]) == ""

    def test_multiline_values_kept(self):
        assert format_field_content(["line one\nline two"]) == "1. line one\nline two"

    def test_field_title(self):
        assert field_title("voice_over_script") == "VOICE OVER SCRIPT"

    def test_context_preview(self):
        assert context_preview("x" * 300) == "x" * 200 + "..."
        assert context_preview("") == ""
