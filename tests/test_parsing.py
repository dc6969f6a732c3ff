"""Tests for lenient JSON parsing of model replies."""

import json

import pytest

from rfp_dataset.llm.parsing import parse_json, strip_code_fences


class TestParseJson:
    def test_plain_array(self):
        assert parse_json('["a", "b"]') == ["a", "b"]

    def test_json_fenced_array_matches_unwrapped(self):
        payload = ["Section A: vendor must provide 24/7 support.", "Section B"]
        fenced = "```json\n" + json.dumps(payload) + "\n```"
        assert parse_json(fenced) == parse_json(json.dumps(payload)) == payload

    def test_bare_fence(self):
        assert parse_json("```\n[1, 2]\n```") == [1, 2]

    def test_surrounding_whitespace(self):
        assert parse_json("  \n [\"x\"] \n ") == ["x"]

    def test_objects_are_returned_unvalidated(self):
        assert parse_json('{"sections": ["a"]}') == {"sections": ["a"]}

    @pytest.mark.parametrize(
        "garbage",
        ["", "Sure! Here are the sections:", "[unterminated", "```json\n{oops}\n```", "NO"],
    )
    def test_garbage_yields_empty_list(self, garbage):
        assert parse_json(garbage) == []

    def test_strip_code_fences_leaves_inner_text(self):
        assert strip_code_fences("```json\n[]\n```") == "[]"
