"""Tests for the chat transcript parser."""

import pytest

from mdbridge.markdown.chat import classify_role, parse_chat, parse_role_line
from mdbridge.markdown.models import ChatRole
from mdbridge.markdown.normalizer import normalize


class TestClassifyRole:
    @pytest.mark.parametrize("label,role", [
        ("User", ChatRole.USER),
        ("  USER  ", ChatRole.USER),
        ("사용자", ChatRole.USER),
        ("Assistant", ChatRole.ASSISTANT),
        ("어시스턴트", ChatRole.ASSISTANT),
        ("ChatGPT", ChatRole.ASSISTANT),
        ("Gemini Pro", ChatRole.ASSISTANT),
        ("System", ChatRole.SYSTEM),
        ("시스템", ChatRole.SYSTEM),
        ("Claude", ChatRole.OTHER),
    ])
    def test_vocabulary(self, label, role):
        assert classify_role(label) is role


class TestParseRoleLine:
    def test_basic(self):
        line = parse_role_line("User: hello there")
        assert line is not None
        assert line.raw_label == "User"
        assert line.role is ChatRole.USER
        assert line.content == "hello there"

    def test_no_space_after_colon(self):
        line = parse_role_line("User:hello")
        assert line is not None
        assert line.content == "hello"

    def test_url_is_not_a_label(self):
        assert parse_role_line("http://example.com") is None

    def test_label_must_start_with_letter(self):
        assert parse_role_line("12: noon") is None

    def test_empty_content_is_not_a_role_line(self):
        assert parse_role_line("Note:") is None


class TestParseChat:
    def test_korean_roles(self):
        result = parse_chat("사용자: 안녕\n어시스턴트: 반갑습니다")
        assert "**User**: 안녕" in result
        assert "**Assistant**: 반갑습니다" in result

    def test_system_line_is_italic(self):
        assert parse_chat("System: be brief") == "*[System]: be brief*"

    def test_unknown_label_kept(self):
        assert parse_chat("Claude: hi") == "**Claude**: hi"

    def test_bare_url_autolinked(self):
        result = parse_chat("see http://example.com for more")
        assert "[http://example.com](http://example.com)" in result

    def test_trailing_punctuation_outside_link(self):
        result = parse_chat("Visit https://example.com/a.")
        assert result == "Visit [https://example.com/a](https://example.com/a)."

    def test_existing_link_not_relinked(self):
        doc = "[docs](https://example.com)"
        assert parse_chat(doc) == doc

    def test_indented_run_fenced(self):
        result = parse_chat("User: run this\n    pip install x\n    pip list\nthanks")
        assert result == (
            "**User**: run this\n```\n    pip install x\n    pip list\n```\nthanks"
        )

    def test_nested_list_not_fenced(self):
        assert parse_chat("- a\n  - b") == "- a\n  - b"

    def test_labels_inside_code_untouched(self):
        result = parse_chat("User: hi\n```\nAssistant: not a label\n```")
        assert "```\nAssistant: not a label\n```" in result
        assert result.startswith("**User**: hi")

    def test_non_chat_input_is_plain_normalization(self):
        doc = "#  Title\n\n\n\ntext  "
        assert parse_chat(doc) == normalize(doc) == "# Title\n\ntext"
