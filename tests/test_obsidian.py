"""Tests for the Obsidian enricher and its transforms."""

import logging
from datetime import datetime, timezone

import pytest

from mdbridge.obsidian import EnrichOptions, enrich, generate_obsidian_filename
from mdbridge.obsidian.models import CandidateSource, EnrichContext
from mdbridge.obsidian.transform import (
    FrontmatterInjector,
    HeadingLinker,
    TagAppender,
    TransformPipeline,
    append_tags,
    build_frontmatter,
    collect_link_candidates,
    derive_tags,
    extract_headings,
    link_headings,
    link_keywords,
    render_frontmatter,
    split_frontmatter,
)
from mdbridge.obsidian.transform.frontmatter import timestamp


# ---------------------------------------------------------------------------
# Headings
# ---------------------------------------------------------------------------


class TestExtractHeadings:
    def test_levels_and_order(self, sample_markdown):
        headings = extract_headings(sample_markdown)
        assert [(h.level, h.text) for h in headings] == [(1, "Project Setup"), (2, "Install")]
        assert [h.position for h in headings] == [0, 1]
        assert headings[1].line == 4

    def test_headings_in_code_ignored(self):
        headings = extract_headings("```\n# not a heading\n```\n# Real")
        assert [h.text for h in headings] == ["Real"]

    def test_inline_code_in_heading_restored(self):
        headings = extract_headings("## Using `uv`")
        assert headings[0].text == "Using `uv`"

    def test_blank_heading_skipped(self):
        headings = extract_headings("# \u00a0\n\n##   \n\n## Real")
        assert [(h.text, h.position) for h in headings] == [("Real", 0)]


class TestLinkHeadings:
    def test_mentions_wrapped(self, sample_markdown):
        result = link_headings(sample_markdown)
        assert "The [[project setup]] is simple." in result
        assert "Run [[install]] first." in result

    def test_own_line_not_wrapped(self, sample_markdown):
        result = link_headings(sample_markdown)
        assert result.startswith("# Project Setup\n")
        assert "## Install\n" in result

    def test_code_never_wrapped(self):
        doc = "# Setup\n\n```\nSetup here\n```\n\nSetup again"
        result = link_headings(doc)
        assert "```\nSetup here\n```" in result
        assert "[[Setup]] again" in result

    def test_inline_code_never_wrapped(self):
        result = link_headings("# Setup\n\nrun `Setup` now")
        assert "run `Setup` now" in result

    def test_existing_wikilink_kept(self):
        doc = "# Setup\n\nsee [[Setup]]"
        assert link_headings(doc) == doc

    def test_blank_heading_never_linked(self):
        assert link_headings("#   \n\nhello world") == "#   \n\nhello world"

    def test_overlap_shorter_heading_first(self):
        result = link_headings("# Foo\n\n## Foo Bar\n\nFoo Bar")
        assert result.endswith("\n\n[[Foo]] Bar")

    def test_overlap_longer_heading_first(self):
        result = link_headings("# Foo Bar\n\n## Foo\n\nFoo Bar")
        assert result.endswith("\n\n[[Foo Bar]]")


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


class TestDeriveTags:
    def test_cap_at_ten_in_scan_order(self):
        doc = (
            "# alpha bravo charlie delta\n"
            "## echo foxtrot golf hotel\n"
            "### india juliet kilo lima\n"
        )
        assert derive_tags(doc) == [
            "alpha", "bravo", "charlie", "delta", "echo",
            "foxtrot", "golf", "hotel", "india", "juliet",
        ]

    def test_deep_headings_ignored(self):
        assert derive_tags("#### mike november") == []

    def test_explicit_tags_first(self):
        assert derive_tags("# Heading Words\n\nsome #existing tag") == ["existing", "Heading", "Words"]

    def test_keyword_filters(self):
        assert derive_tags("# 2024 a Roadmap extraordinarily") == ["Roadmap"]

    def test_distinct(self):
        assert derive_tags("# Python Python\n## Python") == ["Python"]

    def test_hangul_tag_marker(self):
        assert derive_tags("메모 #회의록") == ["회의록"]

    def test_url_anchor_not_a_tag(self):
        assert derive_tags("see http://x.com/page#section") == []


class TestAppendTags:
    def test_appended_after_rule(self):
        assert append_tags("body", ["a", "b"]) == "body\n\n---\n\n#a #b\n"

    def test_skipped_when_body_has_marker(self):
        assert append_tags("text #mine", ["a"]) == "text #mine"

    def test_skipped_when_no_tags(self):
        assert append_tags("body", []) == "body"


# ---------------------------------------------------------------------------
# Keyword links
# ---------------------------------------------------------------------------


class TestKeywordLinks:
    DOC = "# Python\n\nWe use **pandas** for data.\n\nPython and pandas work well."

    def test_candidates_headings_then_bold(self):
        candidates = collect_link_candidates(self.DOC)
        assert [(c.term, c.source) for c in candidates] == [
            ("Python", CandidateSource.HEADING),
            ("pandas", CandidateSource.BOLD),
        ]

    def test_candidate_length_bounds(self):
        doc = "**x** and **" + "y" * 31 + "**"
        assert collect_link_candidates(doc) == []

    def test_candidate_cap(self):
        doc = " ".join(f"**term{i:02d}**" for i in range(25))
        assert len(collect_link_candidates(doc)) == 20

    def test_links_whole_words(self):
        result = link_keywords(self.DOC, collect_link_candidates(self.DOC))
        assert "[[Python]] and [[pandas]] work well." in result

    def test_bold_and_heading_untouched(self):
        result = link_keywords(self.DOC, collect_link_candidates(self.DOC))
        assert result.startswith("# Python\n")
        assert "We use **pandas** for data." in result

    def test_partial_word_not_linked(self):
        doc = "# Py\n\nPython is not Py."
        result = link_keywords(doc, collect_link_candidates(doc))
        assert result.endswith("Python is not [[Py]].")

    def test_existing_link_untouched(self):
        doc = "# Python\n\nsee [Python docs](http://python.org)"
        result = link_keywords(doc, collect_link_candidates(doc))
        assert "[Python docs](http://python.org)" in result


# ---------------------------------------------------------------------------
# Frontmatter
# ---------------------------------------------------------------------------


class TestFrontmatter:
    def test_timestamp_format(self, fixed_now):
        assert timestamp(fixed_now) == "2024-01-02T03:04:05.000Z"

    def test_naive_timestamp_treated_as_utc(self):
        assert timestamp(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05.000Z"

    def test_build_infers_title_and_tags(self, fixed_now, sample_markdown):
        headings = extract_headings(sample_markdown)
        fm = build_frontmatter(headings, ["Project"], None, fixed_now)
        assert list(fm) == ["created", "tags", "title"]
        assert fm["title"] == "Project Setup"

    def test_caller_keys_win(self, fixed_now, sample_markdown):
        headings = extract_headings(sample_markdown)
        fm = build_frontmatter(headings, ["Project"], {"title": "Mine", "tags": ["x"]}, fixed_now)
        assert fm["title"] == "Mine"
        assert fm["tags"] == ["x"]

    def test_no_title_without_headings(self, fixed_now):
        fm = build_frontmatter([], [], None, fixed_now)
        assert fm == {"created": "2024-01-02T03:04:05.000Z"}

    def test_render_lists_indented(self):
        block = render_frontmatter({"title": "T", "tags": ["a", "b"]})
        assert block == "---\ntitle: T\ntags:\n  - a\n  - b\n---"

    def test_split_existing_block(self):
        meta, body = split_frontmatter("---\nauthor: me\n---\n# T\n")
        assert meta == {"author": "me"}
        assert body == "# T\n"

    def test_leading_rule_is_not_frontmatter(self):
        doc = "---\nJust text\n---\nmore"
        meta, body = split_frontmatter(doc)
        assert meta == {}
        assert body == doc


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


class TestEnrichOptions:
    def test_defaults(self):
        opts = EnrichOptions()
        assert opts.convert_headings_to_links is True
        assert opts.auto_generate_tags is True
        assert opts.auto_link_keywords is False
        assert opts.metadata == {}

    def test_camel_case_keys(self):
        opts = EnrichOptions.coerce({"autoLinkKeywords": True})
        assert opts.auto_link_keywords is True

    def test_invalid_value_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING):
            opts = EnrichOptions.coerce({"autoGenerateTags": "maybe"})
        assert opts.auto_generate_tags is True
        assert "autoGenerateTags" in caplog.text or "auto_generate_tags" in caplog.text

    def test_unknown_key_ignored(self, caplog):
        with caplog.at_level(logging.WARNING):
            opts = EnrichOptions.coerce({"colour": "blue"})
        assert opts == EnrichOptions()
        assert "colour" in caplog.text

    def test_non_mapping_uses_defaults(self):
        assert EnrichOptions.coerce("nonsense") == EnrichOptions()

    def test_metadata_scalars_coerced(self):
        opts = EnrichOptions(metadata={"count": 3, "draft": False, "bad": {"x": 1}})
        assert opts.metadata == {"count": "3", "draft": "false"}


# ---------------------------------------------------------------------------
# enrich()
# ---------------------------------------------------------------------------


class TestEnrich:
    def test_full_note(self, sample_markdown, fixed_now):
        result = enrich(sample_markdown, now=fixed_now)
        assert result.startswith("---\ncreated: '2024-01-02T03:04:05.000Z'\n")
        assert "tags:\n  - Project\n  - Setup\n  - Install\n" in result
        assert "title: Project Setup\n---\n\n# Project Setup\n" in result
        assert "The [[project setup]] is simple." in result
        assert result.endswith("\n\n---\n\n#Project #Setup #Install\n")

    def test_deterministic_for_fixed_time(self, sample_markdown, fixed_now):
        assert enrich(sample_markdown, now=fixed_now) == enrich(sample_markdown, now=fixed_now)

    def test_all_features_off(self, sample_markdown, fixed_now):
        opts = {"convertHeadingsToLinks": False, "autoGenerateTags": False}
        result = enrich(sample_markdown, opts, now=fixed_now)
        assert "[[" not in result
        assert "#Project" not in result
        assert result.endswith(sample_markdown)

    def test_tags_in_frontmatter_even_when_not_appended(self, sample_markdown, fixed_now):
        result = enrich(sample_markdown, {"autoGenerateTags": False}, now=fixed_now)
        assert "tags:\n  - Project" in result

    def test_caller_metadata_overrides(self, sample_markdown, fixed_now):
        opts = EnrichOptions(metadata={"title": "Custom", "tags": ["x"], "source": "chatgpt"})
        result = enrich(sample_markdown, opts, now=fixed_now)
        assert "title: Custom\n" in result
        assert "title: Project Setup" not in result
        assert "tags:\n  - x\n" in result
        assert "source: chatgpt\n" in result

    def test_existing_frontmatter_merged(self, fixed_now):
        result = enrich("---\nauthor: me\n---\n# T\n\nbody", now=fixed_now)
        assert result.startswith("---\ncreated: ")
        assert "author: me\n" in result
        assert result.count("author: me") == 1

    def test_keywords_opt_in(self, fixed_now):
        doc = "# Python\n\nWe use **pandas**.\n\nPython and pandas."
        opts = {"autoLinkKeywords": True, "convertHeadingsToLinks": False, "autoGenerateTags": False}
        result = enrich(doc, opts, now=fixed_now)
        assert "[[Python]] and [[pandas]]." in result

    def test_heading_text_in_code_not_linked(self, fixed_now):
        doc = "# Setup\n\n```\nSetup\n```"
        result = enrich(doc, {"autoGenerateTags": False}, now=fixed_now)
        assert "```\nSetup\n```" in result
        assert "[[Setup]]" not in result

    def test_blank_heading_passes_through(self, fixed_now):
        result = enrich("# \u00a0\n\nhello world", now=fixed_now)
        assert "[[]]" not in result
        assert "title:" not in result
        assert "\nhello world" in result

    def test_pipeline_order(self, sample_markdown, fixed_now):
        opts = EnrichOptions()
        headings = extract_headings(sample_markdown)
        context = EnrichContext(
            options=opts,
            headings=headings,
            tags=derive_tags(sample_markdown, headings),
            frontmatter=build_frontmatter(headings, [], None, fixed_now),
        )
        pipeline = TransformPipeline([HeadingLinker(), TagAppender(), FrontmatterInjector()])
        assert pipeline.apply(sample_markdown, context) == enrich(
            sample_markdown, {"metadata": {}}, now=fixed_now
        ).replace("tags:\n  - Project\n  - Setup\n  - Install\n", "")


class TestGenerateObsidianFilename:
    def test_reserved_characters_removed(self):
        assert generate_obsidian_filename('My: Note/Title?  v2') == "My_NoteTitle_v2"

    def test_trimmed_underscores(self):
        assert generate_obsidian_filename("  spaced  ") == "spaced"

    def test_length_capped(self):
        assert len(generate_obsidian_filename("a" * 300)) == 100

    @pytest.mark.parametrize("name", ['a<b>c', 'a"b', "a|b*c"])
    def test_no_reserved_left(self, name):
        assert not set('<>:"/\\|?*') & set(generate_obsidian_filename(name))
