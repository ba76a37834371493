"""Tests for the content-type guard on block declarations."""

from __future__ import annotations

import warnings

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from lineage import (
    BlockDefinition,
    BlockTypes,
    ContentType,
    ContentTypeMismatchWarning,
    Template,
    TemplateDefinition,
)

from .builders import calls_block, emit, make_env, records, sequence
from .strategies import content_type


def _mismatches(record: pytest.WarningsRecorder) -> list[warnings.WarningMessage]:
    return [w for w in record if issubclass(w.category, ContentTypeMismatchWarning)]


class TestBlockTypes:
    """BlockTypes.check() on its own."""

    def test_first_declaration_records_type(self) -> None:
        types = BlockTypes()
        assert types.check(ContentType.HTML, "title") is True
        assert types.get("title") is ContentType.HTML
        assert "title" in types

    def test_matching_redeclaration_is_silent(self) -> None:
        types = BlockTypes()
        types.check(ContentType.HTML, "title")
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert types.check(ContentType.HTML, "title") is True

    def test_mismatch_warns_and_keeps_first_type(self) -> None:
        types = BlockTypes()
        types.check(ContentType.HTML, "title")
        with pytest.warns(ContentTypeMismatchWarning, match="incompatible context") as record:
            assert types.check(ContentType.TEXT, "title", "feed.txt") is False
        assert len(_mismatches(record)) == 1
        assert types.get("title") is ContentType.HTML

        warning = _mismatches(record)[0].message
        assert warning.block_name == "title"
        assert warning.recorded is ContentType.HTML
        assert warning.declared is ContentType.TEXT
        assert "feed.txt" in str(warning)

    def test_names_are_independent(self) -> None:
        types = BlockTypes()
        types.check(ContentType.HTML, "title")
        types.check(ContentType.CSS, "styles")
        assert types.get("styles") is ContentType.CSS
        assert len(types) == 2


class TestChainContentTypes:
    """Declarations across an inheritance chain."""

    def test_mismatch_in_chain_warns_once_and_renders(self) -> None:
        seen: list[Template] = []
        env = make_env(
            {
                "base": TemplateDefinition(
                    content_type=ContentType.TEXT,
                    body=sequence(records(seen), calls_block("title")),
                    blocks={"title": emit("base")},
                ),
                "page": TemplateDefinition(
                    parent="base",
                    content_type=ContentType.HTML,
                    blocks={"title": emit("page")},
                ),
            }
        )
        with pytest.warns(ContentTypeMismatchWarning) as record:
            assert env.render("page") == "page"
        assert len(_mismatches(record)) == 1
        assert seen[0].block_types.get("title") is ContentType.HTML

    def test_block_level_content_type_overrides_template(self) -> None:
        seen: list[Template] = []
        env = make_env(
            {
                "base": TemplateDefinition(
                    body=sequence(records(seen), calls_block("script")),
                    blocks={"script": BlockDefinition(emit("1"), ContentType.JS)},
                ),
                "page": TemplateDefinition(
                    parent="base",
                    blocks={"script": BlockDefinition(emit("2"), content_type=ContentType.JS)},
                ),
            }
        )
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert env.render("page") == "2"
        assert seen[0].block_types.get("script") is ContentType.JS

    def test_block_default_follows_template_type(self) -> None:
        seen: list[Template] = []
        env = make_env(
            {
                "page": TemplateDefinition(
                    content_type=ContentType.XML,
                    body=records(seen),
                    blocks={"entry": emit("")},
                )
            }
        )
        env.render("page")
        assert seen[0].block_types.get("entry") is ContentType.XML
        assert seen[0].block_queue.get("entry")[0].content_type is ContentType.XML

    def test_include_has_separate_type_table(self) -> None:
        env = make_env(
            {
                "page": TemplateDefinition(
                    body=lambda t, p: t.include("snippet"), blocks={"title": emit("")}
                ),
                "snippet": TemplateDefinition(
                    content_type=ContentType.TEXT, blocks={"title": emit("")}
                ),
            }
        )
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            env.render("page")

    def test_check_block_content_type_on_template(self) -> None:
        env = make_env({"page": TemplateDefinition()})
        template = env.create_template("page")
        assert template.check_block_content_type(ContentType.HTML, "title") is True
        with pytest.warns(ContentTypeMismatchWarning):
            assert template.check_block_content_type(ContentType.ICAL, "title") is False


@pytest.mark.parametrize(
    ("content_type", "is_xml"),
    [
        (ContentType.HTML, False),
        (ContentType.XHTML, True),
        (ContentType.XML, True),
        (ContentType.TEXT, False),
    ],
)
def test_is_xml(content_type: ContentType, is_xml: bool) -> None:
    assert content_type.is_xml is is_xml


class TestContentTypeProperties:
    """Invariants of the guard over arbitrary declaration sequences."""

    @given(declared=st.lists(content_type, min_size=1, max_size=8))
    @settings(max_examples=100)
    def test_one_warning_per_mismatching_redeclaration(self, declared: list[ContentType]) -> None:
        types = BlockTypes()
        with warnings.catch_warnings(record=True) as record:
            warnings.simplefilter("always")
            results = [types.check(kind, "content") for kind in declared]

        first = declared[0]
        expected = [kind is first for kind in declared]
        assert results == expected
        mismatches = [w for w in record if issubclass(w.category, ContentTypeMismatchWarning)]
        assert len(mismatches) == expected.count(False)
        assert types.get("content") is first
