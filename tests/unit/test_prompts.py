"""Unit tests for prompt templates."""

import re

import pytest

from referent.models import TransformationKind
from referent.services.prompts import prompt_for, translation_prompt

URL_PATTERN = re.compile(r"https?://|www\.")


class TestPromptFor:
    """Tests for prompt_for."""

    @pytest.mark.parametrize(
        ("kind", "temperature"),
        [
            (TransformationKind.SUMMARY, 0.3),
            (TransformationKind.THESES, 0.3),
            (TransformationKind.SOCIAL_POST, 0.5),
        ],
    )
    def test_temperatures(self, kind: TransformationKind, temperature: float) -> None:
        """Should use the fixed temperature of each kind."""
        assert prompt_for(kind, "text").temperature == temperature

    @pytest.mark.parametrize("kind", list(TransformationKind))
    def test_text_and_language_included(self, kind: TransformationKind) -> None:
        """Should embed the article text and constrain the output language."""
        prompt = prompt_for(kind, "ARTICLE BODY {with braces}", language="German")

        assert "ARTICLE BODY {with braces}" in prompt.user_message
        assert "German" in prompt.system_instruction
        assert "German" in prompt.user_message

    def test_social_post_with_source_url(self) -> None:
        """Should ask for a labelled markdown link to the exact source URL."""
        url = "https://example.com/news/2024/story?id=42"

        prompt = prompt_for(TransformationKind.SOCIAL_POST, "text", source_url=url)

        assert f"]({url})" in prompt.user_message
        assert url in prompt.user_message

    def test_social_post_without_source_url(self) -> None:
        """Should not mention any link when no source URL is given."""
        prompt = prompt_for(TransformationKind.SOCIAL_POST, "text")

        assert not URL_PATTERN.search(prompt.user_message)
        assert not URL_PATTERN.search(prompt.system_instruction)
        assert "hyperlink" not in prompt.user_message

    def test_blank_source_url_treated_as_missing(self) -> None:
        """Should not produce a link for a blank URL."""
        prompt = prompt_for(TransformationKind.SOCIAL_POST, "text", source_url="  ")
        assert "hyperlink" not in prompt.user_message

    def test_summary_ignores_source_url(self) -> None:
        """Should only link back from social posts."""
        url = "https://example.com/article"
        prompt = prompt_for(TransformationKind.SUMMARY, "text", source_url=url)
        assert url not in prompt.user_message

    def test_forbids_preamble(self) -> None:
        """Should instruct the model to return only the artifact."""
        for kind in TransformationKind:
            assert "Do not add" in prompt_for(kind, "text").system_instruction


class TestTranslationPrompt:
    """Tests for translation_prompt."""

    def test_translation(self) -> None:
        """Should target the language and keep temperature low."""
        prompt = translation_prompt("Hello", language="Russian")

        assert prompt.temperature == 0.3
        assert "Russian" in prompt.user_message
        assert prompt.user_message.endswith("Hello")
