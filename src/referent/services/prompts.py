"""Prompt templates for each generated artifact."""

from dataclasses import dataclass

from referent.models import Prompt, TransformationKind

TARGET_LANGUAGE = "Russian"


@dataclass(frozen=True)
class PromptSpec:
    """Fixed instructions and sampling temperature for one artifact kind."""

    system_instruction: str
    user_message_template: str
    temperature: float

    def render(self, text: str, language: str, **extra: str) -> Prompt:
        return Prompt(
            system_instruction=self.system_instruction.format(language=language),
            user_message=self.user_message_template.format(text=text, language=language, **extra),
            temperature=self.temperature,
        )


SUMMARY_PROMPT = PromptSpec(
    system_instruction=(
        "You are an expert article summarizer. Provide a clear, concise summary "
        "in {language} that captures:\n"
        "- The main topic and purpose of the article\n"
        "- Key arguments and findings\n"
        "- Important conclusions or implications\n"
        "Keep it brief (2-3 paragraphs, approximately 150-200 words). Write in "
        "natural, fluent {language}. Do not add any explanations, comments, or "
        "meta-text - only provide the summary itself."
    ),
    user_message_template=(
        "Summarize the following article in {language}. Focus on the essential "
        "information and main ideas:\n\n{text}"
    ),
    temperature=0.3,
)

THESES_PROMPT = PromptSpec(
    system_instruction=(
        "You are an expert at analyzing articles and extracting key points. Create "
        "a structured list of the main theses of the article in {language}. Each "
        "thesis should:\n"
        "- Be a complete, meaningful statement\n"
        "- Represent a significant idea or finding\n"
        "- Be concise (one sentence per thesis)\n"
        'Format as a bulleted list using "-". Focus on the most important points. '
        "Write in natural {language}. Do not add explanations or comments - only "
        "provide the list."
    ),
    user_message_template=(
        "Extract the main theses and key points from the following article. "
        "Present them as a bulleted list in {language}:\n\n{text}"
    ),
    temperature=0.3,
)

SOCIAL_POST_PROMPT = PromptSpec(
    system_instruction=(
        "You are a social media content creator. Create an engaging Telegram post "
        "in {language} based on the article. Include:\n"
        "- A catchy headline with an emoji\n"
        "- A brief summary (2-3 sentences)\n"
        "- Key points in bullet format\n"
        "- A call to action or conclusion\n"
        "Format it for Telegram (emojis, line breaks, hashtags if appropriate). "
        "Do not add any explanations or comments, only provide the post."
    ),
    user_message_template=(
        "Create a Telegram post in {language} based on the following article:\n\n{text}"
    ),
    temperature=0.5,
)

# Only used when a source URL is known; no link is ever invented.
SOCIAL_POST_WITH_LINK_PROMPT = PromptSpec(
    system_instruction=SOCIAL_POST_PROMPT.system_instruction,
    user_message_template=(
        "Create a Telegram post in {language} based on the following article. At the "
        "end of the post, add a hyperlink to the source article in Telegram markdown "
        "format, using a label rather than the bare address: [Source]({source_url}) "
        "or [Read more]({source_url}).\n\nArticle:\n{text}"
    ),
    temperature=SOCIAL_POST_PROMPT.temperature,
)

TRANSLATION_PROMPT = PromptSpec(
    system_instruction=(
        "You are a professional translator. Translate the text to {language}. "
        "Preserve the formatting, structure, and meaning of the original text. Do "
        "not add any explanations or comments, only provide the translation."
    ),
    user_message_template="Translate the following text to {language}:\n\n{text}",
    temperature=0.3,
)

PROMPTS: dict[TransformationKind, PromptSpec] = {
    TransformationKind.SUMMARY: SUMMARY_PROMPT,
    TransformationKind.THESES: THESES_PROMPT,
    TransformationKind.SOCIAL_POST: SOCIAL_POST_PROMPT,
}


def prompt_for(
    kind: TransformationKind,
    text: str,
    source_url: str | None = None,
    language: str = TARGET_LANGUAGE,
) -> Prompt:
    """Render the prompt for an artifact kind.

    Args:
        kind: The artifact to generate.
        text: Article text, already reduced to a manageable length.
        source_url: Link back to the article; only social posts use it.
        language: Output language of the artifact.
    """
    spec = PROMPTS[kind]
    source_url = source_url.strip() if source_url else None
    if kind == TransformationKind.SOCIAL_POST and source_url:
        return SOCIAL_POST_WITH_LINK_PROMPT.render(text, language, source_url=source_url)
    return spec.render(text, language)


def translation_prompt(text: str, language: str = TARGET_LANGUAGE) -> Prompt:
    """Render the translation prompt."""
    return TRANSLATION_PROMPT.render(text, language)
