"""Prompt construction for post translation.

Builds a single user prompt per target language from:
- the source post (title, excerpt and pre-cleaned HTML content)
- market details and cultural guidelines for the base language
- a content type guess (technical / marketing / educational / news)
- optional localization notes (request notes override the post's notes)
"""

import re
from enum import Enum

from app.services.translation_recovery import SourceContent
from app.utils.languages import get_cultural_guidelines, get_language_details

_CONTENT_NOISE_PATTERNS = (
    re.compile(r'class="[^"]*"'),
    re.compile(r'style="[^"]*"'),
    re.compile(r'lang="[^"]*"'),
    re.compile(r"<span[^>]*>"),
    re.compile(r"</span>"),
    # Microsoft Office formatting
    re.compile(r"mso-[^;]*;?"),
)
_WHITESPACE_PATTERN = re.compile(r"\s+")


class ContentType(str, Enum):
    """Rough genre of the source post."""

    TECHNICAL = "technical"
    MARKETING = "marketing"
    EDUCATIONAL = "educational"
    NEWS = "news"


CONTENT_TYPE_INDICATORS: dict[ContentType, tuple[str, ...]] = {
    ContentType.TECHNICAL: (
        "api",
        "implementation",
        "configuration",
        "technical",
        "system",
        "integration",
    ),
    ContentType.MARKETING: ("benefits", "solution", "choose", "advantage", "transform"),
    ContentType.EDUCATIONAL: ("guide", "how to", "steps", "tutorial", "learn", "understand"),
    ContentType.NEWS: ("announced", "update", "new", "recently", "latest"),
}

CONTENT_TYPE_INSTRUCTIONS: dict[ContentType, str] = {
    ContentType.TECHNICAL: "Focus on precise technical terminology and step-by-step clarity",
    ContentType.MARKETING: "Emphasize benefits and value propositions with cultural appeal",
    ContentType.EDUCATIONAL: "Maintain instructional clarity with local learning preferences",
    ContentType.NEWS: "Adapt news style to local media conventions and reader expectations",
}


def analyze_content_type(content: str) -> ContentType:
    """Guess the content type by counting indicator words present."""
    lowered = (content or "").lower()
    scores = {
        content_type: sum(1 for word in indicators if word in lowered)
        for content_type, indicators in CONTENT_TYPE_INDICATORS.items()
    }
    technical = scores[ContentType.TECHNICAL]
    marketing = scores[ContentType.MARKETING]
    educational = scores[ContentType.EDUCATIONAL]
    news = scores[ContentType.NEWS]

    if technical > marketing and technical > educational:
        return ContentType.TECHNICAL
    if educational > marketing and educational > news:
        return ContentType.EDUCATIONAL
    if news > marketing:
        return ContentType.NEWS
    return ContentType.MARKETING


def clean_source_html(content: str) -> str:
    """Strip attributes and tags that confuse the model, then normalise whitespace."""
    cleaned = content or ""
    for pattern in _CONTENT_NOISE_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    return _WHITESPACE_PATTERN.sub(" ", cleaned).strip()


def resolve_localization_notes(
    request_notes: str | None, source: SourceContent
) -> str | None:
    """Request notes win over the post's stored notes."""
    return request_notes or source.localization_notes or None


def build_translation_prompt(
    source: SourceContent,
    language_code: str,
    localization_notes: str | None = None,
) -> str:
    """Build the user prompt for translating one post into one language."""
    details = get_language_details(language_code)
    guidelines = get_cultural_guidelines(language_code)
    content_type = analyze_content_type(source.content)

    notes_block = f"\nNOTES: {localization_notes}\n" if localization_notes else ""

    return f"""You are an expert translator for a CMS specializing in EU compliance content.
Translate the following blog post to native {details.name} for {details.country}.
Use {guidelines.communication_style} style.
Tone: {guidelines.tonality}. Avoid: {guidelines.avoid_terms}.
Include {details.regulator} and {details.banks} as examples.
Content type: {content_type.value}. {CONTENT_TYPE_INSTRUCTIONS[content_type]}.
{notes_block}
<source_text>
Title: {source.title}
Excerpt: {source.excerpt}
Content: {clean_source_html(source.content)}
</source_text>

Use <thinking> tags to plan your translation strategy and cultural adaptations.

CRITICAL: After your thinking process, return the translation as a valid JSON object wrapped in a markdown code block.
Use simple HTML tags only (h1, h2, h3, p, ul, ol, li, strong, em). Avoid complex formatting.

Example output:
<thinking>
...
</thinking>
```json
{{
  "title": "{details.name} title",
  "content": "Clean {details.name} HTML content with simple tags only",
  "excerpt": "{details.name} summary",
  "meta_title": "SEO title <60 chars",
  "meta_description": "SEO desc <160 chars",
  "meta_keywords": "{details.country} keywords",
  "cultural_adaptations": "Changes made"
}}
```"""
