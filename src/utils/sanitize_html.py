from typing import Optional

from bleach.css_sanitizer import CSSSanitizer
import bleach

from src.core.config import settings

css_sanitizer = CSSSanitizer(allowed_css_properties=settings.ALLOWED_CSS_PROPERTIES)


def sanitize_html_content(html: str) -> str:
    """Sanitize grader free text with whitelisted tags and CSS properties"""
    return bleach.clean(
        html,
        tags=settings.ALLOWED_TAGS,
        attributes=settings.ALLOWED_ATTRIBUTES,
        css_sanitizer=css_sanitizer,
        strip=True,
        strip_comments=True
    )


def sanitize_optional_text(text: Optional[str]) -> Optional[str]:
    """Sanitize a nullable text field, leaving None and empty strings as-is."""
    if text:
        return sanitize_html_content(text)
    return text
