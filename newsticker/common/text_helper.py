"""
Text helpers for rendered headline markup.
"""


def escape_html(text: str) -> str:
    """Escape HTML entities in text so headline data is never interpreted as markup."""
    if text is None:
        return ''
    if not isinstance(text, str):
        text = str(text)
    text = text.replace('&', '&amp;')
    text = text.replace('<', '&lt;')
    text = text.replace('>', '&gt;')
    text = text.replace('"', '&quot;')
    text = text.replace("'", '&#x27;')
    return text
