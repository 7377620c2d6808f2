"""
The following module is used to extract the reply text from a
chat-completion response body.
"""
from typing import Any, Optional


def extract_reply_text(body: Any) -> Optional[str]:
    """
    Return ``choices[0].message.content`` or None when the body does not
    have that shape.
    """
    if not isinstance(body, dict):
        return None
    choices = body.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    if not isinstance(content, str):
        return None
    return content
