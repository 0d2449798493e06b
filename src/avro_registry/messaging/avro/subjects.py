from __future__ import annotations

# TopicNameStrategy: <topic>-value / <topic>-key
VALUE_SUFFIX = "-value"
KEY_SUFFIX = "-key"


def value_subject(topic: str) -> str:
    return f"{topic}{VALUE_SUFFIX}"


def key_subject(topic: str) -> str:
    return f"{topic}{KEY_SUFFIX}"

