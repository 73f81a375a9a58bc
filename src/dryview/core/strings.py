"""
Inflection helpers used for captions and route names.

Covers the small set of transformations the helpers need: CamelCase to
snake_case, pluralization for collection paths, and humanized captions.
"""

from __future__ import annotations

import re

# Irregular plurals that don't follow standard rules
_IRREGULAR_PLURALS = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
    "datum": "data",
    "medium": "media",
    "criterion": "criteria",
    "index": "indices",
    "matrix": "matrices",
    "status": "statuses",
    "address": "addresses",
}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def underscore(name: str) -> str:
    """
    Convert a CamelCase name to snake_case.

    Examples:
        >>> underscore("Task")
        'task'
        >>> underscore("LineItem")
        'line_item'
        >>> underscore("HTTPRequest")
        'http_request'
    """
    return _CAMEL_BOUNDARY.sub("_", name).replace("-", "_").lower()


def pluralize(word: str) -> str:
    """
    Convert a singular English word to its plural form.

    Only the last ``_``-separated segment is inflected, so
    ``line_item`` becomes ``line_items``.

    Examples:
        >>> pluralize("task")
        'tasks'
        >>> pluralize("city")
        'cities'
        >>> pluralize("person")
        'people'
    """
    if not word:
        return word

    head, sep, last = word.rpartition("_")
    lower_word = last.lower()

    if lower_word in _IRREGULAR_PLURALS:
        plural = _IRREGULAR_PLURALS[lower_word]
        if last[0].isupper():
            plural = plural.capitalize()
        return head + sep + plural

    if lower_word.endswith(("s", "x", "z", "ch", "sh")):
        # bus -> buses, box -> boxes, church -> churches
        return word + "es"
    if lower_word.endswith("y"):
        if len(last) > 1 and lower_word[-2] in "aeiou":
            # key -> keys, day -> days
            return word + "s"
        # city -> cities
        return word[:-1] + "ies"
    if lower_word.endswith("fe"):
        # knife -> knives
        return word[:-2] + "ves"
    if lower_word.endswith(("elf", "alf", "olf", "eaf", "oaf", "arf")):
        # leaf -> leaves (roof -> roofs falls through)
        return word[:-1] + "ves"
    if lower_word.endswith(("hero", "potato", "tomato", "echo", "veto")):
        return word + "es"
    return word + "s"


def humanize(text: str) -> str:
    """
    Turn an attribute identifier into a sentence-case caption.

    Drops a trailing ``_id``, replaces underscores with spaces and
    capitalizes the first letter.

    Examples:
        >>> humanize("first_name")
        'First name'
        >>> humanize("city_id")
        'City'
    """
    text = str(text)
    if text.endswith("_id") and len(text) > 3:
        text = text[:-3]
    text = text.replace("_", " ").strip()
    if not text:
        return text
    return text[0].upper() + text[1:].lower()


def titleize(text: str) -> str:
    """
    Capitalize every word of a humanized string.

    Examples:
        >>> titleize(humanize("first_name"))
        'First Name'
    """
    return " ".join(word[:1].upper() + word[1:] for word in humanize(text).split(" "))
