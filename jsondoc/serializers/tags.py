"""Links documentation tags to the program elements they describe."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from ..models import GenericTag, ParamTag, SeeTag, SinceTag, Tag, ThrowsTag, TypeReference, type_key

# Tag kinds surfaced through dedicated output fields rather than the generic listing.
RESERVED_TAG_KINDS = frozenset({"see", "since", "param", "throws", "exception", "return"})


def param_comment(tags: Iterable[Tag], parameter_name: str) -> str:
    """Return the text of the first ``@param`` tag naming ``parameter_name``."""
    for tag in tags:
        if isinstance(tag, ParamTag) and tag.name == parameter_name:
            return tag.text
    return ""


def throws_comment(tags: Iterable[Tag], exception: TypeReference) -> str:
    """Return the text of the first ``@throws``/``@exception`` tag for ``exception``.

    Matching uses the full type identity, so ``a.IOException`` and
    ``b.IOException`` never match each other.
    """
    wanted = type_key(exception)
    for tag in tags:
        if isinstance(tag, ThrowsTag) and type_key(tag.exception) == wanted:
            return tag.text
    return ""


def since_text(tags: Iterable[Tag]) -> str:
    for tag in tags:
        if isinstance(tag, SinceTag):
            return tag.text
    return ""


def see_references(tags: Iterable[Tag]) -> List[str]:
    return [tag.reference for tag in tags if isinstance(tag, SeeTag)]


def return_comment(tags: Iterable[Tag]) -> str:
    for tag in tags:
        if isinstance(tag, GenericTag) and tag.kind == "return":
            return tag.text
    return ""


def other_tags(tags: Sequence[Tag]) -> List[Tuple[str, str]]:
    """Return ``(kind, text)`` for every tag without a dedicated field, in order."""
    result: List[Tuple[str, str]] = []
    for tag in tags:
        if tag.kind in RESERVED_TAG_KINDS:
            continue
        if isinstance(tag, GenericTag):
            result.append((tag.kind, tag.text))
    return result


__all__ = [
    "RESERVED_TAG_KINDS",
    "other_tags",
    "param_comment",
    "return_comment",
    "see_references",
    "since_text",
    "throws_comment",
]
