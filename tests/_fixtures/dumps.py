"""Front-end model dumps in the JSON shape accepted by jsondoc.loader."""

from __future__ import annotations

import copy
from typing import Any, Dict

_SAMPLE: Dict[str, Any] = {
    "references": {
        "java.lang.Comparable": {"kind": "interface", "typeParameters": [{"name": "T"}]},
        "java.io.IOException": {"kind": "exception"},
    },
    "classes": [
        {
            "qualifiedName": "demo.Box",
            "kind": "class",
            "comment": "Holds one value.",
            "modifiers": "public final",
            "tags": [
                {"kind": "since", "text": "1.0"},
                {"kind": "author", "text": "Ada"},
            ],
            "typeParameters": [
                {
                    "name": "T",
                    "bounds": [
                        {
                            "kind": "parameterized",
                            "base": "java.lang.Comparable",
                            "arguments": ["T"],
                        }
                    ],
                }
            ],
            "superclass": "java.lang.Object",
            "constructors": [
                {"name": "Box", "modifiers": ["public"], "parameters": [{"name": "value", "type": "T"}]}
            ],
            "fields": [{"name": "value", "type": "T", "modifiers": ["private"]}],
            "methods": [
                {
                    "name": "apply",
                    "modifiers": ["public"],
                    "parameters": [
                        {"name": "a", "type": "int"},
                        {"name": "b", "type": "java.lang.String"},
                    ],
                    "throws": ["java.io.IOException"],
                    "tags": [
                        {"kind": "param", "name": "a", "text": "first"},
                        {"kind": "throws", "type": "java.io.IOException", "text": "on failure"},
                    ],
                },
                {
                    "name": "toString",
                    "returnType": "java.lang.String",
                    "overrides": {"class": "java.lang.Object", "method": "toString"},
                    "annotations": ["java.lang.Override"],
                },
            ],
        },
        {
            "qualifiedName": "demo.Color",
            "kind": "enum",
            "superclass": {
                "kind": "parameterized",
                "base": "java.lang.Enum",
                "arguments": ["demo.Color"],
            },
            "enumConstants": ["RED", "GREEN"],
        },
        {
            "qualifiedName": "demo.Marker",
            "kind": "annotation",
            "elements": [
                {"name": "value", "returnType": "java.lang.String", "defaultValue": "x"},
            ],
        },
    ],
}


def sample_dump() -> Dict[str, Any]:
    """Return a fresh copy of a three-class model dump."""
    return copy.deepcopy(_SAMPLE)


__all__ = ["sample_dump"]
