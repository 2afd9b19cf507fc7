from __future__ import annotations

import json
import math
from dataclasses import fields, is_dataclass
from typing import Any, Mapping

JsonLike = Any


def _to_primitive(obj: Any) -> JsonLike:
    if is_dataclass(obj) and not isinstance(obj, type):
        # Shallow: field values are canonicalized one by one, never deep-copied.
        return {f.name: getattr(obj, f.name) for f in fields(obj)}
    if hasattr(obj, "model_dump") and callable(getattr(obj, "model_dump")):
        return obj.model_dump(mode="json")
    return obj


def canonicalize(obj: Any, *, drop_keys: set[str] | None = None) -> JsonLike:
    """Reduce ``obj`` to JSON values, falling back to ``repr`` for anything else.

    Call arguments are arbitrary objects, so the fallback keeps transcripts
    renderable instead of failing on sockets, callables and the like.
    """
    drop_keys = drop_keys or set()
    obj = _to_primitive(obj)

    if isinstance(obj, Mapping):
        out: dict[str, JsonLike] = {}
        for k, v in obj.items():
            ks = k if isinstance(k, str) else f"{type(k).__name__}:{k!r}"
            if ks in drop_keys:
                continue
            if ks in out:
                raise ValueError(f"canonical_key_collision:{ks}")
            out[ks] = canonicalize(v, drop_keys=drop_keys)
        return out

    if isinstance(obj, (list, tuple)):
        return [canonicalize(item, drop_keys=drop_keys) for item in obj]

    if isinstance(obj, (set, frozenset)):
        items = [canonicalize(item, drop_keys=drop_keys) for item in obj]
        return sorted(items, key=lambda item: json.dumps(item, sort_keys=True))

    if isinstance(obj, float) and not math.isfinite(obj):
        return repr(obj)

    if isinstance(obj, (str, int, float, bool)) or obj is None:
        return obj

    return repr(obj)


def canonical_dumps_str(obj: Any, *, drop_keys: set[str] | None = None) -> str:
    return json.dumps(
        canonicalize(obj, drop_keys=drop_keys),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def canonical_dumps_bytes(obj: Any, *, drop_keys: set[str] | None = None) -> bytes:
    return canonical_dumps_str(obj, drop_keys=drop_keys).encode("utf-8")
