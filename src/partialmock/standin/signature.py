from __future__ import annotations

import inspect
from typing import Any, Dict, List, Mapping, Optional, Tuple

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def signature_of(original: Any) -> Optional[inspect.Signature]:
    """Signature of the replaced method including ``self``, or None if unknown."""
    try:
        return inspect.signature(original)
    except (TypeError, ValueError):
        return None


def normalize_call(
    signature: Optional[inspect.Signature],
    args: Tuple[Any, ...],
    kwargs: Mapping[str, Any],
) -> Tuple[Tuple[Any, ...], Dict[str, Any]]:
    """Bring a call into one shape so ``f(a, b)`` and ``f(a, b=b)`` compare equal.

    Parameters that can be passed by position are moved to the positional
    part, up to the first one the call left out; the rest stay keywords.
    Defaults are not filled in. A call that does not bind keeps its shape.
    """
    if signature is None:
        return tuple(args), dict(kwargs)
    params = list(signature.parameters.values())
    # The first parameter has to be a named self for the bind below.
    if not params or params[0].kind not in _POSITIONAL:
        return tuple(args), dict(kwargs)
    try:
        bound = signature.bind(None, *args, **kwargs)
    except TypeError:
        return tuple(args), dict(kwargs)
    positional: List[Any] = []
    keywords: Dict[str, Any] = {}
    contiguous = True
    for param in params[1:]:
        if param.name not in bound.arguments:
            if param.kind in _POSITIONAL:
                contiguous = False
            continue
        value = bound.arguments[param.name]
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            positional.extend(value)
        elif param.kind is inspect.Parameter.VAR_KEYWORD:
            keywords.update(value)
        elif param.kind in _POSITIONAL and contiguous:
            positional.append(value)
        else:
            keywords[param.name] = value
    return tuple(positional), keywords
