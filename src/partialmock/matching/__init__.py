from .matchers import (
    ANY,
    ANY_ARGS,
    Args,
    ArgumentPattern,
    Contains,
    IsA,
    Matcher,
    Predicate,
    Regex,
    coerce_pattern,
    value_matches,
)

__all__ = [
    "ANY",
    "ANY_ARGS",
    "Args",
    "ArgumentPattern",
    "Contains",
    "IsA",
    "Matcher",
    "Predicate",
    "Regex",
    "coerce_pattern",
    "value_matches",
]
