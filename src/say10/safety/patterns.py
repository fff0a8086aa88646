"""Regular-expression screening for whitelist and search patterns.

Patterns are bounded in length and screened for a few well-known
catastrophic-backtracking shapes before they are compiled. The screening
works on the pattern text and is a heuristic only: it catches the common
nested-quantifier forms but cannot prove that an accepted pattern runs in
linear time.
"""

import re

from say10.exceptions import PatternError

MAX_PATTERN_LENGTH = 200

# A quantifier written with braces: {2,}, {1,5}, {3}
_BRACE_QUANTIFIER = re.compile(r"\{\d*,?\d*\}")

# Two adjacent unbounded atoms that can match the same characters:
# \w+\w+, .*.*, \S+\w*
_OVERLAPPING_CHAIN = re.compile(r"(?:\\[wWsSdD]|\.)[+*](?:\\[wWsSdD]|\.)[+*]")

_HEURISTIC_NOTE = "best-effort heuristic; accepted patterns are not guaranteed ReDoS-free"


def _quantifier_at(pattern: str, index: int) -> bool:
    if index >= len(pattern):
        return False
    if pattern[index] in "+*":
        return True
    return pattern[index] == "{" and _BRACE_QUANTIFIER.match(pattern, index) is not None


def _has_nested_quantifier(pattern: str) -> bool:
    """Check for a quantified group with a quantifier anywhere inside it.

    Catches (a+)+, (?:x+){2,}, ((a+))+, ((a)+)+ and (\\w+\\s?)+$. Escapes
    and character classes are skipped; each open group tracks whether a
    quantifier occurred at any depth below it.
    """
    groups: list[bool] = []
    in_class = False
    i = 0

    while i < len(pattern):
        char = pattern[i]

        if char == "\\":
            i += 2
            continue

        if in_class:
            if char == "]":
                in_class = False
        elif char == "[":
            in_class = True
            # A leading ] (after an optional ^) is a literal member
            if pattern.startswith("^", i + 1):
                i += 1
            if pattern.startswith("]", i + 1):
                i += 1
        elif char == "(":
            groups.append(False)
        elif char == ")":
            if groups:
                quantified_inside = groups.pop()
                if quantified_inside and _quantifier_at(pattern, i + 1):
                    return True
                if quantified_inside and groups:
                    groups[-1] = True
        elif groups and _quantifier_at(pattern, i):
            groups[-1] = True

        i += 1

    return False


def validate_pattern(pattern: str) -> None:
    """Validate a regular expression before it is compiled.

    Args:
        pattern: Regex source text

    Raises:
        PatternError: If the pattern is too long, looks structurally
            dangerous, or does not compile
    """
    if len(pattern) > MAX_PATTERN_LENGTH:
        raise PatternError(
            pattern,
            f"pattern too long ({len(pattern)} > {MAX_PATTERN_LENGTH} characters)",
        )

    if _has_nested_quantifier(pattern):
        raise PatternError(
            pattern,
            f"nested quantifier group detected ({_HEURISTIC_NOTE})",
        )

    if _OVERLAPPING_CHAIN.search(pattern):
        raise PatternError(
            pattern,
            f"repeated quantifier chain detected ({_HEURISTIC_NOTE})",
        )

    try:
        re.compile(pattern)
    except re.error as e:
        raise PatternError(pattern, f"invalid regular expression: {e}") from e


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Validate and compile a pattern.

    Args:
        pattern: Regex source text

    Returns:
        re.Pattern: The compiled pattern

    Raises:
        PatternError: If validation fails
    """
    validate_pattern(pattern)
    return re.compile(pattern)


def sanitize_search_pattern(pattern: str) -> str:
    """Check an ad-hoc search pattern supplied by a tool call.

    Unlike whitelist loading, a rejection here is fatal for the whole
    operation.

    Args:
        pattern: Search pattern from the caller

    Returns:
        str: The unchanged pattern

    Raises:
        PatternError: If the pattern is rejected
    """
    validate_pattern(pattern)
    return pattern
