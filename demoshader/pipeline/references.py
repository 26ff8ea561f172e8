"""
Whole-token reference analysis over shader code fragments.

Code is never parsed: a name is referenced wherever it appears as a complete
identifier token, whatever the lexical scope. This is why variable names must
be unique across the whole compilation unit.
"""

import re
from functools import lru_cache

from demoshader.pipeline.models import ShaderDefinition

IDENTIFIER_CHARS = "A-Za-z0-9_"


@lru_cache(maxsize=1024)
def token_pattern(name: str) -> re.Pattern[str]:
    """Compile the pattern matching `name` as a whole token."""
    return re.compile(
        rf"(?<![{IDENTIFIER_CHARS}]){re.escape(name)}(?![{IDENTIFIER_CHARS}])"
    )


def count_occurrences(text: str | None, name: str) -> int:
    """Count non-overlapping whole-token occurrences of a name.

    Args:
        text: Code fragment, may be None
        name: Identifier to look for

    Returns:
        Number of occurrences, 0 for missing or empty text
    """
    if not text:
        return 0
    return len(token_pattern(name).findall(text))


def replace_occurrences(text: str | None, name: str, replacement: str) -> str | None:
    """Replace every whole-token occurrence of a name.

    The replacement is inserted verbatim; backslashes and group references
    in it have no special meaning.
    """
    if not text:
        return text
    return token_pattern(name).sub(lambda _: replacement, text)


def is_referenced(definition: ShaderDefinition, name: str) -> bool:
    """Check whether a name is used by the common code or any pass.

    The prolog is not searched.
    """
    if count_occurrences(definition.common_code, name) > 0:
        return True
    return any(
        count_occurrences(render_pass.vertex_code, name) > 0
        or count_occurrences(render_pass.fragment_code, name) > 0
        for render_pass in definition.passes
    )


def replace_in_definition(
    definition: ShaderDefinition,
    name: str,
    replacement: str,
    include_prolog: bool = False,
) -> None:
    """Rewrite a name in the common code and every pass, in place."""
    if include_prolog and definition.prolog_code:
        definition.prolog_code = replace_occurrences(
            definition.prolog_code, name, replacement
        )

    definition.common_code = (
        replace_occurrences(definition.common_code, name, replacement) or ""
    )

    for render_pass in definition.passes:
        render_pass.vertex_code = replace_occurrences(
            render_pass.vertex_code, name, replacement
        )
        render_pass.fragment_code = replace_occurrences(
            render_pass.fragment_code, name, replacement
        )
