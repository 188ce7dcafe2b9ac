"""String template interpolation for text components.

Only direct key lookup is supported: ``{{ user.name }}`` is replaced by the
bound value, or by the empty string when the key is not bound. There is no
nesting, no escaping of literal braces and no expression evaluation.
"""

import re
from typing import Mapping

TOKEN_PATTERN = re.compile(r"\{\{\s*([^}]+)\s*\}\}")


def render_template(template: str, values: Mapping[str, str]) -> str:
    """Substitute every ``{{ key }}`` token in ``template`` from ``values``."""

    def _substitute(match: re.Match) -> str:
        value = values.get(match.group(1).strip())
        return "" if value is None else str(value)

    return TOKEN_PATTERN.sub(_substitute, template)
