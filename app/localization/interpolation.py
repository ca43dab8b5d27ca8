"""Placeholder substitution for translation templates."""

import re
from typing import Any, Mapping, Optional

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")


class Interpolator:
    """Substitutes {{name}} placeholders with caller-supplied values.

    Placeholders without a matching parameter are left verbatim so that
    missing parameters stay visible. Substituted values are never scanned
    again.
    """

    def __init__(self, pattern: re.Pattern = PLACEHOLDER_PATTERN):
        self.pattern = pattern

    def interpolate(self, template: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Perform variable interpolation in a template.

        Args:
            template: Template with {{variable}} placeholders.
            params: Mapping of variable name -> value.

        Returns:
            Template with known variables substituted.
        """
        if not params:
            return template

        def _substitute(match: re.Match) -> str:
            name = match.group(1)
            if name in params:
                return str(params[name])
            return match.group(0)

        return self.pattern.sub(_substitute, template)

