"""Guard condition evaluation.

Conditions are deliberately minimal: a comparator applied to one bound
value. Comparators this engine does not know evaluate to True so that
documents using newer comparators keep working (fail open).
"""

import logging
from typing import Callable, Dict, Mapping, Sequence

from screenspec.schemas.document import ConditionSpec

logger = logging.getLogger(__name__)


def _is_not_empty(current: str, _expected: object) -> bool:
    return len(current.strip()) > 0


def _is_empty(current: str, _expected: object) -> bool:
    return len(current.strip()) == 0


COMPARATORS: Dict[str, Callable[[str, object], bool]] = {
    "is_not_empty": _is_not_empty,
    "is_empty": _is_empty,
}


def evaluate_condition(condition: ConditionSpec, values: Mapping[str, str]) -> bool:
    """Evaluate one condition against the current values.

    Args:
        condition: Field key, comparator tag and optional comparison value
        values: Binding key -> raw string value

    Returns:
        Comparator result; True for an unsupported comparator
    """
    current = values.get(condition.field) or ""

    comparator = COMPARATORS.get(condition.comparator)
    if comparator is None:
        logger.warning(f"Unsupported comparator '{condition.comparator}' on '{condition.field}', treating as true")
        return True

    return comparator(current, condition.value)


def evaluate_guards(conditions: Sequence[ConditionSpec], values: Mapping[str, str]) -> bool:
    """AND over all conditions, short-circuiting on the first False. Empty is True."""
    return all(evaluate_condition(condition, values) for condition in conditions)
