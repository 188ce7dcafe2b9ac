"""Navigation resolution: event + source screen -> destination screen."""

import logging
from typing import Optional, Sequence

from screenspec.schemas.document import TransitionSpec

logger = logging.getLogger(__name__)


class NavigationResolver:
    """Deterministic transition table lookup.

    The first transition in document order whose event and source screen
    match wins. The resolver does not own any state: committing the
    destination (and resetting errors) is up to the caller.
    """

    def __init__(self, transitions: Sequence[TransitionSpec]):
        self._transitions = tuple(transitions)

    def find_transition(self, event: str, from_screen_id: str) -> Optional[TransitionSpec]:
        for transition in self._transitions:
            if transition.event == event and transition.from_screen == from_screen_id:
                return transition
        return None

    def resolve(self, event: str, from_screen_id: str) -> Optional[str]:
        """Destination screen id for ``event`` raised on ``from_screen_id``.

        Returns:
            Destination id, or None (logged) when no transition matches
        """
        transition = self.find_transition(event, from_screen_id)
        if transition is None:
            logger.warning(f"No transition for event '{event}' from screen '{from_screen_id}'")
            return None

        logger.debug(f"Transition '{transition.id}': {from_screen_id} -> {transition.to_screen}")
        return transition.to_screen
