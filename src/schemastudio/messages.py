"""Messages sent from the display surface back to the session."""

import logging
from dataclasses import dataclass
from typing import Any

from schemastudio.models import Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoToPosition:
    """Jump to a finding in the tracked document."""

    position: Position


@dataclass(frozen=True)
class FormatSchema:
    """Format the tracked document in place."""


InboundMessage = GoToPosition | FormatSchema


def parse_message(message: Any) -> InboundMessage | None:
    """Decode a surface message, or return None if it isn't one we handle."""
    if not isinstance(message, dict):
        return None

    command = message.get("command")
    if command == "formatSchema":
        return FormatSchema()

    if command == "goToPosition":
        try:
            return GoToPosition(position=Position.from_sequence(message.get("position")))
        except (TypeError, ValueError) as e:
            logger.debug("Ignoring goToPosition with bad position: %s", e)
            return None

    return None
