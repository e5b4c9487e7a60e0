from __future__ import annotations

from typing import Iterable

from snowflow.core.component import OutputChannel
from snowflow.servicenow.models import IncidentRecord

CHANNEL_NAME_CLEAR = "clear"
CHANNEL_NAME_LOW = "low"
CHANNEL_NAME_HIGH = "high"

HIGH_URGENCY = "1"

OUTPUT_CHANNELS: tuple[OutputChannel, ...] = (
    OutputChannel(CHANNEL_NAME_CLEAR, "Clear", "No incidents matched the filters"),
    OutputChannel(CHANNEL_NAME_LOW, "Low", "Incidents found, but all are low or medium urgency"),
    OutputChannel(CHANNEL_NAME_HIGH, "High", "At least one high-urgency incident found"),
)


def determine_output_channel(incidents: Iterable[IncidentRecord]) -> str:
    """Pick ``clear``, ``low`` or ``high`` for a result set.

    Any high-urgency record anywhere in the set selects ``high``.
    """
    seen_any = False
    for incident in incidents:
        if incident.urgency == HIGH_URGENCY:
            return CHANNEL_NAME_HIGH
        seen_any = True
    return CHANNEL_NAME_LOW if seen_any else CHANNEL_NAME_CLEAR
