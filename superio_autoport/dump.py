"""JSON dump of the parsed chip model."""

from __future__ import annotations

import json
from datetime import datetime, timezone

from .models import SuperIOChip


def render_json(chip: SuperIOChip) -> str:
    """Render the parsed chip model as a JSON string."""
    output = {
        "generated_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "total_devices": len(chip.devices),
        "chip": chip.to_dict(),
    }
    return json.dumps(output, indent=2)
