"""Read a batch of package events from a file."""

import json
from pathlib import Path
from typing import List, Union

import yaml

from watchpkg.core.models import PackageEvent


def load_events(file_path: Union[str, Path]) -> List[PackageEvent]:
    """
    Load events from a YAML or JSON file.

    The document is either a list of events or a mapping with an ``events``
    list. Each event looks like ``{type: install-finished, package: {name,
    origin}}``; upgrades use ``old`` and ``new`` instead of ``package``.

    Raises:
        ValueError: If the file cannot be parsed or an event is malformed
    """
    file_path = Path(file_path)

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            if file_path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ValueError(f"Cannot read events from {file_path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("events")
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"Events in {file_path} must be a list")

    events = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"Event #{index} must be a mapping")
        try:
            events.append(PackageEvent.from_dict(item))
        except ValueError as e:
            raise ValueError(f"Event #{index}: {e}") from e
    return events
