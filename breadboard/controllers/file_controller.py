"""
Circuit JSON loading and saving.

Circuits are exchanged in the editor's three-collection format:
``components``, ``nodes`` (terminals) and ``connections`` (wires).
"""

import json
import logging
from pathlib import Path
from typing import Union

from breadboard.models.circuit import CircuitModel
from breadboard.models.component import COMPONENT_TYPES

logger = logging.getLogger(__name__)


def validate_circuit_data(data) -> None:
    """
    Check a decoded circuit file before building a model from it.

    The first problem found is raised as a ValueError naming the entry.
    Terminal roles are not checked here; unknown roles load as untagged
    terminals and the simulator ignores them.
    """
    if not isinstance(data, dict):
        raise ValueError("File does not hold a valid circuit object.")

    for key in ("components", "nodes", "connections"):
        if key not in data or not isinstance(data[key], list):
            raise ValueError(f"Missing or invalid '{key}' list.")

    comp_ids = set()
    for i, comp in enumerate(data["components"]):
        if not isinstance(comp, dict):
            raise ValueError(f"Component #{i + 1} is not an object.")
        for key in ("id", "type"):
            if key not in comp:
                raise ValueError(f"Component #{i + 1} is missing required field '{key}'.")
        if comp["type"] not in COMPONENT_TYPES:
            raise ValueError(f"Component '{comp['id']}' has unknown type '{comp['type']}'.")
        if comp["id"] in comp_ids:
            raise ValueError(f"Duplicate component id '{comp['id']}'.")
        comp_ids.add(comp["id"])

    node_ids = set()
    for i, node in enumerate(data["nodes"]):
        if not isinstance(node, dict):
            raise ValueError(f"Node #{i + 1} is not an object.")
        for key in ("id", "componentId"):
            if key not in node:
                raise ValueError(f"Node #{i + 1} is missing required field '{key}'.")
        if node["componentId"] not in comp_ids:
            raise ValueError(f"Node '{node['id']}' references unknown component '{node['componentId']}'.")
        for key in ("x", "y"):
            if key in node and not isinstance(node[key], (int, float)):
                raise ValueError(f"Node '{node['id']}' position values must be numeric.")
        node_ids.add(node["id"])

    for i, wire in enumerate(data["connections"]):
        if not isinstance(wire, dict):
            raise ValueError(f"Connection #{i + 1} is not an object.")
        for key in ("fromNodeId", "toNodeId"):
            if key not in wire:
                raise ValueError(f"Connection #{i + 1} is missing required field '{key}'.")
            if wire[key] not in node_ids:
                raise ValueError(f"Connection #{i + 1} references unknown node '{wire[key]}'.")


def load_circuit_file(path: Union[str, Path]) -> CircuitModel:
    """
    Read a saved breadboard back into a CircuitModel.

    Missing files raise FileNotFoundError, malformed text raises
    json.JSONDecodeError and structural problems raise ValueError.
    """
    path = Path(path)
    data = json.loads(path.read_text())
    validate_circuit_data(data)
    model = CircuitModel.from_dict(data)
    logger.debug("Loaded %s: %d components, %d wires", path, len(model.components), len(model.wires))
    return model


def save_circuit_file(model: CircuitModel, path: Union[str, Path]) -> None:
    Path(path).write_text(json.dumps(model.to_dict(), indent=2))
    logger.debug("Saved %d components to %s", len(model.components), path)
