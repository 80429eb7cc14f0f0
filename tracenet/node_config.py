#!/usr/bin/env python3
"""
Node Configuration Module
Handles saving and loading a single node's static parameters from/to JSON files.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from .activation import Activation
from .node import Node, NodeType

REQUIRED_KEYS = ("bias", "type", "squash", "mask")


def save_node_config(node: Node, filepath: Union[str, Path]) -> None:
    """Save a node's bias, type, squash and mask to a JSON file."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w") as f:
        json.dump(node.to_json(), f, indent=2)


def load_node_config(filepath: Union[str, Path]) -> Node:
    """Load a node from a JSON configuration file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the stored record is invalid
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    with open(filepath, "r") as f:
        config = json.load(f)

    errors = validate_node_config(config)
    if errors:
        raise ValueError(f"Invalid node configuration: {'; '.join(errors)}")

    return Node.from_json(config)


def validate_node_config(config: Dict[str, Any]) -> List[str]:
    """Validate a node record and return list of errors."""
    errors = []

    for key in REQUIRED_KEYS:
        if key not in config:
            errors.append(f"Missing required field: {key}")

    if "type" in config and config["type"] not in {t.value for t in NodeType}:
        errors.append(f"Unknown node type: {config['type']}")

    if "squash" in config and config["squash"] not in Activation.__members__:
        errors.append(f"Unknown activation: {config['squash']}")

    for key in ("bias", "mask"):
        value = config.get(key)
        if key in config and (
            isinstance(value, bool) or not isinstance(value, (int, float))
        ):
            errors.append(f"Field '{key}' must be a number")

    return errors
