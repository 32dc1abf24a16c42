# src/logictest_core/parser/parser.py
import logging
import re
import string
from pathlib import Path
from typing import Any, Dict, List, Union

import cerberus
import yaml

from .raw_data import ParsedBoardNode, ParsedComponentData, ParsedDesign
from .exceptions import ParsingError, SchemaValidationError

logger = logging.getLogger(__name__)

# Un-anchored identifier fragment, shared by the anchored patterns below.
ID_REGEX_FRAGMENT = r"[a-zA-Z_][a-zA-Z0-9_]*"

# A single identifier: component ids, types and parameter names. '.' and '-' are forbidden.
ID_REGEX = f"^{ID_REGEX_FRAGMENT}$"
ALLOWED_ID_CHARS = set(string.ascii_letters + string.digits + "_")

# A wire endpoint: `component_id.port_name`.
ENDPOINT_REGEX = f"^{ID_REGEX_FRAGMENT}\\.{ID_REGEX_FRAGMENT}$"


class EnhancedValidator(cerberus.Validator):
    """Custom Cerberus validator enforcing the naming conventions of design files."""

    def _validate_id_regex(self, constraint, field, value):
        """
        Validates that a string is a plain identifier.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if not constraint:
            return
        if not isinstance(value, str):
            self._error(field, "must be a string to be validated by id_regex.")
            return

        if not re.match(ID_REGEX, value):
            invalid_chars = sorted(set(value) - ALLOWED_ID_CHARS)
            message = (
                f"Identifier '{value}' is invalid. Identifiers must start with a letter or underscore, "
                "and can only contain letters, numbers, and underscores. The dot '.' and hyphen '-' characters are forbidden. "
                f"This identifier contains the following forbidden character(s): {invalid_chars}"
            )
            self._error(field, message)

    def _validate_endpoint_regex(self, constraint, field, value):
        """
        Validates that a string names a port as `component.port`.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if constraint and isinstance(value, str) and not re.match(ENDPOINT_REGEX, value):
            self._error(
                field,
                f"Wire endpoint '{value}' is invalid. Endpoints must be written as "
                f"'component_id.port_name' (e.g., 'reg.clk').",
            )

    def _validate_unique_elements_by_key(self, key_for_uniqueness, field, value):
        """
        Validates that all dictionaries in a list have a unique value for a given key.
        The rule's arguments are validated against this schema:
        {'type': 'string'}
        """
        if not isinstance(value, list):
            return  # Let the 'type: list' rule handle this.

        seen_keys = set()
        duplicates = []
        for item in value:
            if not isinstance(item, dict):
                continue  # Let sub-schema validation handle this.

            item_key = item.get(key_for_uniqueness)
            if item_key is not None:
                if item_key in seen_keys:
                    duplicates.append(item_key)
                else:
                    seen_keys.add(item_key)

        if duplicates:
            unique_duplicates = sorted(set(duplicates))
            self._error(field, f"Duplicate values found for key '{key_for_uniqueness}': {unique_duplicates}")


class NetlistParser:
    """
    Parses and validates a design file. Its sole responsibility is to produce
    the intermediate representation consumed by the DesignBuilder.
    """
    _id_rule = {"type": "string", "required": True, "empty": False, "id_regex": True}
    _param_key_rule = {"type": "string", "required": True, "empty": False, "id_regex": True}

    _component_schema = {
        "id": _id_rule,
        "type": {"type": "string", "required": True, "id_regex": True},
        "label": {"type": "string", "required": False, "nullable": True},
        "position": {
            "type": "list", "required": False, "nullable": True,
            "minlength": 2, "maxlength": 2, "schema": {"type": "integer"},
        },
        "parameters": {
            "type": "dict", "required": False,
            "keysrules": _param_key_rule, "valuesrules": {"type": ["integer", "boolean"]},
        },
    }

    _circuit_schema = {
        "name": {"type": "string", "required": True, "empty": False},
        "components": {
            "type": "list", "required": True, "minlength": 1, "unique_elements_by_key": "id",
            "schema": {"type": "dict", "schema": _component_schema},
        },
        "wires": {
            "type": "list", "required": False,
            "schema": {
                "type": "list", "minlength": 2,
                "schema": {"type": "string", "endpoint_regex": True},
            },
        },
    }

    _schema = {
        "design_name": {"type": "string", "required": False, "empty": False},
        "simulation": {
            "type": "dict", "required": False, "nullable": True,
            "schema": {"max_settle_iterations": {"type": "integer", "min": 1}},
        },
        "circuits": {
            "type": "list", "required": True, "minlength": 1, "unique_elements_by_key": "name",
            "schema": {"type": "dict", "schema": _circuit_schema},
        },
    }

    def __init__(self):
        self._validator = EnhancedValidator(self._schema)
        self._validator.allow_unknown = False
        logger.debug("NetlistParser initialized with strict structural validation rules.")

    def parse(self, yaml_path: Union[str, Path]) -> ParsedDesign:
        """Parses one design file and returns its IR."""
        resolved_path = Path(yaml_path).resolve()
        logger.info(f"Parsing design file: {resolved_path}")

        yaml_content = self._load_yaml(resolved_path)
        if not self._validator.validate(yaml_content):
            raise SchemaValidationError(self._validator.errors, resolved_path)

        validated_data = self._validator.document
        boards = [self._parse_circuit(circuit, resolved_path) for circuit in validated_data["circuits"]]

        design = ParsedDesign(
            design_name=validated_data.get("design_name", resolved_path.stem),
            source_yaml_path=resolved_path,
            boards=boards,
            raw_simulation_config=validated_data.get("simulation"),
        )
        logger.debug(f"Parsed design '{design.design_name}' with {len(boards)} subcircuit(s).")
        return design

    def _parse_circuit(self, circuit_raw: Dict[str, Any], source: Path) -> ParsedBoardNode:
        components: List[ParsedComponentData] = []
        for comp_raw in circuit_raw["components"]:
            position = comp_raw.get("position")
            components.append(
                ParsedComponentData(
                    instance_id=comp_raw["id"],
                    component_type=comp_raw["type"],
                    label=comp_raw.get("label"),
                    position=tuple(position) if position is not None else None,
                    raw_parameters_dict=comp_raw.get("parameters", {}),
                    source_yaml_path=source,
                )
            )
        return ParsedBoardNode(
            board_name=circuit_raw["name"],
            source_yaml_path=source,
            components=components,
            wires=[list(wire) for wire in circuit_raw.get("wires", [])],
        )

    def _load_yaml(self, source: Path) -> Dict[str, Any]:
        """Loads and performs basic sanity checks on a YAML file."""
        if not source.is_file():
            raise ParsingError(details=f"Design file not found at path: {source}", file_path=source)
        try:
            with source.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except PermissionError as e:
            raise ParsingError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
        except yaml.YAMLError as e:
            raise ParsingError(details=f"Invalid YAML syntax: {e}", file_path=source) from e
        if content is None:
            raise ParsingError(details="The YAML file is empty or contains no valid content.", file_path=source)
        if not isinstance(content, dict):
            raise ParsingError(details="The root of the YAML file must be a dictionary (mapping).", file_path=source)
        return content
