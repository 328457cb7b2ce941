"""Load descriptors and captured interactions from YAML or JSON files.

Descriptor files hold either a list of descriptors or a mapping with a
``parameters`` list:

    parameters:
      - name: page
        description: Page number
      - name: size
        description: Page size
        optional: true
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from restdoc_params.descriptor import ParameterDescriptor
from restdoc_params.errors import DocumentFormatError
from restdoc_params.interaction import Interaction


def load_descriptors(file_path: Path) -> list[ParameterDescriptor]:
    """Read parameter descriptors from a YAML/JSON file."""
    data = _load_document(file_path)
    if isinstance(data, dict):
        data = data.get("parameters")
    if not isinstance(data, list):
        raise DocumentFormatError(f"{file_path}: expected a list of parameters")

    try:
        return [ParameterDescriptor(**item) for item in data]
    except (TypeError, ValidationError) as e:
        raise DocumentFormatError(f"{file_path}: invalid parameter descriptor: {e}") from e


def load_interaction(file_path: Path) -> Interaction:
    """Read a captured interaction from a YAML/JSON file."""
    data = _load_document(file_path)
    if not isinstance(data, dict):
        raise DocumentFormatError(f"{file_path}: expected an interaction mapping")

    try:
        return Interaction(**data)
    except ValidationError as e:
        raise DocumentFormatError(f"{file_path}: invalid interaction: {e}") from e


def _load_document(file_path: Path):
    # JSON is a subset of YAML, one parser covers both
    text = file_path.read_text(encoding="utf-8")
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentFormatError(f"{file_path}: {e}") from e
