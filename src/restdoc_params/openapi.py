"""OpenAPI / Swagger parameter source.

Builds parameter descriptors for one operation of an OpenAPI 3.x or
Swagger 2.0 document, so an existing API description can be checked
against captured interactions.
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from restdoc_params.descriptor import ParameterDescriptor
from restdoc_params.errors import DocumentFormatError

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS")

# OpenAPI locations that end up in the request-parameters snippet
REQUEST_LOCATIONS = ("query", "formData")


def parse_operation_parameters(file_path: Path, method: str, path: str) -> list[ParameterDescriptor]:
    """Return descriptors for every parameter of ``method path``.

    Path-level parameters are included; an operation-level parameter with
    the same name and location overrides them.
    """
    doc = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    if not isinstance(doc, dict):
        raise DocumentFormatError(f"{file_path}: not an OpenAPI document")

    paths = doc.get("paths") or {}
    if not isinstance(paths, dict):
        raise DocumentFormatError(f"{file_path}: 'paths' must be a mapping")

    path_item = _resolve(doc, paths.get(path), file_path)
    if path_item is None:
        raise DocumentFormatError(f"{file_path}: no path '{path}'")
    if not isinstance(path_item, dict):
        raise DocumentFormatError(f"{file_path}: path '{path}' must be a mapping")

    method = method.upper()
    operation = _resolve(doc, path_item.get(method.lower()), file_path)
    if method not in HTTP_METHODS or operation is None:
        raise DocumentFormatError(f"{file_path}: no operation {method} {path}")
    if not isinstance(operation, dict):
        raise DocumentFormatError(f"{file_path}: operation {method} {path} must be a mapping")

    merged: dict[tuple[str, str], dict] = {}
    for entry in _parameter_list(path_item, file_path) + _parameter_list(operation, file_path):
        p = _resolve(doc, entry, file_path)
        if not isinstance(p, dict) or not p.get("name"):
            raise DocumentFormatError(f"{file_path}: parameter of {method} {path} has no name: {entry!r}")
        if "schema" in p:
            p = {**p, "schema": _resolve(doc, p["schema"], file_path)}
        merged[(p["name"], p.get("in", "query"))] = p

    try:
        return [_to_descriptor(p) for p in merged.values()]
    except ValidationError as e:
        raise DocumentFormatError(f"{file_path}: invalid parameter of {method} {path}: {e}") from e


def descriptors_for_location(descriptors: list[ParameterDescriptor], *locations: str) -> list[ParameterDescriptor]:
    return [d for d in descriptors if d.attributes.get("location") in locations]


def _parameter_list(item: dict, file_path: Path) -> list:
    parameters = item.get("parameters") or []
    if not isinstance(parameters, list):
        raise DocumentFormatError(f"{file_path}: 'parameters' must be a list")
    return parameters


def _resolve(doc: dict, item, file_path: Path):
    """Follow local ``$ref`` pointers such as ``#/components/parameters/Page``."""
    seen = set()
    while isinstance(item, dict) and "$ref" in item:
        ref = item["$ref"]
        if not isinstance(ref, str) or not ref.startswith("#/"):
            raise DocumentFormatError(f"{file_path}: unsupported reference {ref!r}")
        if ref in seen:
            raise DocumentFormatError(f"{file_path}: circular reference {ref!r}")
        seen.add(ref)

        item = doc
        for token in ref[2:].split("/"):
            # JSON pointer escapes
            token = token.replace("~1", "/").replace("~0", "~")
            if not isinstance(item, dict) or token not in item:
                raise DocumentFormatError(f"{file_path}: unresolvable reference {ref!r}")
            item = item[token]
    return item


def _to_descriptor(p: dict) -> ParameterDescriptor:
    # Swagger 2.0 puts type on the parameter, OpenAPI 3 under schema
    schema = p.get("schema") or {}
    if not isinstance(schema, dict):
        schema = {}
    attributes = {
        "location": p.get("in", "query"),
        "type": schema.get("type", p.get("type", "string")),
    }
    for key in ("minimum", "maximum", "minLength", "maxLength", "pattern", "enum"):
        if key in schema:
            attributes[key] = schema[key]

    return ParameterDescriptor(
        name=p["name"],
        description=p.get("description", ""),
        optional=not p.get("required", False),
        attributes=attributes,
    )
