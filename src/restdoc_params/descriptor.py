"""Parameter descriptor model.

A descriptor documents one named parameter. Only ``name`` and
``description`` matter to verification; the rest is carried through
to the rendered model untouched.
"""

from pydantic import BaseModel, model_validator

CORE_FIELDS = ("name", "description", "optional")


class ParameterDescriptor(BaseModel):
    """Documentation for a single request or path parameter."""

    name: str
    description: str
    optional: bool = False
    attributes: dict = {}  # type, location, custom template values

    @model_validator(mode="before")
    @classmethod
    def _collect_extra_attributes(cls, data):
        # unknown top-level keys (e.g. ``type: integer``) become attributes
        if not isinstance(data, dict):
            return data
        extra = {k: v for k, v in data.items() if k not in CORE_FIELDS and k != "attributes"}
        if not extra:
            return data
        attributes = data.get("attributes") or {}
        if not isinstance(attributes, dict):
            return data
        collected = {k: data[k] for k in CORE_FIELDS if k in data}
        collected["attributes"] = {**extra, **attributes}
        return collected

    def to_model(self) -> dict:
        """Return the template-ready representation of this descriptor.

        Attributes never override the core fields.
        """
        model = {
            "name": self.name,
            "description": self.description,
            "optional": self.optional,
        }
        for key, value in self.attributes.items():
            if key not in CORE_FIELDS:
                model[key] = value
        return model


def parameter_with_name(name: str, description: str = "", optional: bool = False, **attributes) -> ParameterDescriptor:
    """Shorthand for building a descriptor inline."""
    return ParameterDescriptor(
        name=name,
        description=description,
        optional=optional,
        attributes=attributes,
    )
