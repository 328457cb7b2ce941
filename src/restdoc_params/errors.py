"""Errors raised while documenting parameters."""


class ParameterDocumentationError(Exception):
    """Base class for all errors raised by restdoc_params."""


class InvalidDescriptorError(ParameterDocumentationError, ValueError):
    """A descriptor is missing its name or description."""

    def __init__(self, field: str, descriptor_name: str = ""):
        self.field = field
        self.descriptor_name = descriptor_name
        if field == "name":
            message = "Parameter descriptor must have a non-blank name"
        else:
            message = f"Parameter descriptor '{descriptor_name}' must have a non-blank {field}"
        super().__init__(message)


class VerificationFailedError(ParameterDocumentationError):
    """Documented parameter names do not match the captured interaction."""

    def __init__(self, message: str, undocumented: frozenset[str], missing: frozenset[str]):
        super().__init__(message)
        self.undocumented = undocumented
        self.missing = missing


class InternalConsistencyError(ParameterDocumentationError, AssertionError):
    """Name sets disagree although both differences are empty."""


class DocumentFormatError(ParameterDocumentationError):
    """An input document could not be turned into descriptors or an interaction."""


class MissingPathTemplateError(ParameterDocumentationError):
    """Path parameters were requested for an interaction without a path template."""
