"""Parameter verification and model building.

A ``ParametersSnippet`` checks that the documented parameter names match
the names found in a captured interaction exactly, then builds the model
a template engine renders into documentation.

Both halves of the check are pluggable:

- an ``ActualParameterExtractor`` returns the names present in an
  interaction (see ``restdoc_params.interaction``);
- a ``VerificationFailureHandler`` decides what a mismatch means. The
  default raises ``VerificationFailedError``. A handler that returns
  normally lets model building continue with the full registry.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Protocol

from restdoc_params.descriptor import ParameterDescriptor
from restdoc_params.errors import InternalConsistencyError, VerificationFailedError
from restdoc_params.interaction import path_parameter_names, query_parameter_names
from restdoc_params.registry import DescriptorRegistry

logger = logging.getLogger(__name__)

REQUEST_PARAMETERS_SNIPPET = "request-parameters"
PATH_PARAMETERS_SNIPPET = "path-parameters"


class ActualParameterExtractor(Protocol):
    def __call__(self, interaction: Any) -> Iterable[str]: ...


class VerificationFailureHandler(Protocol):
    def __call__(self, undocumented: frozenset[str], missing: frozenset[str]) -> None: ...


@dataclass(frozen=True)
class VerificationResult:
    actual: frozenset[str]
    expected: frozenset[str]
    undocumented: frozenset[str]
    missing: frozenset[str]

    @property
    def succeeded(self) -> bool:
        return not self.undocumented and not self.missing


def describe_mismatch(label: str, undocumented: frozenset[str], missing: frozenset[str]) -> str:
    """Build a message naming every undocumented and missing parameter."""
    parts = []
    if undocumented:
        parts.append(f"{label} with the following names were not documented: {_format_names(undocumented)}")
    if missing:
        parts.append(f"{label} with the following names were not found in the request: {_format_names(missing)}")
    return ". ".join(parts)


def _format_names(names: frozenset[str]) -> str:
    return "[" + ", ".join(sorted(names)) + "]"


class RaiseOnFailure:
    """Default handler: abort documentation with ``VerificationFailedError``."""

    def __init__(self, label: str = "Parameters"):
        self.label = label

    def __call__(self, undocumented: frozenset[str], missing: frozenset[str]) -> None:
        raise VerificationFailedError(
            describe_mismatch(self.label, undocumented, missing),
            undocumented=undocumented,
            missing=missing,
        )


class LogOnFailure:
    """Report the mismatch as a warning and let documentation continue."""

    def __init__(self, label: str = "Parameters"):
        self.label = label

    def __call__(self, undocumented: frozenset[str], missing: frozenset[str]) -> None:
        logger.warning(describe_mismatch(self.label, undocumented, missing))


class ParametersSnippet:
    """Verifies documented parameters against an interaction and builds their model."""

    def __init__(
        self,
        snippet_name: str,
        descriptors: Iterable[ParameterDescriptor],
        extractor: ActualParameterExtractor,
        failure_handler: VerificationFailureHandler | None = None,
        attributes: dict | None = None,
    ):
        self.snippet_name = snippet_name
        self.registry = DescriptorRegistry(descriptors)
        self.extractor = extractor
        self.failure_handler = failure_handler or RaiseOnFailure()
        self.attributes = dict(attributes or {})

    def verify(self, interaction: Any) -> VerificationResult:
        """Compare actual and documented names, calling the failure handler on mismatch.

        Returns normally when the names match, or when the handler
        chooses not to raise.
        """
        actual = frozenset(self.extractor(interaction))
        expected = self.registry.names()
        result = VerificationResult(
            actual=actual,
            expected=expected,
            undocumented=actual - expected,
            missing=expected - actual,
        )

        if not result.succeeded:
            logger.debug(
                "%s: undocumented=%s missing=%s",
                self.snippet_name,
                sorted(result.undocumented),
                sorted(result.missing),
            )
            self.failure_handler(result.undocumented, result.missing)
        elif actual != expected:
            raise InternalConsistencyError(
                f"{self.snippet_name}: actual parameters {sorted(actual)} "
                f"differ from documented parameters {sorted(expected)}"
            )
        return result

    def create_model(self, interaction: Any) -> dict:
        """Verify the interaction, then return ``{"parameters": [...]}`` in registry order."""
        self.verify(interaction)
        parameters = [descriptor.to_model() for descriptor in self.registry]
        return {"parameters": parameters}

    def document(self, interaction: Any) -> dict:
        """Model plus the snippet's extra attributes, as passed to a template."""
        model = dict(self.attributes)
        model.update(self.create_model(interaction))
        return model


def request_parameters(
    *descriptors: ParameterDescriptor,
    attributes: dict | None = None,
    failure_handler: VerificationFailureHandler | None = None,
) -> ParametersSnippet:
    """Snippet documenting query string and form parameters."""
    return ParametersSnippet(
        REQUEST_PARAMETERS_SNIPPET,
        descriptors,
        query_parameter_names,
        failure_handler=failure_handler or RaiseOnFailure("Request parameters"),
        attributes=attributes,
    )


def path_parameters(
    *descriptors: ParameterDescriptor,
    attributes: dict | None = None,
    failure_handler: VerificationFailureHandler | None = None,
) -> ParametersSnippet:
    """Snippet documenting the variables of the request's path template."""
    return ParametersSnippet(
        PATH_PARAMETERS_SNIPPET,
        descriptors,
        path_parameter_names,
        failure_handler=failure_handler or RaiseOnFailure("Path parameters"),
        attributes=attributes,
    )
