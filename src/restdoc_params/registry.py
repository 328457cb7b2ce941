"""Ordered, name-keyed registry of parameter descriptors."""

import logging
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from restdoc_params.descriptor import ParameterDescriptor
from restdoc_params.errors import InvalidDescriptorError

logger = logging.getLogger(__name__)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def check_descriptor(descriptor: ParameterDescriptor) -> InvalidDescriptorError | None:
    """Return the failure for an unusable descriptor, or None if it is valid."""
    if _is_blank(descriptor.name):
        return InvalidDescriptorError("name")
    if _is_blank(descriptor.description):
        return InvalidDescriptorError("description", descriptor.name)
    return None


class DescriptorRegistry:
    """Descriptors keyed by name, in first-occurrence order.

    A later descriptor with an already-registered name replaces the
    earlier one but keeps its position. The registry cannot be changed
    once built.
    """

    def __init__(self, descriptors: Iterable[ParameterDescriptor]):
        by_name: dict[str, ParameterDescriptor] = {}
        for descriptor in descriptors:
            failure = check_descriptor(descriptor)
            if failure is not None:
                raise failure
            if descriptor.name in by_name:
                logger.debug("Replacing descriptor for parameter '%s'", descriptor.name)
            by_name[descriptor.name] = descriptor
        self._descriptors = MappingProxyType(by_name)
        logger.debug("Registered %d parameter descriptors", len(by_name))

    @property
    def descriptors(self) -> Mapping[str, ParameterDescriptor]:
        """Read-only view of the descriptors keyed by name."""
        return self._descriptors

    def names(self) -> frozenset[str]:
        return frozenset(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[ParameterDescriptor]:
        return iter(self._descriptors.values())

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors
