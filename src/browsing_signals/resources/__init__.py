"""Resource identity extraction and cross-session aggregation."""

from browsing_signals.resources.models import ExtractedResource, ResourceIdentifier, ResourceSpecificity
from browsing_signals.resources.extractor import extract_resource_identifier
from browsing_signals.resources.aggregator import (
    aggregate_resources_across_sessions,
    build_resource_map,
    merge_resource_maps,
)
from browsing_signals.resources.filters import filter_meaningful_resources, is_routine_resource

__all__ = [
    "ExtractedResource",
    "ResourceIdentifier",
    "ResourceSpecificity",
    "extract_resource_identifier",
    "aggregate_resources_across_sessions",
    "build_resource_map",
    "merge_resource_maps",
    "filter_meaningful_resources",
    "is_routine_resource",
]
