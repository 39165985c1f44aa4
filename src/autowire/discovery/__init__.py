"""File discovery: tree walking and namespace derivation."""

from autowire.discovery.namespace import Namespace, namespace_of, service_id_for
from autowire.discovery.walker import ExclusionSet, TreeWalker

__all__ = [
    "ExclusionSet",
    "Namespace",
    "TreeWalker",
    "namespace_of",
    "service_id_for",
]
