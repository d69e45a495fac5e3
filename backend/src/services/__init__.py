"""Services for the rock drying engine."""

from .boulder_drying_service import BoulderDryingService
from .drying_conditions_service import DryingConditionsService
from .rock_drying_service import RockDryingService
from .tree_coverage_service import TreeCoverageResolver

__all__ = [
    "RockDryingService",
    "BoulderDryingService",
    "DryingConditionsService",
    "TreeCoverageResolver",
]
