"""Statblock rescaling, merging and template role mapping."""

from .merge import average_statblocks
from .rescale import rescale, rescale_item, scale_abilities, scaling_ratio
from .templates import (
    TEMPLATE_CATEGORIES,
    TemplateMapping,
    get_template_actor_name,
    get_template_mapping_for_role,
    preserved_features_for_role,
    should_preserve_feature,
    template_candidates,
)

__all__ = [
    "average_statblocks",
    "rescale",
    "rescale_item",
    "scale_abilities",
    "scaling_ratio",
    "TEMPLATE_CATEGORIES",
    "TemplateMapping",
    "get_template_actor_name",
    "get_template_mapping_for_role",
    "preserved_features_for_role",
    "should_preserve_feature",
    "template_candidates",
]
