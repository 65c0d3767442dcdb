"""Domain services for BrewBase.

Services contain business logic that doesn't naturally fit within a single entity.
"""

from brewbase.domain.services.document_normalizer import DocumentNormalizer
from brewbase.domain.services.field_coercion import (
    coerce,
    parse_structured,
    to_bool,
    to_float,
    to_images,
    to_int,
    to_list,
    to_upper,
)
from brewbase.domain.services.id_generator import IdGenerator
from brewbase.domain.services.slug_generator import SlugGenerator

__all__ = [
    "DocumentNormalizer",
    "IdGenerator",
    "SlugGenerator",
    "coerce",
    "parse_structured",
    "to_bool",
    "to_float",
    "to_images",
    "to_int",
    "to_list",
    "to_upper",
]
