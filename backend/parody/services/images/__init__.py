"""Image restyling: restylers, the LRU cache and the batching transformer."""

from parody.services.images.cache import TransformCache
from parody.services.images.restyler import (
    ContextRoutingRestyler,
    ImageRestyler,
    OpenAIImageEditRestyler,
    OpenAIImageRestyler,
    build_edit_prompt,
    build_image_prompt,
    image_size,
    transformation_strength,
    uses_prompt_generation,
)
from parody.services.images.transformer import ImageTransformer

__all__ = [
    "ContextRoutingRestyler",
    "ImageRestyler",
    "ImageTransformer",
    "OpenAIImageEditRestyler",
    "OpenAIImageRestyler",
    "TransformCache",
    "build_edit_prompt",
    "build_image_prompt",
    "image_size",
    "transformation_strength",
    "uses_prompt_generation",
]
