"""Services for the mask editor"""

from .mask_export import mask_to_array, mask_coverage, mask_bounding_box, is_mask_empty

__all__ = [
    'mask_to_array',
    'mask_coverage',
    'mask_bounding_box',
    'is_mask_empty',
]
