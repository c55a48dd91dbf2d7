"""Visualization utilities for mosaic solving."""
from .display import (
    render_text,
    to_rgb,
    save_image,
    display_mosaic,
    display_variants
)
