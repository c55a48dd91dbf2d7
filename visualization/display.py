"""Display utilities for mosaic visualization."""

import numpy as np
import matplotlib.pyplot as plt
from PIL import Image
from pathlib import Path
from typing import List, Optional, Sequence

from core.tiles import Tile

# RGB colours
SEA_COLOR = (18, 52, 86)
WAVE_COLOR = (120, 170, 210)
MOTIF_COLOR = (230, 80, 60)


def render_text(image: np.ndarray, active_char: str = "#", inactive_char: str = ".") -> str:
    """Render a bool image as text rows."""
    return "\n".join(
        "".join(active_char if px else inactive_char for px in row)
        for row in np.asarray(image, dtype=bool)
    )


def to_rgb(image: np.ndarray, mask: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Colour a bool image.

    Args:
        image: Bool image
        mask: Optional bool mask of motif pixels, drawn on top

    Returns:
        (H, W, 3) uint8 RGB image
    """
    image = np.asarray(image, dtype=bool)
    rgb = np.empty(image.shape + (3,), dtype=np.uint8)
    rgb[...] = SEA_COLOR
    rgb[image] = WAVE_COLOR
    if mask is not None:
        if mask.shape != image.shape:
            raise ValueError(f"Mask shape {mask.shape} doesn't match image {image.shape}")
        rgb[mask] = MOTIF_COLOR
    return rgb


def save_image(image: np.ndarray, output_path: str,
               mask: Optional[np.ndarray] = None, scale: int = 4):
    """
    Save a bool image as PNG (one pixel -> scale x scale block).

    Args:
        image: Bool image
        output_path: Path to save to
        mask: Optional bool mask of motif pixels
        scale: Upscaling factor
    """
    if scale < 1:
        raise ValueError(f"scale must be positive, got {scale}")
    rgb = to_rgb(image, mask)
    if scale > 1:
        rgb = rgb.repeat(scale, axis=0).repeat(scale, axis=1)

    output_dir = Path(output_path).parent
    if output_dir and str(output_dir) != '.':
        output_dir.mkdir(parents=True, exist_ok=True)

    Image.fromarray(rgb).save(output_path)


def display_mosaic(image: np.ndarray, mask: Optional[np.ndarray] = None,
                   roughness: Optional[int] = None,
                   title: str = "Stitched Image",
                   figsize: tuple = (8, 8)):
    """
    Display the stitched image, motif pixels highlighted.

    Args:
        image: Stitched bool image
        mask: Optional bool mask of motif pixels
        roughness: Optional roughness to show in the title
        title: Plot title
        figsize: Figure size
    """
    fig, ax = plt.subplots(1, 1, figsize=figsize)

    if roughness is not None:
        title = f"{title} (Roughness: {roughness})"

    ax.imshow(to_rgb(image, mask), interpolation='nearest')
    ax.set_title(title)
    ax.axis('off')

    plt.tight_layout()
    plt.show()


def display_variants(variants: Sequence[Tile], titles: Optional[List[str]] = None,
                     figsize_per_variant: tuple = (2, 2)):
    """
    Display tile variants (full pixels, borders included) in a row of 8 columns.

    Args:
        variants: Variants to display, e.g. expand(tile)
        titles: Optional titles (default: id and orientation)
        figsize_per_variant: Figure size per variant
    """
    n = len(variants)
    if n == 0:
        return
    cols = min(n, 8)
    rows = (n + cols - 1) // cols

    fig, axes = plt.subplots(rows, cols, figsize=(figsize_per_variant[0] * cols,
                                                  figsize_per_variant[1] * rows))
    axes = np.array(axes).reshape(rows, cols)

    for idx in range(rows * cols):
        ax = axes[idx // cols, idx % cols]
        ax.axis('off')
        if idx >= n:
            continue

        variant = variants[idx]
        ax.imshow(variant.to_pixels(), cmap='gray', interpolation='nearest')
        if titles and idx < len(titles):
            ax.set_title(titles[idx], fontsize=8)
        else:
            ax.set_title(f"{variant.physical_id} {variant.orientation.name}", fontsize=8)

    plt.tight_layout()
    plt.show()
