#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Post-parse transform pipeline."""

from mdast.transforms.pipeline import DEFAULT_PROCESSOR, Processor, Transform, run_transforms

__all__ = ["DEFAULT_PROCESSOR", "Processor", "Transform", "run_transforms"]
