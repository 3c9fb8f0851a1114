"""
batch-translator - staged, decoratable batch translation.

Applies an ordered sequence of named stages to batches of elements, with
replaceable batch, stage and element handlers for tracing, metrics and error
policy.
"""

__version__ = "0.1.0"
