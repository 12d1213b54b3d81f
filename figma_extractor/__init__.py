"""Figma frontend extractor package.

Subpackages:
- extraction: Figma node tree flattening, property projection, style buckets
- codegen: Prompt building, completion response parsing, per-framework generation
- integrations: Figma REST and LLM completion API clients
"""
