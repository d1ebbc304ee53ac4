"""Domain layer — property types, normalization, merge and exclusion rules.

This layer depends only on stdlib, pydantic and ruamel.yaml.
It must never import from services, infrastructure, commands, or config.
"""
