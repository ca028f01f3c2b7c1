"""Core business logic layer.

Subpackages:
- grocery: ingredient keys, categories and the weekly grocery list
- planner: the weekly meal grid and week date helpers
- recipes: recipe library search and filtering
"""
__all__ = ["grocery", "planner", "recipes"]
