"""Category use cases."""

from trackplan.application.use_cases.categories.category_operations import (
    CategoryService,
)

__all__ = ["CategoryService"]
