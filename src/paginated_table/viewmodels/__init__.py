from .paginated_table_viewmodel import PaginatedTableViewModel, RenderSnapshot  # noqa: F401

__all__ = ["PaginatedTableViewModel", "RenderSnapshot"]
