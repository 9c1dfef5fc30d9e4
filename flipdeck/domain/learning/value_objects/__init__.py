from .rating import Rating, review_interval_days, selection_weight

__all__ = ["Rating", "review_interval_days", "selection_weight"]
