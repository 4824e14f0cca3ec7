from .tables import compare_iterative_methods, compare_second_derivatives

__all__ = ["compare_iterative_methods", "compare_second_derivatives"]
