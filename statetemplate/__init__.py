"""Template field-dependency analysis and fragment extraction."""

__version__ = "0.1.0"
__all__ = ["analyzer", "fragments"]