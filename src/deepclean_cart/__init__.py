"""Client-side cart, catalog and checkout orchestration for the DeepClean booking app."""

__version__ = "0.1.0"
