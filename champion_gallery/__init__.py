"""Champion gallery: browse a remote champion catalog with shareable detail URLs."""

__version__ = "0.1.0"
