"""Metadata for url_analyser."""

__all__ = [
    "__title__",
    "__version__",
    "__description__",
    "__credits__",
    "__requires_python__",
]

__title__ = "url_analyser"
__version__ = "0.1.0"
__description__ = (
    "A terminal client that submits URLs to an analysis service and shows the report."
)
__credits__ = [
    {"name": "url_analyser contributors", "email": "url-analyser@users.noreply.github.com"}
]
__requires_python__ = ">=3.9"
