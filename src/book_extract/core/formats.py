"""Supported document formats."""

from pathlib import Path


class DocumentFormats:
    """Registry of formats the rendering engine can open."""

    SUPPORTED_FORMATS = {
        ".epub": "epub",
        ".mobi": "mobi",
        ".pdf": "pdf",
        ".fb2": "fb2",
        ".xps": "xps",
        ".cbz": "cbz",
    }

    @classmethod
    def detect_format(cls, path: Path) -> str:
        """Detect file format from extension.

        Args:
            path: Path to the book file

        Returns:
            Format string ("epub", "pdf", ... or "unknown")
        """
        return cls.SUPPORTED_FORMATS.get(path.suffix.lower(), "unknown")

    @classmethod
    def is_supported(cls, path: Path) -> bool:
        """Check if file format is supported."""
        return path.suffix.lower() in cls.SUPPORTED_FORMATS

    @classmethod
    def validate(cls, path: Path) -> None:
        """Raise if the file is missing or its format is unsupported.

        Raises:
            FileNotFoundError: If file does not exist
            ValueError: If file format is not supported
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        if not cls.is_supported(path):
            supported = ", ".join(cls.SUPPORTED_FORMATS.keys())
            raise ValueError(
                f"Unsupported format: {path.suffix}. Supported formats: {supported}"
            )
