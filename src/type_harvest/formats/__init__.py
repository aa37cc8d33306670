"""Host document adapters and file format handlers for Type Harvest."""

from type_harvest.formats.base import FormatHandler, StyledTextSource
from type_harvest.formats.memory import InMemorySource
from type_harvest.formats.txt_handler import TXTHandler
from type_harvest.formats.json_handler import JSONHandler
from type_harvest.formats.docx_handler import DOCXHandler

__all__ = [
    "FormatHandler",
    "StyledTextSource",
    "InMemorySource",
    "TXTHandler",
    "JSONHandler",
    "DOCXHandler",
]

# Map file extensions to handlers
HANDLER_MAP: dict[str, type[FormatHandler]] = {
    ".json": JSONHandler,
    ".docx": DOCXHandler,
    ".txt": TXTHandler,
}

SUPPORTED_EXTENSIONS = tuple(HANDLER_MAP.keys())


def get_handler(extension: str) -> type[FormatHandler]:
    """Get the appropriate handler class for a file extension."""
    ext = extension.lower()
    if ext not in HANDLER_MAP:
        raise ValueError(
            f"Unsupported file format: {ext}. "
            f"Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}"
        )
    return HANDLER_MAP[ext]
