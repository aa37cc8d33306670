"""Abstract base classes for host documents and file format handlers."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from type_harvest.formatting.ir import StyleRun, TextBlock


class StyledTextSource(ABC):
    """Read-only view of a host document's selected text.

    The host owns the blocks and their runs; extraction only reads them
    for the duration of one call.
    """

    @abstractmethod
    def selection(self) -> list[TextBlock]:
        """Return the selected text blocks (unordered, unique by id)."""
        ...

    @abstractmethod
    def query_runs(
        self, block_id: str, attributes: Sequence[str]
    ) -> list[StyleRun]:
        """Return the styled runs of a block for the requested attributes.

        Args:
            block_id: Identifier of a block returned by selection()
            attributes: Attribute names to populate (see RENDER_ATTRIBUTES)

        Returns:
            Ordered, non-overlapping runs covering the whole block. Each run
            is a maximal range sharing the requested attributes; attributes
            that were not requested keep their "absent" defaults.
        """
        ...


class FormatHandler(ABC):
    """Abstract base class for document format handlers.

    Each handler reads one kind of file into a StyledTextSource.
    """

    @property
    @abstractmethod
    def supported_extensions(self) -> tuple[str, ...]:
        """Return tuple of supported file extensions (e.g., ('.docx',))."""
        ...

    @abstractmethod
    def read(self, path: Path) -> StyledTextSource:
        """Load a document.

        Args:
            path: Path to the input document

        Returns:
            A source whose selection covers the document's text
        """
        ...
