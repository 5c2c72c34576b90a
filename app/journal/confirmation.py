from dataclasses import dataclass

from app.journal.exceptions import EmptyContentError


@dataclass
class ContentConfirmation:
    """Text extracted from a document, awaiting the user's edit or approval."""

    document_id: str
    extracted_text: str
    edited_text: str | None = None

    @property
    def content(self) -> str:
        return self.edited_text if self.edited_text is not None else self.extracted_text

    @property
    def is_edited(self) -> bool:
        return self.edited_text is not None and self.edited_text != self.extracted_text

    def edit(self, text: str) -> None:
        self.edited_text = text

    def approve(self) -> str:
        """Return the text to analyse.

        Raises:
            EmptyContentError: if nothing but whitespace is left.
        """
        content = self.content.strip()
        if not content:
            raise EmptyContentError(
                f"No content to analyze from document {self.document_id}"
            )
        return content
