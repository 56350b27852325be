class NoExtractionPossibleError(Exception):
    """Raised when no strategy recovered a single field from the document."""

    code = "no_extraction_possible"

    def __init__(self, message: str = "No F29 field could be recovered from the document.") -> None:
        super().__init__(message)
