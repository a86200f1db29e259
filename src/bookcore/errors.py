# ABOUTME: Fatal error taxonomy for book parsing.
# ABOUTME: Every failure that aborts a parse is a BookParseError subclass carrying its context.


class BookParseError(Exception):
    """Base class for failures that abort a parse."""


class ArchiveCorruptError(BookParseError):
    """Raised when the zip central directory cannot be read."""


class EntryMissingError(BookParseError):
    """Raised when no archive entry matches a path exactly."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Archive entry not found: {path}")


class EntryUndecodableError(BookParseError):
    """Raised when an entry (or a plain-text body) cannot be decoded as text."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        message = f"Cannot decode {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class MissingRootfileError(BookParseError):
    """Raised when an EPUB does not point to its package document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Invalid EPUB: {reason} ({path})")


class NoFb2EntryFoundError(BookParseError):
    """Raised when a zip-wrapped FB2 archive holds no .fb2 entry."""


class InvalidFb2RootError(BookParseError):
    """Raised when an FB2 document has no FictionBook root element."""

    def __init__(self, root_name: str) -> None:
        self.root_name = root_name
        super().__init__(f"Invalid FB2 format: unexpected root element <{root_name}>")


class XmlMalformedError(BookParseError):
    """Raised when an XML document does not parse at all."""

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        self.parser_message = message
        prefix = f"Malformed XML in {source}" if source else "Malformed XML"
        super().__init__(f"{prefix}: {message}")


class EmptyExtractionError(BookParseError):
    """Raised when well-formed input yields no usable text."""


class UnsupportedTypeError(BookParseError):
    """Raised when the declared format is not one the parser handles."""

    def __init__(self, declared_type: str) -> None:
        self.declared_type = declared_type
        super().__init__(f"Unsupported file type: {declared_type}")
