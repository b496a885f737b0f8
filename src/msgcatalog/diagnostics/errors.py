"""msgcatalog exception hierarchy with structured diagnostics.

Configuration mistakes (unknown plugin names) fail fast and loudly.
Missing translations are NOT errors: the facade renders visible fallback
text instead, so nothing in this module is raised for them.

Python 3.13+. Zero external dependencies.
"""

from msgcatalog.enums import PluginKind

from .codes import Diagnostic, ErrorCode


class CatalogError(Exception):
    """Base exception for all msgcatalog errors.

    Attributes:
        diagnostic: Structured diagnostic information
        code: Error code of the diagnostic
    """

    def __init__(self, diagnostic: Diagnostic) -> None:
        """Initialize CatalogError.

        Args:
            diagnostic: Diagnostic describing the failure
        """
        self.diagnostic = diagnostic
        super().__init__(diagnostic.format_error())

    @property
    def code(self) -> ErrorCode:
        """Error code of the underlying diagnostic."""
        return self.diagnostic.code


class PluginNotFoundError(CatalogError):
    """No factory is registered for a ``(kind, name)`` pair.

    Attributes:
        kind: Plugin kind that was looked up
        name: Plugin name that was looked up
    """

    def __init__(self, kind: PluginKind, name: str, diagnostic: Diagnostic) -> None:
        """Initialize PluginNotFoundError.

        Args:
            kind: Plugin kind that was looked up
            name: Plugin name that was looked up
            diagnostic: Diagnostic describing the failure
        """
        super().__init__(diagnostic)
        self.kind = kind
        self.name = name


class UnknownLoaderError(PluginNotFoundError):
    """A configured and enabled loader has no registry entry.

    Raised by CatalogManager.load_messages() before any loader runs.
    The previously published catalog stays in place.
    """

    def __init__(self, name: str) -> None:
        """Initialize UnknownLoaderError.

        Args:
            name: Loader name from configuration
        """
        diagnostic = Diagnostic(
            code=ErrorCode.INVALID_LOADER,
            message=f'Invalid loader "{name}"',
            hint="Register the loader with CatalogManager.extend() or disable it",
            source=name,
        )
        super().__init__(PluginKind.LOADER, name, diagnostic)


class InvalidFormatterError(PluginNotFoundError):
    """The configured ``messages_format`` has no registry entry.

    Raised by CatalogManager.locale(), independent of loaded data.
    """

    def __init__(self, name: str) -> None:
        """Initialize InvalidFormatterError.

        Args:
            name: Formatter name from configuration
        """
        diagnostic = Diagnostic(
            code=ErrorCode.INVALID_FORMATTER,
            message=f'Invalid formatter "{name}"',
            hint="Register the formatter with CatalogManager.extend()",
            source=name,
        )
        super().__init__(PluginKind.FORMATTER, name, diagnostic)


class CatalogFormatError(CatalogError):
    """Loader output or a catalog file does not have the catalog shape.

    A catalog is a mapping of locale code to a mapping of message identifier
    to template string.
    """

    def __init__(self, message: str, *, source: str | None = None) -> None:
        """Initialize CatalogFormatError.

        Args:
            message: What is wrong with the data
            source: Loader name or file path that produced the data
        """
        diagnostic = Diagnostic(
            code=ErrorCode.INVALID_CATALOG,
            message=message if source is None else f"{message} (source: {source})",
            source=source,
        )
        super().__init__(diagnostic)
        self.source = source


class MessageFormatError(CatalogError):
    """A template could not be parsed or rendered with the given data.

    Raised by formatters and propagated unmasked through
    LocaleFacade.format_message().

    Attributes:
        template: Template that failed
        locale_code: Locale used for rendering
    """

    def __init__(self, message: str, *, template: str = "", locale_code: str = "") -> None:
        """Initialize MessageFormatError.

        Args:
            message: What went wrong
            template: Template that failed
            locale_code: Locale used for rendering
        """
        diagnostic = Diagnostic(
            code=ErrorCode.FORMAT_FAILED,
            message=message,
            locale=locale_code or None,
        )
        super().__init__(diagnostic)
        self.template = template
        self.locale_code = locale_code
