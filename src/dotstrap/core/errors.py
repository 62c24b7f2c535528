"""Module defining custom exceptions for dotstrap."""

from __future__ import annotations

from typing import Any, Self

# Exit Codes
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1
EXIT_SYSTEM_ERROR = 2


class DotstrapError(Exception):
    """Base exception class with context propagation.

    All exceptions in dotstrap should inherit from this class.
    Context is a dictionary that accumulates relevant information
    as the exception propagates up the call stack.

    Example:
        raise DotstrapError("An error occurred", context={"package": "foo"})

        # Or with context propagation
        try:
            ...
        except DotstrapError as e:
            raise e.with_context(manifest="packages.yaml")
    """
    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def with_context(self, **new_context: Any) -> Self:
        """Returns the exception with updated context.

        Args:
            **new_context: Additional context to add to the exception.

        Returns:
            The same exception instance with merged context.
        """
        self.context.update(new_context)
        return self

    def __str__(self) -> str:
        """String representation of the exception including context."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{context_str}]"
        return self.message


class UserError(DotstrapError):
    """Errors caused by user actions or inputs.

    These errors indicate that the user has made a mistake or provided
    invalid input, such as a missing or malformed manifest, and should
    not be retried without correction.
    """
    pass


class SystemError(DotstrapError):
    """Errors due to system-level issues.

    These errors indicate problems with the host environment, such as an
    unsupported operating system or a missing package manager.

    CLI should display diagnostic information for troubleshooting.
    """
    pass


## Specific Exceptions ##

class ManifestNotFoundError(UserError):
    """The package manifest does not exist."""
    def __init__(
        self,
        message: str | None = None,
        path: str | None = None,
        context: dict[str, Any] | None = None
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path

        if message is None:
            message = f"Manifest not found at {path or 'unknown path'}"

        super().__init__(message, context=ctx)


class ManifestParseError(UserError):
    """The package manifest is structurally invalid.

    Typically indicates:
        - YAML syntax errors
        - An entry that is not a mapping
        - A missing or empty package name
        - Non-boolean gui/work flags
        - Unknown override keys
    """
    def __init__(
        self,
        message: str | None = None,
        path: str | None = None,
        index: int | None = None,
        field: str | None = None,
        context: dict[str, Any] | None = None
    ) -> None:
        """Initialise ManifestParseError with detailed context.

        Args:
            message: Optional custom error message.
            path: The manifest path.
            index: Position of the offending entry.
            field: Name of the offending field.
            context: Additional context information.
        """
        ctx = context or {}
        if path:
            ctx["path"] = path
        if index is not None:
            ctx["index"] = index
        if field:
            ctx["field"] = field

        if message is None:
            message = "Manifest is invalid"

        super().__init__(message, context=ctx)


class UnsupportedPlatformError(SystemError):
    """No installer is defined for this platform.

    Raised before a run when the operating system itself is unsupported,
    and per entry when a platform has no backend for a package kind
    (e.g. CLI packages on non-Fedora Linux).
    """
    def __init__(
        self,
        message: str | None = None,
        platform: str | None = None,
        context: dict[str, Any] | None = None
    ) -> None:
        ctx = context or {}
        if platform:
            ctx["platform"] = platform

        if message is None:
            message = f"Unsupported platform: {platform or 'unknown'}"

        super().__init__(message, context=ctx)


class BackendMissingError(SystemError):
    """A required package manager binary is not installed.

    This aborts the run before any package is touched.
    """
    def __init__(
        self,
        message: str | None = None,
        binary: str | None = None,
        family: str | None = None,
        context: dict[str, Any] | None = None
    ) -> None:
        ctx = context or {}
        if binary:
            ctx["binary"] = binary
        if family:
            ctx["family"] = family

        if message is None:
            message = f"Required package manager '{binary or 'unknown'}' not found"

        super().__init__(message, context=ctx)


# CLI Error Message Templates

ERROR_TEMPLATES = {
    ManifestNotFoundError: (
        "✗ Manifest not found: {path}\n"
        "   Pass --manifest or set DOTSTRAP_MANIFEST"
    ),
    ManifestParseError: (
        "✗ Invalid manifest: {message}\n"
        "   Location: {path}"
    ),
    UnsupportedPlatformError: (
        "⚠ Unsupported platform: {platform}\n"
        "   {message}"
    ),
    BackendMissingError: (
        "⚠ Package manager not found: {binary}\n"
        "   Needed for {family} packages"
    ),
    UserError: (
        "✗ {message}"
    ),
    SystemError: (
        "⚠ System error: {message}\n"
        "   Please check your system configuration and try again"
    ),
    DotstrapError: (
        "✗ {message}"
    ),
}

def format_error_message(error: DotstrapError) -> str:
    """Formats an error message for CLI display based on the error type.

    Args:
        error: The DotstrapError instance to format.

    Returns:
        A formatted string message for CLI display.
    """
    template = ERROR_TEMPLATES.get(type(error), ERROR_TEMPLATES[DotstrapError])
    try:
        return template.format(message=error.message, **getattr(error, "context", {}))
    except KeyError:
        return f"✗ {error.message}"

def suggest_fix(error: DotstrapError) -> str | None:
    """Suggest a fix for errors that have a well-known remedy.

    Args:
        error: The error to suggest a fix for.

    Returns:
        Formatted suggestion string, or None.
    """
    if isinstance(error, BackendMissingError):
        binary = error.context.get("binary")
        if binary == "brew":
            return (
                "\n💡 Suggestions:\n"
                "   • Install Homebrew from https://brew.sh\n"
                "   • Re-run once 'brew' is on your PATH\n"
            )
        return (
            "\n💡 Suggestions:\n"
            f"   • Install '{binary}' with your system package manager\n"
            "   • Or use --force-brew to install via Homebrew on Linux\n"
        )
    if isinstance(error, UnsupportedPlatformError):
        return (
            "\n💡 Suggestions:\n"
            "   • Use --force-brew to install via Homebrew on Linux\n"
            "   • Or install packages manually for your distribution\n"
        )
    if isinstance(error, ManifestParseError):
        return "\n💡 Check the entry against the manifest format in packages.yaml\n"
    return None
