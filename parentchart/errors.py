"""Exceptions raised while updating the parent chart."""


class ChartUpdateError(Exception):
    """Base class for every failure that aborts a chart update run."""


class PreconditionError(ChartUpdateError):
    """A required tool or setting is missing before any work starts."""


class VersionParseError(ChartUpdateError, ValueError):
    """A version string is not in major.minor.patch form."""


class ChartManifestError(ChartUpdateError):
    """The parent chart manifest is missing or not a YAML mapping."""


class DependencyExistsError(ChartUpdateError):
    """A dependency with the same name is already pinned in the chart."""


class CommandError(ChartUpdateError):
    """An external command exited with a non-zero status."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.command = command or []
        self.returncode = returncode
        self.stderr = stderr

    def __str__(self) -> str:
        message = super().__str__()
        if self.stderr:
            return f"{message}: {self.stderr.strip()}"
        return message


class RegistryAuthError(CommandError):
    """Logging in to the OCI chart registry failed."""


class DependencyFetchError(CommandError):
    """`helm dependency update` failed."""


class GitOperationError(CommandError):
    """A git command failed."""
