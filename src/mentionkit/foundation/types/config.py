"""Configuration type definitions - single source of truth for all config classes."""


from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Ranking and request-coalescing settings."""

    max_file_results: int = 50
    """Default cap for file mention results."""

    max_symbol_results: int = 20
    """Default cap for symbol mention results."""

    fuzzy_threshold: float = -100_000.0
    """Score floor for file matches. Tuned for performance, not relevance."""

    low_scoring_segments: tuple[str, ...] = ("bin",)
    """Path segments that push a file down unless the query names them."""

    low_score_penalty: float = 100_000.0
    """Score subtracted from files containing a low-scoring segment."""

    symbol_trigger: str = "#"
    """Leading character stripped from symbol queries."""

    vendor_path_markers: tuple[str, ...] = ("node_modules/",)
    """Symbols whose path contains one of these are never offered."""

    find_files_throttle_seconds: float = 10.0
    """Window for the shared full-workspace file scan."""

    remote_debounce_seconds: float = 0.5
    """Quiet period before a remote file/symbol search is sent."""


@dataclass(frozen=True, slots=True)
class EligibilityConfig:
    """Size gate applied to file items before they are offered."""

    max_file_bytes: int = 1_000_000
    """Files larger than this are never offered."""

    markdown_bytes_per_token: float = 3.5
    """Divisor for the rough token estimate of markdown files."""

    default_bytes_per_token: float = 4.5
    """Divisor for the rough token estimate of every other file."""

    markdown_extensions: tuple[str, ...] = (".md",)


@dataclass(frozen=True, slots=True)
class WorkspaceConfig:
    """Settings for the bundled filesystem workspace."""

    exclude: tuple[str, ...] = field(default_factory=lambda: (
        ".git",
        "node_modules",
        "__pycache__",
        ".venv",
        "venv",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
        ".mentionkit",
    ))
    """Directory names skipped while enumerating files."""

    ignore: tuple[str, ...] = ()
    """Glob patterns (relative paths) that may never be used as context."""

    flag: tuple[str, ...] = ()
    """Glob patterns of files that are listed but marked ignored."""

    ignored_repositories: tuple[str, ...] = ()
    """Glob patterns of remote repository names that may never be used."""


@dataclass(frozen=True, slots=True)
class TokenConfig:
    """Token counting settings."""

    encoding: str = "cl100k_base"
    """tiktoken encoding used for exact item sizes."""
