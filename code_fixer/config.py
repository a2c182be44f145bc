"""Configuration for Code Fixer."""

from dataclasses import dataclass, field
from typing import Optional, Tuple
import os


CODE_EXTENSIONS = (
    ".js", ".jsx", ".ts", ".tsx", ".py", ".java",
    ".cpp", ".c", ".go", ".rs", ".php", ".rb",
)


@dataclass
class FixerConfig:
    """Configuration for repository scanning and the HTTP service."""

    # GitHub settings
    github_token: Optional[str] = None
    branch_prefix: str = "code-fixer/"  # Branch name prefix for pushed fixes

    # File selection
    max_file_bytes: int = 100_000  # Files at or above this size are skipped
    max_files: int = 20            # Files fetched per repository
    code_extensions: Tuple[str, ...] = field(default=CODE_EXTENSIONS)

    # Parallel processing
    max_parallel: int = 5

    # HTTP service
    host: str = "0.0.0.0"
    port: int = 3001

    @classmethod
    def from_env(cls) -> "FixerConfig":
        """Create config from environment variables."""
        return cls(
            github_token=os.environ.get("GITHUB_TOKEN"),
            branch_prefix=os.environ.get("FIX_BRANCH_PREFIX", "code-fixer/"),
            max_file_bytes=int(os.environ.get("MAX_FILE_BYTES", "100000")),
            max_files=int(os.environ.get("MAX_FILES", "20")),
            max_parallel=int(os.environ.get("MAX_PARALLEL", "5")),
            host=os.environ.get("HOST", "0.0.0.0"),
            port=int(os.environ.get("PORT", "3001")),
        )


# Default configuration
DEFAULT_CONFIG = FixerConfig()
