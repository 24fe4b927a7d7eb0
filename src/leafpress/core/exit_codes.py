# topmark:header:start
#
#   project      : LeafPress
#   file         : exit_codes.py
#   file_relpath : src/leafpress/core/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the LeafPress CLI.

LeafPress aligns with the BSD `sysexits` convention where practical, so that other
tooling can interpret failures consistently.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the LeafPress CLI.

    Attributes:
        SUCCESS: The build completed (recoverable warnings may have been reported).
        FAILURE: Generic failure (non-specific error). Prefer a more specific
            code if available.
        USAGE_ERROR: Command-line invocation error (invalid flags/args). Mirrors
            BSD ``EX_USAGE (64)``.
        FILE_NOT_FOUND: Content directory or config file does not exist. Mirrors
            BSD ``EX_NOINPUT (66)``.
        PIPELINE_ERROR: Internal pipeline failure. Mirrors BSD ``EX_SOFTWARE (70)``.
        IO_ERROR: I/O error writing output artifacts. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Configuration error (missing/invalid/malformed config).
            Mirrors BSD ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    PIPELINE_ERROR = 70  # EX_SOFTWARE
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG
