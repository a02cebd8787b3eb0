"""
Errors shared by the merger and the atomic writer.
"""

from __future__ import annotations

from ..diagnostics import CaseIterableError


class CodeMergeError(CaseIterableError):
    """Raised when splicing generated code into a module fails.

    This can happen when:
    - The existing module cannot be parsed
    - The enumeration to splice into is not in the module
    - Validation fails after the splice
    """
