"""Default egress policy — the table every scan starts from.

Policy files override individual keys; anything they leave out comes from
here.  Keep this file out of the scan roots: it necessarily spells out the
very literals the audit forbids.
"""

from __future__ import annotations

# External endpoints that must not appear in production code.
DEFAULT_FORBIDDEN_LITERALS: tuple[str, ...] = (
    "https://share.plannotator.ai",
    "https://api.github.com",
    "https://fonts.googleapis.com",
    "https://fonts.gstatic.com",
    "https://cdnjs.cloudflare.com",
)

# Directories scanned when no roots are given (relative to the project root).
DEFAULT_ROOTS: tuple[str, ...] = (
    "packages/ui",
    "packages/server",
    "packages/editor",
    "packages/review-editor",
    "apps/hook",
)

DEFAULT_EXCLUDES: tuple[str, ...] = (
    "substring:node_modules",
    "suffix:.test.ts",
    "suffix:.spec.ts",
    "substring:dist/",
    "substring:.git",
    # Marketing site may load external resources.
    "substring:marketing",
)

DEFAULT_EXTENSIONS: frozenset[str] = frozenset(
    {".ts", ".tsx", ".js", ".jsx", ".html", ".css"}
)

# Files held to a zero-violation contract independently of the tree scan.
DEFAULT_PINNED_FILES: tuple[str, ...] = (
    "packages/ui/utils/sharing.ts",
    "packages/ui/hooks/useUpdateCheck.ts",
    "apps/hook/index.html",
)

DEFAULT_JOBS = 1
