"""Update-check preview — a "new version available" record without the network.

Live release checking is disabled for privacy.  The only way to surface an
update banner is the debug query parameter ``?preview-update=X.Y.Z``, which
builds the record locally from a release-tag URL template and an injected
feature-highlight table.

This module is pinned to a zero-violation egress audit, so it must never
spell out a release-checking endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping
from urllib.parse import parse_qs

PREVIEW_PARAM = "preview-update"

RELEASE_URL_TEMPLATE = "https://github.com/backnotprop/plannotator/releases/tag/v{version}"

DEFAULT_CURRENT_VERSION = "0.0.0"


@dataclass(frozen=True, slots=True)
class FeatureHighlight:
    title: str
    description: str


@dataclass(frozen=True, slots=True)
class UpdateInfo:
    current_version: str
    latest_version: str
    update_available: bool
    release_url: str
    feature_highlight: FeatureHighlight | None = None

    def to_dict(self) -> dict:
        d: dict = {
            "current_version": self.current_version,
            "latest_version": self.latest_version,
            "update_available": self.update_available,
            "release_url": self.release_url,
        }
        if self.feature_highlight is not None:
            d["feature_highlight"] = {
                "title": self.feature_highlight.title,
                "description": self.feature_highlight.description,
            }
        return d


# Highlights for milestone releases, keyed by exact version (no leading "v").
DEFAULT_FEATURE_HIGHLIGHTS: Mapping[str, FeatureHighlight] = {
    "0.5.0": FeatureHighlight(
        title="Code Review is here!",
        description=(
            "Review git diffs with inline annotations. "
            "Run /plannotator-review to try it."
        ),
    ),
}


def _query_of(url: str) -> str:
    # Same view as window.location.search: everything between "?" and "#".
    # A bare "a=b" string counts as the query itself.
    url = url.partition("#")[0]
    if "?" in url:
        return url.partition("?")[2]
    if "://" in url or "/" in url:
        return ""
    return url


def preview_version(url: str) -> str | None:
    """Raw ``preview-update`` value from *url*, or None when absent or empty."""
    values = parse_qs(_query_of(url), keep_blank_values=True).get(PREVIEW_PARAM)
    if not values or not values[0]:
        return None
    return values[0]


def preview_update(
    url: str,
    *,
    current_version: str = DEFAULT_CURRENT_VERSION,
    highlights: Mapping[str, FeatureHighlight] | None = None,
) -> UpdateInfo | None:
    """Simulated update record for *url*, or None outside preview mode.

    ``latest_version`` keeps the parameter exactly as given; the release URL
    and the highlight lookup use it with one leading ``v`` removed.
    """
    raw = preview_version(url)
    if raw is None:
        return None

    table = DEFAULT_FEATURE_HIGHLIGHTS if highlights is None else highlights
    clean = raw[1:] if raw.startswith("v") else raw
    return UpdateInfo(
        current_version=current_version,
        latest_version=raw,
        update_available=True,
        release_url=RELEASE_URL_TEMPLATE.format(version=clean),
        feature_highlight=table.get(clean),
    )
