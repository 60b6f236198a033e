"""Composition of the published HTML document from uploaded assets.

Optional assets are woven into the HTML shell at fixed markers:
- favicon: right after the opening <head>
- CSS: right before </head>
- JS: right before </body>

Only the first occurrence of a marker is used. A missing marker for an
asset that was supplied raises MalformedDocumentError instead of silently
dropping the asset.
"""

from dataclasses import dataclass

from domain.model.errors import MalformedDocumentError

HEAD_OPEN = '<head>'
HEAD_CLOSE = '</head>'
BODY_CLOSE = '</body>'


@dataclass(frozen=True)
class SiteAssets:
    """Raw uploaded content for one site."""
    html: str
    css: str | None = None
    js: str | None = None
    favicon: str | None = None  # base64-encoded .ico payload


def _insert(document: str, marker: str, replacement: str, asset: str) -> str:
    if marker not in document:
        raise MalformedDocumentError(asset, marker)
    return document.replace(marker, replacement, 1)


def compose_document(assets: SiteAssets) -> str:
    document = assets.html

    if assets.favicon:
        document = _insert(
            document, HEAD_OPEN,
            f'{HEAD_OPEN}\n    <link rel="icon" href="data:image/x-icon;base64,{assets.favicon}">',
            'favicon',
        )

    if assets.css:
        document = _insert(document, HEAD_CLOSE, f'<style>{assets.css}</style>{HEAD_CLOSE}', 'css')

    if assets.js:
        document = _insert(document, BODY_CLOSE, f'<script>{assets.js}</script>{BODY_CLOSE}', 'js')

    return document
