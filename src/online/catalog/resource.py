"""
Online resources attached to series and messages.

A resource is a link to reference material (pdf, document, video, web
page). Resources are written in the source spreadsheet in one of three
forms, optionally with a JSON object of metadata embedded anywhere:

- Raw URL: "http://host/path+to+file.doc" (name is taken from the file name)
- Markdown: "[name](url)"
- Wiki: "name|url"
"""

from __future__ import annotations

import json
import posixpath
from dataclasses import dataclass, field
from urllib.parse import unquote_plus, urlparse

# Cell values that mean "no resources"
EMPTY_MARKERS = {"-", "n/a"}


@dataclass
class OnlineResource:
    """A link to reference material. Only url, name and metadata are persisted."""

    url: str = ""
    name: str = ""
    metadata: dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, text: str) -> OnlineResource:
        """Parse one resource definition. Blank text gives an empty resource."""
        text, metadata = extract_metadata(text)
        text = text.strip()
        resource = cls(metadata=metadata)

        if not text:
            return resource

        if "|" in text:
            name, _, url = text.partition("|")
            resource.name = name.strip()
            resource.url = url.strip()
        elif text.startswith("[") and "](" in text and text.endswith(")"):
            name, _, url = text[1:-1].partition("](")
            resource.name = name.strip()
            resource.url = url.strip()
        else:
            resource.url = text
            resource.name = name_from_url(text)

        return resource

    @classmethod
    def parse_many(cls, text: str) -> list[OnlineResource]:
        """Parse a semicolon-separated list of resources, skipping blanks."""
        text = (text or "").strip()
        if text.lower() in EMPTY_MARKERS:
            return []

        resources = []
        for part in text.split(";"):
            resource = cls.parse(part)
            if resource.url:
                resources.append(resource)
        return resources

    def has_url(self) -> bool:
        return "://" in self.url

    @property
    def display_name(self) -> str:
        return self.name or name_from_url(self.url)

    @property
    def file_name(self) -> str:
        """Last path segment of the URL."""
        path = urlparse(self.url).path
        return posixpath.basename(path) if path else self.url

    @property
    def thumbnail(self) -> str:
        """Image that can stand in for the resource."""
        if "youtube" in self.url or "youtu.be" in self.url:
            return "static/all.thumbnail_youtube_light.png"
        if "rumble" in self.url:
            return "static/all.thumbnail_rumble_light.png"
        if "bitchute" in self.url:
            return "static/all.thumbnail_bitchute.png"
        return "static/all.thumbnail_video.png"

    @property
    def icon(self) -> str:
        """Small icon decorating a link to the resource."""
        for suffixes, icon in _ICONS:
            if self.url.endswith(suffixes):
                return icon
        if "youtube" in self.url or "youtu.be" in self.url:
            return "static/all.icon_youtube.png"
        return "static/all.icon_web.png"

    @property
    def classifier(self) -> str:
        """Short description of what clicking the resource will do."""
        if self.url.endswith(".pdf"):
            return "PDF file"
        if "youtube" in self.url or "youtu.be" in self.url:
            return "YouTube video"
        if "rumble" in self.url:
            return "Rumble video"
        if "bitchute" in self.url:
            return "BitChute video"
        return "Internet link"

    @property
    def embedded_url(self) -> str:
        """URL suitable for an iframe."""
        if "//youtu.be/" in self.url:
            return self.url.replace("//youtu.be/", "//www.youtube.com/embed/")
        if "//rumble.com/" in self.url:
            # rumble embeds use a different id than direct links
            return self.metadata.get("iframe", self.url)
        return self.url


_ICONS = [
    ((".pdf",), "static/all.icon_pdf.png"),
    ((".mp3",), "static/all.icon_mp3.png"),
    ((".wmv",), "static/all.icon_wmv.png"),
    ((".mov",), "static/all.icon_mov.png"),
    ((".doc", ".docx"), "static/all.icon_word.png"),
]


def name_from_url(url: str) -> str:
    """Build a human-readable name from the last segment of a URL.

    The extension is dropped and '+', '%20' and '_' become spaces.
    """
    name = url.rstrip("/").rsplit("/", 1)[-1]

    dot = name.rfind(".")
    if dot != -1:
        name = name[:dot]

    name = unquote_plus(name)
    return name.replace("_", " ")


def _metadata_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def extract_metadata(text: str) -> tuple[str, dict[str, str]]:
    """Pull an embedded JSON object out of a resource definition.

    Everything from the first '{' to the last '}' is treated as metadata. If
    that is not a valid JSON object the text is returned unchanged.

    Args:
        text: Resource definition, e.g. 'https://youtu.be/999 {"id":"999"}'

    Returns:
        (text without metadata, metadata dict)
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return text, {}

    try:
        parsed = json.loads(text[start : end + 1])
    except json.JSONDecodeError:
        return text, {}
    if not isinstance(parsed, dict):
        return text, {}

    metadata = {str(k): _metadata_value(v) for k, v in parsed.items()}
    return text[:start] + text[end + 1 :], metadata
