"""Hardened XML parsing shared by every XML based parser.

External entities, the external DTD subset and parameter entities are never
resolved: an external entity reference resolves to an empty document instead
of fetching anything from disk or network.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, TextIO
from xml.parsers import expat

CHUNK_SIZE = 64 * 1024


class XmlSyntaxError(ValueError):
    """Raised when a document is not well-formed XML."""


@dataclass
class XmlEvent:
    kind: str  # "start" or "end"
    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    text: str = ""


def _skip_external_entity(context, base, system_id, public_id) -> int:
    # Report success without reading anything
    return 1


def create_secure_xml_parser() -> expat.XMLParserType:
    parser = expat.ParserCreate()
    parser.SetParamEntityParsing(expat.XML_PARAM_ENTITY_PARSING_NEVER)
    parser.UseForeignDTD(False)
    parser.ExternalEntityRefHandler = _skip_external_entity
    parser.buffer_text = True
    return parser


def iter_xml_events(stream: TextIO) -> Iterator[XmlEvent]:
    """Stream start/end events of the document in *stream*.

    End events carry the attributes of the element and its direct text
    content (stripped of surrounding whitespace).
    """
    parser = create_secure_xml_parser()
    pending: list[XmlEvent] = []
    open_elements: list[tuple[dict[str, str], list[str]]] = []

    def start(tag: str, attributes: dict[str, str]) -> None:
        open_elements.append((attributes, []))
        pending.append(XmlEvent("start", tag, attributes))

    def end(tag: str) -> None:
        attributes, text = open_elements.pop()
        pending.append(XmlEvent("end", tag, attributes, "".join(text).strip()))

    def character_data(data: str) -> None:
        if open_elements:
            open_elements[-1][1].append(data)

    parser.StartElementHandler = start
    parser.EndElementHandler = end
    parser.CharacterDataHandler = character_data

    try:
        while True:
            chunk = stream.read(CHUNK_SIZE)
            parser.Parse(chunk, not chunk)
            yield from pending
            pending.clear()
            if not chunk:
                break
    except expat.ExpatError as e:
        raise XmlSyntaxError(str(e)) from e
