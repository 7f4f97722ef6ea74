"""Feed parsing entry points.

Tokenizing is done by ``defusedxml.sax`` (expat with entity expansion and
external references disabled). ``_FeedEventHandler`` turns its SAX callbacks
into the document builder's open/text/close/end events.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union
from xml.sax import SAXException, SAXParseException
from xml.sax.handler import ContentHandler, LexicalHandler, property_lexical_handler
from xml.sax.xmlreader import AttributesImpl

from defusedxml import DefusedXmlException
from defusedxml.sax import make_parser

from . import config_constants, downloader, models
from .builder import FeedDocumentBuilder
from .config import ParserOptions
from .exceptions import FeedFetchError, MalformedDocumentError

logger = logging.getLogger(__name__)

FeedSource = Union[str, bytes]


class _FeedEventHandler(ContentHandler, LexicalHandler):
    """Adapts SAX callbacks to the document builder's event interface.

    expat reports one text node as many ``characters()`` calls (at newlines,
    entity references, buffer boundaries). Those are buffered and delivered as
    one text event, flushed at element, CDATA, comment and processing
    instruction boundaries.
    """

    def __init__(self, builder: FeedDocumentBuilder, options: ParserOptions) -> None:
        super().__init__()
        self._builder = builder
        self._options = options
        self._buffer: List[str] = []

    def _name(self, name: str) -> str:
        return name.lower() if self._options.lowercase else name

    def _flush_text(self) -> None:
        if not self._buffer:
            return
        text = "".join(self._buffer)
        self._buffer = []
        if self._options.trim:
            text = text.strip()
        self._builder.text(text)

    def startElement(self, name: str, attrs: AttributesImpl) -> None:
        self._flush_text()
        attributes: Dict[str, str] = {self._name(key): value for key, value in attrs.items()}
        self._builder.open_tag(self._name(name), attributes)

    def endElement(self, name: str) -> None:
        self._flush_text()
        self._builder.close_tag(self._name(name))

    def characters(self, content: str) -> None:
        self._buffer.append(content)

    def processingInstruction(self, target: str, data: str) -> None:
        self._flush_text()

    def endDocument(self) -> None:
        self._flush_text()
        self._builder.end_document()

    def startCDATA(self) -> None:
        self._flush_text()

    def endCDATA(self) -> None:
        self._flush_text()

    def comment(self, content: str) -> None:
        self._flush_text()


def parse_feed(
    feed_xml: FeedSource,
    options: Optional[ParserOptions] = None,
    *,
    source: Optional[str] = None,
) -> models.Podcast:
    """Parse a complete feed document into a Podcast.

    Args:
        feed_xml: The whole document, as text or raw bytes. Bytes honor the
            encoding in the XML declaration.
        options: Tokenizer options; defaults to trimming and lowercasing.
        source: Optional feed location, used in error messages.

    Returns:
        The finalized podcast: episodes newest first, categories deduplicated,
        ``updated`` and ``owner`` always set.

    Raises:
        MalformedDocumentError: If the tokenizer rejects the document.

    Example:
        >>> podcast = parse_feed(xml_bytes)
        >>> podcast.episodes[0].duration
        3793
    """
    opts = options or ParserOptions()
    builder = FeedDocumentBuilder()
    handler = _FeedEventHandler(builder, opts)

    parser = make_parser()
    parser.setContentHandler(handler)
    parser.setProperty(property_lexical_handler, handler)

    try:
        parser.feed(feed_xml)
        parser.close()
    except SAXParseException as exc:
        raise MalformedDocumentError(
            exc.getMessage(),
            source=source,
            line=exc.getLineNumber(),
            column=exc.getColumnNumber(),
        ) from exc
    except (SAXException, DefusedXmlException) as exc:
        raise MalformedDocumentError(str(exc), source=source) from exc

    podcast = builder.result
    logger.debug(
        "Parsed feed %s: %d episodes", source or "<document>", len(podcast.episodes)
    )
    return podcast


def parse_feed_file(path: Union[str, Path], options: Optional[ParserOptions] = None) -> models.Podcast:
    """Read a feed document from disk and parse it.

    Raises:
        OSError: If the file cannot be read
        MalformedDocumentError: If the tokenizer rejects the document
    """
    feed_path = Path(path).expanduser()
    return parse_feed(feed_path.read_bytes(), options, source=str(feed_path))


def fetch_and_parse_feed(
    url: str,
    options: Optional[ParserOptions] = None,
    *,
    user_agent: str = config_constants.DEFAULT_USER_AGENT,
    timeout: int = config_constants.DEFAULT_TIMEOUT_SECONDS,
) -> models.Podcast:
    """Download a feed over HTTP and parse it.

    Raises:
        FeedFetchError: If the feed cannot be retrieved
        MalformedDocumentError: If the tokenizer rejects the document
    """
    feed_bytes = downloader.http_get(url, user_agent, timeout)
    if feed_bytes is None:
        raise FeedFetchError(url)
    return parse_feed(feed_bytes, options, source=url)
