"""
Module containing helpers for traversing paginated OpenStack list responses.
"""

import logging

from .. import errors

logger = logging.getLogger(__name__)


class PagerExhausted(RuntimeError):  # noqa: N818
    """
    Raised when a page is requested from a pager that has no more pages.
    """


class Page:
    """
    Base class for a single page of results.
    """

    def __init__(self, url, body):
        self.url = url
        self.body = body

    def next_page_url(self):
        """
        Returns the URL of the next page, or ``None`` if this is the last page.
        """
        return None

    def is_empty(self):
        raise NotImplementedError

    def items(self):
        """
        Returns the items on this page.
        """
        raise NotImplementedError


class LinkedPage(Page):
    """
    Page whose next page is given by a link with ``rel`` set to ``next``.
    """

    #: The key in the response body containing the links
    links_key = "links"

    def next_page_url(self):
        if not isinstance(self.body, dict):
            raise errors.DecodeError("Expected an object in the response")
        try:
            return next(
                (
                    link["href"]
                    for link in self.body.get(self.links_key) or []
                    if link.get("rel") == "next"
                ),
                None,
            )
        except (AttributeError, KeyError, TypeError) as exc:
            raise errors.DecodeError(f"Invalid links in response: {exc!r}") from exc


class Pager:
    """
    Fetches pages of results one at a time, following next links.

    The first page is fetched from ``url``. Each subsequent page is fetched from the
    next link of the page before it. If ``err`` is given, the first fetch raises it.
    """

    def __init__(self, service, url, page_cls, err = None):
        self.service = service
        self.url = url
        self.page_cls = page_cls
        self.err = err
        self._fetched = False

    def has_next(self):
        """
        Returns ``True`` if there is another page to fetch.
        """
        return not self._fetched or self.url is not None

    def next_page(self):
        """
        Fetch and return the next page.
        """
        if self.err:
            raise self.err
        if not self.has_next():
            raise PagerExhausted("No more pages")
        logger.debug("Fetching page from %s", self.url)
        response = self.service.request("GET", self.url, {200})
        page = self.page_cls(self.url, self.service.decode(response))
        # An empty page, or a next link back to the same page, ends the sequence
        next_url = None if page.is_empty() else page.next_page_url()
        if next_url == self.url:
            logger.debug("Next link for %s points to the same page", self.url)
            next_url = None
        self._fetched = True
        self.url = next_url
        return page

    def __iter__(self):
        while self.has_next():
            yield self.next_page()

    def each_page(self, handler):
        """
        Call the handler with each page in turn until the handler returns ``False`` or
        there are no more pages.
        """
        for page in self:
            if handler(page) is False:
                break

    def all_pages(self):
        """
        Fetch all the remaining pages and return the combined items.
        """
        return [item for page in self for item in page.items()]
