from unittest import TestCase
from unittest.mock import patch

import requests

from .. import stacks
from ..api import PagerExhausted
from ..errors import DecodeError, UnexpectedStatusError, ValidationError
from .util import HEAT_URL, PROJECT_ID, make_connection, make_response


BASE_URL = f"{HEAT_URL}/v1/{PROJECT_ID}"


def stack_data(index):
    return {
        "id": f"stack-{index}",
        "stack_name": f"stack{index}",
        "stack_status": "CREATE_COMPLETE",
        "stack_status_reason": "Stack CREATE completed successfully",
        "description": "",
        "creation_time": "2015-02-03T20:07:39Z",
        "updated_time": None,
        "links": [{"href": f"{BASE_URL}/stacks/stack{index}/stack-{index}", "rel": "self"}],
    }


class ListTestCase(TestCase):

    def setUp(self):
        self.service = make_connection().orchestration
        patcher = patch.object(requests.Session, "send")
        self.send = patcher.start()
        self.addCleanup(patcher.stop)

    def test_single_page(self):
        self.send.return_value = make_response(200, {"stacks": [stack_data(1), stack_data(2)]})
        pager = stacks.list(self.service)
        self.assertTrue(pager.has_next())
        page = pager.next_page()
        self.assertFalse(pager.has_next())
        self.assertEqual(self.send.call_args[0][0].url, f"{BASE_URL}/stacks")
        self.assertEqual(self.send.call_args[0][0].method, "GET")
        self.assertFalse(page.is_empty())
        listed = page.extract_stacks()
        self.assertEqual([s.name for s in listed], ["stack1", "stack2"])
        self.assertEqual(listed[0].creation_time.month, 2)
        with self.assertRaises(PagerExhausted):
            pager.next_page()

    def test_next_link_is_followed(self):
        next_url = f"{BASE_URL}/stacks?marker=stack-1&limit=1"
        self.send.side_effect = [
            make_response(
                200,
                {"stacks": [stack_data(1)], "links": [{"href": next_url, "rel": "next"}]}
            ),
            make_response(200, {"stacks": [stack_data(2)]}),
        ]
        pager = stacks.list(self.service, stacks.ListOpts(limit=1))
        pages = list(pager)
        self.assertEqual(len(pages), 2)
        self.assertFalse(pager.has_next())
        urls = [call[0][0].url for call in self.send.call_args_list]
        self.assertEqual(urls, [f"{BASE_URL}/stacks?limit=1", next_url])
        self.assertEqual(pages[1].extract_stacks()[0].id, "stack-2")

    def test_all_pages(self):
        self.send.side_effect = [
            make_response(
                200,
                {
                    "stacks": [stack_data(1)],
                    "links": [{"href": f"{BASE_URL}/stacks?marker=stack-1", "rel": "next"}],
                }
            ),
            make_response(200, {"stacks": [stack_data(2)]}),
        ]
        items = stacks.list(self.service).all_pages()
        self.assertEqual([item["id"] for item in items], ["stack-1", "stack-2"])

    def test_each_page_stops(self):
        self.send.return_value = make_response(
            200,
            {
                "stacks": [stack_data(1)],
                "links": [{"href": f"{BASE_URL}/stacks?marker=stack-1", "rel": "next"}],
            }
        )
        seen = []
        def handler(page):
            seen.append(page)
            return False
        stacks.list(self.service).each_page(handler)
        self.assertEqual(len(seen), 1)
        self.assertEqual(self.send.call_count, 1)

    def test_empty_page(self):
        self.send.return_value = make_response(200, {"stacks": []})
        page = stacks.list(self.service).next_page()
        self.assertTrue(page.is_empty())
        self.assertEqual(page.extract_stacks(), [])

    def test_query_error(self):
        pager = stacks.list(self.service, stacks.ListOpts(limit=2.5))
        with self.assertRaises(ValidationError):
            pager.next_page()
        self.send.assert_not_called()

    def test_unexpected_status(self):
        self.send.return_value = make_response(401, {"error": {"message": "Unauthorized"}})
        pager = stacks.list(self.service)
        with self.assertRaises(UnexpectedStatusError) as ctx:
            pager.next_page()
        self.assertEqual(ctx.exception.status_code, 401)

    def test_body_is_not_an_object(self):
        self.send.return_value = make_response(200, [stack_data(1)])
        with self.assertRaises(DecodeError):
            stacks.list(self.service).next_page()

    def test_malformed_links(self):
        self.send.return_value = make_response(200, {"stacks": [stack_data(1)], "links": "next"})
        with self.assertRaises(DecodeError):
            stacks.list(self.service).next_page()

    def test_malformed_stack(self):
        self.send.return_value = make_response(200, {"stacks": [{"id": "stack-1"}]})
        page = stacks.list(self.service).next_page()
        with self.assertRaises(DecodeError):
            page.extract_stacks()

    # A next link back to the page just fetched ends the sequence
    def test_repeated_next_link(self):
        self.send.return_value = make_response(
            200,
            {
                "stacks": [stack_data(1)],
                "links": [{"href": f"{BASE_URL}/stacks", "rel": "next"}],
            }
        )
        pager = stacks.list(self.service)
        self.assertEqual(len(pager.all_pages()), 1)
        self.assertFalse(pager.has_next())
        self.assertEqual(self.send.call_count, 1)

    # An empty page ends the sequence even if it carries a next link
    def test_empty_page_with_next_link(self):
        self.send.return_value = make_response(
            200,
            {
                "stacks": [],
                "links": [{"href": f"{BASE_URL}/stacks?marker=x", "rel": "next"}],
            }
        )
        pages = list(stacks.list(self.service))
        self.assertEqual(len(pages), 1)
        self.assertEqual(self.send.call_count, 1)
