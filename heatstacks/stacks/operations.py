"""
This module contains the operations of the stacks API.

Each operation makes a single request and returns a result holding either the decoded
response body or the error that occurred. Errors are never retried.
"""

import logging

from .. import errors
from ..api import Pager
from . import urls
from .results import (
    AbandonResult,
    CreateResult,
    DeleteResult,
    GetResult,
    PreviewResult,
    StackPage,
    UpdateResult,
)


logger = logging.getLogger(__name__)


def _dispatch(result_cls, service, method, url, ok_codes, build_payload = None):
    try:
        payload = build_payload() if build_payload else None
        response = service.request(method, url, ok_codes, json = payload)
        body = service.decode(response)
    except errors.Error as exc:
        logger.debug("%s request to %s failed: %s", method, url, exc)
        return result_cls(err = exc)
    else:
        return result_cls(body = body)


def create(service, opts):
    """
    Create a new stack using the given options.
    """
    return _dispatch(
        CreateResult,
        service,
        "POST",
        urls.create_url(service),
        {201},
        opts.to_stack_create_map
    )


def adopt(service, opts):
    """
    Create a new stack that adopts the resources of an abandoned stack.
    """
    return _dispatch(
        CreateResult,
        service,
        "POST",
        urls.adopt_url(service),
        {201},
        opts.to_stack_adopt_map
    )


def list(service, opts = None):  # noqa: A001
    """
    Returns a pager over the stacks, filtered and sorted using the given options.
    """
    url = urls.list_url(service)
    if opts is not None:
        try:
            url += opts.to_stack_list_query()
        except errors.Error as exc:
            return Pager(service, url, StackPage, err = exc)
    return Pager(service, url, StackPage)


def get(service, stack_name, stack_id):
    """
    Retrieve the stack with the given name and ID.
    """
    return _dispatch(
        GetResult,
        service,
        "GET",
        urls.get_url(service, stack_name, stack_id),
        {200}
    )


def update(service, stack_name, stack_id, opts):
    """
    Update the stack with the given name and ID using the given options.
    """
    return _dispatch(
        UpdateResult,
        service,
        "PUT",
        urls.update_url(service, stack_name, stack_id),
        {202},
        opts.to_stack_update_map
    )


def delete(service, stack_name, stack_id):
    """
    Delete the stack with the given name and ID.
    """
    return _dispatch(
        DeleteResult,
        service,
        "DELETE",
        urls.delete_url(service, stack_name, stack_id),
        {204}
    )


def preview(service, opts):
    """
    Preview the stack that would be created using the given options.
    """
    return _dispatch(
        PreviewResult,
        service,
        "POST",
        urls.preview_url(service),
        {200},
        opts.to_stack_preview_map
    )


def abandon(service, stack_name, stack_id):
    """
    Delete the stack with the given name and ID but leave its resources in place,
    returning the data required to adopt them.
    """
    return _dispatch(
        AbandonResult,
        service,
        "POST",
        urls.abandon_url(service, stack_name, stack_id),
        {200}
    )
