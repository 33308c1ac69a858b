"""
This module defines the results returned by stack operations and the typed views that
can be extracted from them.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import dateutil.parser

from ..api import LinkedPage
from ..errors import DecodeError


@dataclass(frozen=True)
class Link:
    """
    Represents a link to a related resource.
    """

    #: The URL of the resource
    href: str
    #: The relationship of the resource to the linking resource
    rel: str


@dataclass(frozen=True)
class CreatedStack:
    """
    Represents the response to creating or adopting a stack.
    """

    #: The ID of the new stack
    id: str
    #: Links to the new stack
    links: list[Link] = field(default_factory=list)


@dataclass(frozen=True)
class ListedStack:
    """
    Represents a stack as it appears in a list.
    """

    id: str
    name: str
    status: str
    status_reason: str | None = None
    description: str | None = None
    creation_time: datetime | None = None
    updated_time: datetime | None = None
    links: list[Link] = field(default_factory=list)


@dataclass(frozen=True)
class RetrievedStack:
    """
    Represents the full details of a stack.
    """

    id: str
    name: str
    status: str
    status_reason: str | None = None
    description: str | None = None
    template_description: str | None = None
    creation_time: datetime | None = None
    updated_time: datetime | None = None
    #: Indicates if rollback is disabled for the stack
    disable_rollback: bool = True
    #: The timeout in minutes for stack operations, if one was given
    timeout: int | None = None
    capabilities: list[Any] = field(default_factory=list)
    notification_topics: list[Any] = field(default_factory=list)
    outputs: list[dict[str, Any]] = field(default_factory=list)
    parameters: dict[str, str] = field(default_factory=dict)
    links: list[Link] = field(default_factory=list)


@dataclass(frozen=True)
class PreviewedStack(RetrievedStack):
    """
    Represents the would-be result of creating a stack.
    """

    #: The resources that would be created
    resources: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class AbandonedStack:
    """
    Represents the data returned when a stack is abandoned.

    This data can be used to adopt the resources into another stack.
    """

    id: str
    name: str
    status: str
    action: str
    template: dict[str, Any] = field(default_factory=dict)
    resources: dict[str, Any] = field(default_factory=dict)
    files: dict[str, Any] = field(default_factory=dict)
    environment: dict[str, Any] = field(default_factory=dict)
    stack_user_project_id: str | None = None
    project_id: str | None = None


def _links(data):
    return [Link(link["href"], link["rel"]) for link in data.get("links") or []]


def _time(value):
    return dateutil.parser.parse(value) if value else None


def _listed_stack(data):
    return ListedStack(
        id = data["id"],
        name = data["stack_name"],
        status = data["stack_status"],
        status_reason = data.get("stack_status_reason"),
        description = data.get("description"),
        creation_time = _time(data.get("creation_time")),
        updated_time = _time(data.get("updated_time")),
        links = _links(data),
    )


def _retrieved_stack_fields(data):
    return dict(
        id = data["id"],
        name = data["stack_name"],
        status = data["stack_status"],
        status_reason = data.get("stack_status_reason"),
        description = data.get("description"),
        template_description = data.get("template_description"),
        creation_time = _time(data.get("creation_time")),
        updated_time = _time(data.get("updated_time")),
        disable_rollback = data.get("disable_rollback", True),
        timeout = data.get("timeout_mins"),
        capabilities = data.get("capabilities") or [],
        notification_topics = data.get("notification_topics") or [],
        outputs = data.get("outputs") or [],
        parameters = data.get("parameters") or {},
        links = _links(data),
    )


class Result:
    """
    Base class for the result of a stack operation.

    Holds the decoded response body and any error that occurred. If ``err`` is set,
    ``body`` is ``None``.
    """

    def __init__(self, body = None, err = None):
        self.body = body
        self.err = err

    def __repr__(self):
        return f"{type(self).__name__}(body={self.body!r}, err={self.err!r})"

    def extract(self):
        """
        Returns the typed view of the body, or raises the error if there is one.
        """
        if self.err is not None:
            raise self.err
        try:
            return self._extract(self.body)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise DecodeError(
                f"Unexpected response for {type(self).__name__}: {exc!r}"
            ) from exc

    def _extract(self, body):
        return None


class CreateResult(Result):
    def _extract(self, body):
        data = body["stack"]
        return CreatedStack(id = data["id"], links = _links(data))


class GetResult(Result):
    def _extract(self, body):
        return RetrievedStack(**_retrieved_stack_fields(body["stack"]))


class UpdateResult(Result):
    pass


class DeleteResult(Result):
    pass


class PreviewResult(Result):
    def _extract(self, body):
        data = body["stack"]
        return PreviewedStack(
            resources = data.get("resources") or [],
            **_retrieved_stack_fields(data)
        )


class AbandonResult(Result):
    def _extract(self, body):
        return AbandonedStack(
            id = body["id"],
            name = body["name"],
            status = body["status"],
            action = body["action"],
            template = body.get("template") or {},
            resources = body.get("resources") or {},
            files = body.get("files") or {},
            environment = body.get("environment") or {},
            stack_user_project_id = body.get("stack_user_project_id"),
            project_id = body.get("project_id"),
        )

    def extract_adopt_data(self):
        """
        Returns the abandoned stack data as a string that can be used as the
        ``adopt_stack_data`` of an adopt request.
        """
        if self.err is not None:
            raise self.err
        return json.dumps(self.body)


class StackPage(LinkedPage):
    """
    A single page of stacks from a list request.
    """

    def is_empty(self):
        return not self.items()

    def items(self):
        stacks = self.body.get("stacks") if isinstance(self.body, dict) else None
        if not isinstance(stacks, list):
            raise DecodeError("Expected a list of stacks in the response")
        return stacks

    def extract_stacks(self):
        try:
            return [_listed_stack(data) for data in self.items()]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise DecodeError(f"Unexpected stack in response: {exc!r}") from exc
