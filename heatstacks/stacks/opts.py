"""
This module defines the options objects used to build requests to the stacks API.

Each options class has a single ``to_stack_*`` method that produces the request
payload for the corresponding operation. Any object with the same method can be used
in place of these classes, which allows extensions to add fields.
"""

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..api import build_query_string
from ..errors import ValidationError


def _put_name(payload, opts):
    if not opts.name:
        raise ValidationError("name", "required field not provided")
    payload["stack_name"] = opts.name


def _put_template(payload, opts):
    # When both are given, the template body takes precedence
    if opts.template:
        payload["template"] = opts.template
    elif opts.template_url:
        payload["template_url"] = opts.template_url
    else:
        raise ValidationError(
            "template",
            "either template or template_url must be provided"
        )


def _put_optional(payload, opts):
    if getattr(opts, "disable_rollback", None) is not None:
        payload["disable_rollback"] = bool(opts.disable_rollback)
    if opts.environment:
        payload["environment"] = opts.environment
    if opts.files is not None:
        payload["files"] = opts.files
    if opts.parameters is not None:
        payload["parameters"] = opts.parameters
    if opts.timeout:
        payload["timeout_mins"] = opts.timeout


@dataclass
class CreateOpts:
    """
    Options for creating a stack.
    """

    #: The name of the stack (required)
    name: str = ""
    #: The template body, as a string
    template: str = ""
    #: A URL that the service can fetch the template from
    template_url: str = ""
    #: Values for the template parameters
    parameters: Mapping[str, str] | None = None
    #: Files referenced by the template, keyed by the name used in the template
    files: Mapping[str, Any] | None = None
    #: The environment, either as a string or a mapping
    environment: str | Mapping[str, Any] = ""
    #: Whether to disable rollback on failure. ``None`` leaves it to the service.
    disable_rollback: bool | None = None
    #: The timeout for the operation in minutes. Zero leaves it to the service.
    timeout: int = 0

    def to_stack_create_map(self):
        payload = {}
        _put_name(payload, self)
        _put_template(payload, self)
        _put_optional(payload, self)
        return payload


@dataclass
class AdoptOpts:
    """
    Options for adopting existing resources into a new stack.
    """

    #: The name of the stack (required)
    name: str = ""
    template: str = ""
    template_url: str = ""
    #: The data produced by abandoning a stack, as a JSON string (required)
    adopt_stack_data: str = ""
    parameters: Mapping[str, str] | None = None
    files: Mapping[str, Any] | None = None
    environment: str | Mapping[str, Any] = ""
    disable_rollback: bool | None = None
    timeout: int = 0

    def to_stack_adopt_map(self):
        payload = {}
        _put_name(payload, self)
        _put_template(payload, self)
        if not self.adopt_stack_data:
            raise ValidationError("adopt_stack_data", "required field not provided")
        payload["adopt_stack_data"] = self.adopt_stack_data
        _put_optional(payload, self)
        return {"stack": payload}


@dataclass
class UpdateOpts:
    """
    Options for updating an existing stack.
    """

    template: str = ""
    template_url: str = ""
    parameters: Mapping[str, str] | None = None
    files: Mapping[str, Any] | None = None
    environment: str | Mapping[str, Any] = ""
    timeout: int = 0

    def to_stack_update_map(self):
        payload = {}
        _put_template(payload, self)
        _put_optional(payload, self)
        return payload


@dataclass
class PreviewOpts:
    """
    Options for previewing the creation of a stack.
    """

    name: str = ""
    template: str = ""
    template_url: str = ""
    parameters: Mapping[str, str] | None = None
    files: Mapping[str, Any] | None = None
    environment: str | Mapping[str, Any] = ""
    disable_rollback: bool | None = None
    timeout: int = 0

    def to_stack_preview_map(self):
        payload = {}
        _put_name(payload, self)
        _put_template(payload, self)
        _put_optional(payload, self)
        return payload


class SortDir(enum.Enum):
    """
    Enumeration of the directions in which a list of stacks can be sorted.
    """

    ASC = "asc"
    DESC = "desc"


class SortKey(enum.Enum):
    """
    Enumeration of the keys by which a list of stacks can be sorted.
    """

    NAME = "name"
    STATUS = "status"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


@dataclass
class ListOpts:
    """
    Options for filtering, sorting and paginating a list of stacks.

    The service applies all of these, nothing is enforced by the client.
    """

    status: str = field(default="", metadata={"q": "status"})
    name: str = field(default="", metadata={"q": "name"})
    #: The ID of the last stack on the previous page
    marker: str = field(default="", metadata={"q": "marker"})
    limit: int = field(default=0, metadata={"q": "limit"})
    sort_key: SortKey | None = field(default=None, metadata={"q": "sort_keys"})
    sort_dir: SortDir | None = field(default=None, metadata={"q": "sort_dir"})

    def to_stack_list_query(self):
        return build_query_string(self)
