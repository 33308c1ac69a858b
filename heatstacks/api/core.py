"""
Module containing helpers for interacting with the OpenStack API.
"""

import dataclasses
import enum
import logging
from urllib.parse import quote, urlencode, urlsplit

import requests

from .. import errors

logger = logging.getLogger(__name__)


def build_query_string(opts):
    """
    Build a query string from the fields of the given dataclass instance.

    Only fields that declare a query parameter name under the ``q`` metadata key are
    considered, and fields with an unset value (``None``, empty or zero) are omitted.
    The returned string includes the leading ``?`` unless it is empty.
    """
    params = []
    for field in dataclasses.fields(opts):
        key = field.metadata.get("q")
        if not key:
            continue
        value = getattr(opts, field.name)
        if not value:
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            if isinstance(item, enum.Enum):
                item = item.value
            if isinstance(item, bool):
                params.append((key, "true" if item else "false"))
            elif isinstance(item, (int, str)):
                params.append((key, str(item)))
            else:
                raise errors.ValidationError(
                    field.name,
                    f"unsupported query parameter type: {type(item).__name__}"
                )
    return f"?{urlencode(params)}" if params else ""


def _send(method, url, ok_codes, **kwargs):
    # Used for the requests made before a connection exists
    try:
        response = requests.request(method, url, **kwargs)
    except requests.exceptions.RequestException as exc:
        raise errors.TransportError(str(exc)) from exc
    if response.status_code not in ok_codes:
        raise errors.UnexpectedStatusError(response.status_code, response.text)
    return response


class UnsupportedAuthType(RuntimeError):  # noqa: N818
    """
    Raised when a clouds.yaml entry uses an auth type that cannot produce a token.
    """

    def __init__(self, auth_type):
        super().__init__(f"Unsupported auth type: {auth_type}")


def _request_token(auth_url, auth_type, auth, verify):
    """
    Exchange the credential from a clouds.yaml auth section for a token.

    Returns the token, the ID of the project it is scoped to and the service catalog.
    """
    if auth_type == "v3token":
        token = auth["token"]
        # Validating the token returns its scope and catalog
        response = _send(
            "GET",
            f"{auth_url}/auth/tokens",
            {200},
            headers = {"X-Auth-Token": token, "X-Subject-Token": token},
            verify = verify
        )
    elif auth_type == "v3applicationcredential":
        credential = {
            "id": auth["application_credential_id"],
            "secret": auth["application_credential_secret"],
        }
        identity = {
            "methods": ["application_credential"],
            "application_credential": credential,
        }
        response = _send(
            "POST",
            f"{auth_url}/auth/tokens",
            {201},
            json = {"auth": {"identity": identity}},
            verify = verify
        )
        token = response.headers.get("X-Subject-Token")
    else:
        raise UnsupportedAuthType(auth_type)
    try:
        token_data = response.json()["token"]
        return token, token_data["project"]["id"], token_data["catalog"]
    except (KeyError, TypeError, ValueError) as exc:
        raise errors.DecodeError(f"Invalid token response: {exc!r}") from exc


def _catalog_endpoints(catalog, interface, region):
    """
    Returns the base URL of each service in the catalog, keyed by catalog type.

    Services with no endpoint for the interface and region are left out. When no
    region is given, the first matching endpoint wins.
    """
    endpoints = {}
    for entry in catalog:
        urls = [
            ep["url"]
            for ep in entry["endpoints"]
            if ep["interface"] == interface and (not region or ep["region"] == region)
        ]
        if urls:
            # Each service supplies its own version and project path
            endpoints[entry["type"]] = urlsplit(urls[0])._replace(path="").geturl()
    return endpoints


class Connection:
    """
    The authenticated state shared by the services of one cloud: the token, the
    project it is scoped to and the endpoints of the services.

    The connection is the auth object of its own requests session, so every request
    made by a service carries the token.
    """

    def __init__(self, token, endpoints, project_id, verify = True):
        self.token = token
        self.endpoints = endpoints
        self.project_id = project_id
        self.verify = verify
        self.session = requests.Session()
        self.session.auth = self
        self.session.verify = verify

    def __call__(self, request):
        request.headers.update(self.authenticated_headers())
        return request

    def authenticated_headers(self):
        """
        Returns the headers that authenticate a request with the current token.
        """
        return {"X-Auth-Token": self.token} if self.token else {}

    def close(self):
        self.session.close()

    @classmethod
    def from_clouds(cls, data, cloud = None):
        """
        Returns a connection for a cloud from the data in a clouds.yaml file.

        If no cloud name is given, the first cloud in the data is used.
        """
        if cloud:
            entry = data["clouds"][cloud]
        else:
            entry = next(iter(data["clouds"].values()))
        auth_url = entry["auth"]["auth_url"].rstrip("/").removesuffix("/v3") + "/v3"
        verify = entry.get("verify", True)
        logger.info("Requesting token from %s", auth_url)
        token, project_id, catalog = _request_token(
            auth_url,
            entry["auth_type"],
            entry["auth"],
            verify
        )
        logger.info("Token is scoped to project %s", project_id)
        endpoints = _catalog_endpoints(
            catalog,
            entry.get("interface", "public"),
            entry.get("region_name")
        )
        return cls(token, endpoints, project_id, verify)


class ServiceNotSupported(RuntimeError):  # noqa: N818
    """
    Raised when a service that is not supported by the cloud is asked for.
    """

    def __init__(self, service, *args, **kwargs):
        super().__init__(f"Service not supported: {service}", *args, **kwargs)


class ServiceDescriptor:
    """
    Property descriptor for attaching a :py:class:`Service` to a :py:class:`Connection`.

    The returned service instances are configured using the endpoints discovered from
    the service catalog, and are cached on the connection.
    """

    def __init__(self, service_cls):
        self.service_cls = service_cls
        self.name = None

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, instance, owner = None):
        if instance is None:
            return self
        try:
            url = instance.endpoints[self.service_cls.catalog_type]
        except KeyError:
            raise ServiceNotSupported(self.service_cls.catalog_type)
        service = self.service_cls(url, instance.session)
        instance.__dict__[self.name] = service
        return service


class Service:
    """
    Base class for OpenStack service connections.
    """

    #: The name of the catalog type that this service is for
    #: This is used to retrieve the endpoint from the service catalog
    catalog_type = None
    #: The path prefix for the service, which may contain the project id
    path_prefix = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        # If the service has a catalog type, add it to the connection
        if cls.catalog_type:
            # If no explicit name is given, use the catalog type
            if hasattr(cls, "name"):
                name = cls.name
            else:
                name = cls.catalog_type.replace("-", "_")
                cls.name = name
            descriptor = ServiceDescriptor(cls)
            setattr(Connection, name, descriptor)
            descriptor.__set_name__(Connection, name)

    def __init__(self, url, session):
        self.url = url.rstrip("/")
        self.session = session
        if self.path_prefix:
            # Template the project id into the path prefix
            project_id = session.auth.project_id
            self.path_prefix = self.path_prefix.format(project_id=project_id)

    def service_url(self, *parts):
        """
        Returns the URL for the given path segments under this service.
        """
        base = self.url + (self.path_prefix or "")
        return "/".join([base] + [quote(str(part), safe="") for part in parts])

    def request(self, method, url, ok_codes, json = None):
        """
        Make a single request to the given URL and return the response.

        Raises :py:class:`..errors.TransportError` if the request could not be made and
        :py:class:`..errors.UnexpectedStatusError` if the status code is not one of
        ``ok_codes``.
        """
        logger.debug("Making %s request to %s", method, url)
        try:
            response = self.session.request(
                method,
                url,
                json = json,
                headers = {"Accept": "application/json"}
            )
        except requests.exceptions.RequestException as exc:
            raise errors.TransportError(str(exc)) from exc
        logger.debug("%s request to %s returned %s", method, url, response.status_code)
        if response.status_code not in ok_codes:
            raise errors.UnexpectedStatusError(
                response.status_code,
                response.text,
                self.extract_error_message(response)
            )
        return response

    def decode(self, response):
        """
        Decode the JSON body of the given response, returning ``None`` if it is empty.
        """
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise errors.DecodeError(f"Invalid JSON in response: {exc}") from exc

    def _find_message(self, obj):
        # Try to find a message property at any depth within the structure
        if isinstance(obj, dict):
            # Try a couple of different keys for error detail
            for key in ("message", "detail"):
                if key in obj:
                    return obj[key]
            for item in obj.values():
                message = self._find_message(item)
                if message:
                    return message
        elif isinstance(obj, list):
            for item in obj:
                message = self._find_message(item)
                if message:
                    return message

    def extract_error_message(self, response):
        """
        Extract an error message from the given error response and return it.
        """
        # First, try to parse the response as JSON
        # If it fails, just use the response text
        try:
            json_obj = response.json()
        except ValueError:
            return response.text
        else:
            # Traverse the structure looking for a message property
            # Use the response text if not found
            return self._find_message(json_obj) or response.text
