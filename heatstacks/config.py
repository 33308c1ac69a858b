"""
Module containing helpers for loading cloud configuration from a clouds.yaml file.
"""

import logging
import os
import pathlib

import yaml

from .api import Connection
from .errors import ConfigurationError


logger = logging.getLogger(__name__)


def find_clouds_file():
    """
    Returns the path to the clouds.yaml file to use, or ``None`` if there is not one.

    The ``OS_CLIENT_CONFIG_FILE`` environment variable takes precedence over the
    standard locations.
    """
    explicit = os.environ.get("OS_CLIENT_CONFIG_FILE")
    if explicit:
        return pathlib.Path(explicit)
    search_paths = [
        pathlib.Path.cwd() / "clouds.yaml",
        pathlib.Path.home() / ".config" / "openstack" / "clouds.yaml",
        pathlib.Path("/etc/openstack/clouds.yaml"),
    ]
    return next((path for path in search_paths if path.is_file()), None)


def load_clouds(path = None):
    """
    Load and return the data from a clouds.yaml file.
    """
    path = pathlib.Path(path) if path else find_clouds_file()
    if not path:
        raise ConfigurationError("Unable to find a clouds.yaml file")
    logger.debug("Loading clouds from %s", path)
    try:
        with path.open() as fh:
            data = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigurationError(f"Unable to read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict) or not data.get("clouds"):
        raise ConfigurationError(f"No clouds defined in {path}")
    return data


def connect(cloud = None, path = None):
    """
    Returns a connection for the named cloud from a clouds.yaml file.

    If no cloud is given, the ``OS_CLOUD`` environment variable is used and if that
    is not set the first cloud in the file is used.
    """
    data = load_clouds(path)
    cloud = cloud or os.environ.get("OS_CLOUD")
    if cloud and cloud not in data["clouds"]:
        raise ConfigurationError(f"Cloud '{cloud}' not found in clouds.yaml")
    return Connection.from_clouds(data, cloud)
