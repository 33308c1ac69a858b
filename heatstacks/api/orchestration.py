"""
Module containing the service definition for the OpenStack orchestration API.
"""

from .core import Service


class OrchestrationService(Service):
    """
    OpenStack service class for the orchestration service.
    """

    catalog_type = "orchestration"
    path_prefix = "/v1/{project_id}"
