"""
Functions that resolve the URLs for the stacks API.
"""


def create_url(service):
    return service.service_url("stacks")


def adopt_url(service):
    return create_url(service)


def list_url(service):
    return create_url(service)


def get_url(service, stack_name, stack_id):
    return service.service_url("stacks", stack_name, stack_id)


def update_url(service, stack_name, stack_id):
    return get_url(service, stack_name, stack_id)


def delete_url(service, stack_name, stack_id):
    return get_url(service, stack_name, stack_id)


def preview_url(service):
    return service.service_url("stacks", "preview")


def abandon_url(service, stack_name, stack_id):
    return service.service_url("stacks", stack_name, stack_id, "abandon")
