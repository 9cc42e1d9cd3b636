"""Fixed asynchronous request endpoints, schemas and parameters.

The asynchronous interface of the server does not depend on the deployed
functions, so this bank is identical for every discovery document.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Tuple

from .config import OpenAPIVersion
from .schema.snippets import add_example, quote
from .yaml_writer import YamlWriter

ASYNC_TAG = "Asynchronous API"
REQUEST_STATES = ("READING", "IN_QUEUE", "PROCESSING", "READY", "ERROR", "CANCELLED")

_REQUEST_URI_EXAMPLE = quote(
    "/~ea9859eb-c900-492d-afc0-ce6dc0f36e8d/requests/798eab4b-7b64-4105-94b2-75fe0718454d"
)
_INVALID_ID = "Request ID is not a valid request ID format at all."
_NOT_FOUND = (
    "Request not found. Format is correct but no ID with this request found. Request may "
    "never have existed at all or it may have been cancelled or deleted."
)

_ResponseWriter = Callable[[YamlWriter, OpenAPIVersion], None]


@dataclass(frozen=True)
class AsyncEndpoint:
    """One operation of the asynchronous request interface."""

    path: str
    method: str
    summary: str
    description: str
    operation_id: str
    add_parameters: Callable[[YamlWriter], None]
    add_responses: _ResponseWriter


def _request_parameters(y: YamlWriter) -> None:
    y.write_line('- $ref: "#/components/parameters/InstanceUUID"')
    y.write_line('- $ref: "#/components/parameters/RequestID"')


def _collection_parameters(y: YamlWriter) -> None:
    y.write_line('- $ref: "#/components/parameters/InstanceUUID"')
    y.write_line('- description: "`createdSeq` or `lastModifiedSeq` as returned by previous requests."')
    y.write_line('  in: "query"')
    y.write_line('  name: "since"')
    y.write_line("  required: true")
    y.write_line("  schema:")
    y.write_line('    format: "integer"')
    y.write_line('    type: "number"')
    y.write_line('- description: "`clientId` string. Required if `ids` is not specified"')
    y.write_line('  in: "query"')
    y.write_line('  name: "clients"')
    y.write_line("  required: false")
    y.write_line("  schema:")
    y.write_line('    type: "string"')
    y.write_line("- description: |")
    y.write_line(
        '    Request `id`s as returned by the "POST Asynchronous Request" or other operations. '
        "Required if `clients` is not specified."
    )
    y.write_line('  in: "query"')
    y.write_line('  name: "ids"')
    y.write_line("  required: false")
    y.write_line("  schema:")
    y.write_line('    type: "string"')


def _lookup_failures(y: YamlWriter) -> None:
    y.write_line('"400":')
    y.write_line(f"  description: {quote(_INVALID_ID)}")
    y.write_line('"404":')
    y.write_line(f"  description: {quote(_NOT_FOUND)}")


def _result_responses(y: YamlWriter, version: OpenAPIVersion) -> None:
    y.write_line('"200":')
    y.write_line("  content:")
    y.write_line("    application/json:")
    y.write_line("      schema:")
    y.write_line('        type: "object"')
    y.write_line("  description: |")
    y.write_line("    Results represented in JSON.")
    y.write_line("")
    y.write_line("    The response body will vary based on the function which has been called asynchronously")
    y.write_line("    and will be the same as if that function had been called synchronously. Refer to the")
    y.write_line("    separate function declarations above which describe these synchronous response bodies in detail.")
    _lookup_failures(y)


def _info_responses(y: YamlWriter, version: OpenAPIVersion) -> None:
    y.write_line('"200":')
    y.write_line("  content:")
    y.write_line("    application/json:")
    y.write_line("      schema:")
    y.write_line('        type: "object"')
    y.write_line("        properties:")
    y.write_line("          request:")
    y.write_line('            type: "string"')
    y.write_line('            description: "URI to current request."')
    add_example(y, version, _REQUEST_URI_EXAMPLE)
    y.write_line("          lastModifiedSeq:")
    y.write_line('            type: "number"')
    y.write_line('            format: "integer"')
    y.write_line('            description: "Number indicating when the current request was last modified."')
    add_example(y, version, "42")
    y.write_line("          state:")
    y.write_line('            type: "string"')
    y.write_line('            description: "State of current request."')
    _add_states(y)
    y.write_line('  description: "State of the asynchronous request."')
    _lookup_failures(y)


def _delete_responses(y: YamlWriter, version: OpenAPIVersion) -> None:
    y.write_line('"204":')
    y.write_line('  description: "Success. No Content."')
    _lookup_failures(y)


def _cancel_responses(y: YamlWriter, version: OpenAPIVersion) -> None:
    y.write_line('"204":')
    y.write_line('  description: "Success. No Content"')
    y.write_line('"410":')
    y.write_line('  description: "Failure. Request already completed and can no longer be cancelled."')
    _lookup_failures(y)


def _collection_responses(y: YamlWriter, version: OpenAPIVersion) -> None:
    y.write_line('"200":')
    y.write_line("  content:")
    y.write_line("    application/json:")
    y.write_line("      schema:")
    y.write_line('        type: "object"')
    y.write_line("        properties:")
    y.write_line("          createdSeq:")
    y.write_line('            type: "number"')
    y.write_line('            format: "integer"')
    y.write_line(
        '            description: "Number indicating the server state. The requests included in the data '
        'collection are the requests that have gone through some state change between since and createdSeq."'
    )
    y.write_line("          data:")
    y.write_line('            type: "array"')
    y.write_line('            description: "Collection of execution requests that match a query."')
    y.write_line("            items:")
    y.write_line('              $ref: "#/components/schemas/AsyncRequestInfo"')
    y.write_line('  description: "Collection of asynchronous requests on the server."')
    y.write_line('"400":')
    y.write_line('  description: "Missing query parameters or no match found for given parameters."')


ASYNC_ENDPOINTS: Tuple[AsyncEndpoint, ...] = (
    AsyncEndpoint(
        path="/~{instance-uuid}/requests/{request-id}/result",
        method="get",
        summary="Retrieve results of request.",
        description=(
            "Use a GET method to retrieve the results of a request from the server. "
            "The URI of the self field serves as the addressable resource for the method."
        ),
        operation_id="get_async_result",
        add_parameters=_request_parameters,
        add_responses=_result_responses,
    ),
    AsyncEndpoint(
        path="/~{instance-uuid}/requests/{request-id}/info",
        method="get",
        summary="Get state information of request.",
        description=(
            "Use a GET method to get information about the state of a request. The URI of the "
            "self field serves as the addressable resource for the method. Possible states are: "
            "READING, IN_QUEUE, PROCESSING, READY, ERROR, and CANCELLED."
        ),
        operation_id="get_async_request_state",
        add_parameters=_request_parameters,
        add_responses=_info_responses,
    ),
    AsyncEndpoint(
        path="/~{instance-uuid}/requests/{request-id}",
        method="delete",
        summary="Delete request from server.",
        description=(
            "Use a DELETE method to delete a request on the server. "
            "You cannot retrieve the information of a deleted request."
        ),
        operation_id="delete_async_request",
        add_parameters=_request_parameters,
        add_responses=_delete_responses,
    ),
    AsyncEndpoint(
        path="/~{instance-uuid}/requests/{request-id}/cancel",
        method="post",
        summary="Cancel request which has not yet completed.",
        description=(
            "Use a POST method to cancel a request. "
            "You can cancel only those requests that have not already completed."
        ),
        operation_id="post_async_cancel",
        add_parameters=_request_parameters,
        add_responses=_cancel_responses,
    ),
    AsyncEndpoint(
        path="/~{instance-uuid}/requests",
        method="get",
        summary="View a collection of requests.",
        description=(
            "Use a GET method to view a collection of requests on the server. "
            "The URI of the up field serves as the addressable resource for the method."
        ),
        operation_id="get_async_request_collection",
        add_parameters=_collection_parameters,
        add_responses=_collection_responses,
    ),
)


def add_async_endpoints(y: YamlWriter, version: OpenAPIVersion, *, oauth: bool) -> YamlWriter:
    """Write the asynchronous request paths as entries of ``paths``."""
    for endpoint in ASYNC_ENDPOINTS:
        y.write_line(f"  {endpoint.path}:")
        y.write_line(f"    {endpoint.method}:")
        y.push(2)
        y.write_line("tags:")
        y.write_line(f"- {quote(ASYNC_TAG)}")
        y.write_line(f"summary: {quote(endpoint.summary)}")
        y.write_line(f"description: {quote(endpoint.description)}")
        y.write_line(f"operationId: {quote(endpoint.operation_id)}")
        if oauth:
            add_security_requirement(y)
        y.write_line("parameters:")
        endpoint.add_parameters(y)
        y.write_line("responses:")
        y.push(2)
        endpoint.add_responses(y, version)
        y.pop()
        y.pop()
    return y


def add_async_schemas(y: YamlWriter, version: OpenAPIVersion) -> YamlWriter:
    """Write the ``AsyncRequestInfo`` schema nested under the last line written."""
    y.push(2)
    y.write_line("AsyncRequestInfo:")
    y.write_line('  type: "object"')
    y.write_line("  properties:")
    y.write_line("    id:")
    y.write_line('      type: "string"')
    y.write_line('      description: "ID of a particular request."')
    add_example(y, version, quote("798eab4b-7b64-4105-94b2-75fe0718454d"))
    y.write_line("    self:")
    y.write_line('      type: "string"')
    y.write_line(
        '      description: "URI of particular request. Use the URI in other asynchronous execution '
        'requests such as retrieving the state of the request or result of request."'
    )
    add_example(y, version, _REQUEST_URI_EXAMPLE)
    y.write_line("    up:")
    y.write_line('      type: "string"')
    y.write_line('      description: "URI of a collection of requests."')
    add_example(y, version, quote("/~ea9859eb-c900-492d-afc0-ce6dc0f36e8d/requests"))
    y.write_line("    lastModifiedSeq:")
    y.write_line('      type: "number"')
    y.write_line('      format: "integer"')
    y.write_line('      description: "Number indicating when a request represented by self was last modified."')
    add_example(y, version, "42")
    y.write_line("    state:")
    y.write_line('      type: "string"')
    _add_states(y)
    y.write_line('      description: "State of a request."')
    y.write_line("    client:")
    y.write_line('      type: "string"')
    y.write_line(
        '      description: "Client id or name that was specified as a query parameter while '
        'initiating a request."'
    )
    add_example(y, version, quote("myClientID"))
    return y.pop()


def add_async_parameters(y: YamlWriter) -> YamlWriter:
    """Write the shared parameters used by the asynchronous interface."""
    y.push(2)
    y.write_line("ClientParameter:")
    y.write_line('  description: "If working in asynchronous mode: an ID or name for the client making the request."')
    y.write_line('  in: "query"')
    y.write_line('  name: "client"')
    y.write_line("  required: false")
    y.write_line("  schema:")
    y.write_line('    type: "string"')
    y.write_line("ModeParameter:")
    y.write_line('  description: "Omit entirely for synchronous request. Set to `async` to perform an asynchronous request."')
    y.write_line('  in: "query"')
    y.write_line('  name: "mode"')
    y.write_line("  required: false")
    y.write_line("  schema:")
    y.write_line("    enum:")
    y.write_line('    - "async"')
    y.write_line('    type: "string"')
    y.write_line("InstanceUUID:")
    y.write_line("  description: |")
    y.write_line("    The Instance UUID is assigned to a server instance at startup.")
    y.write_line("    The Instance UUID remains the same for the lifetime of the instance and changes")
    y.write_line("    when the instance is restarted.")
    y.write_line("")
    y.write_line("    The UUID can be found back in the `self` field in the response")
    y.write_line("    when the request was initially created or in the response of")
    y.write_line('    "View a collection of requests".')
    y.write_line("")
    y.write_line("    The `self` field will have the format: `~{instance-uuid}/requests/{request-id}`")
    y.write_line('  in: "path"')
    y.write_line('  name: "instance-uuid"')
    y.write_line("  required: true")
    y.write_line("  schema:")
    y.write_line('    type: "string"')
    y.write_line("RequestID:")
    y.write_line("  description: |")
    y.write_line("    The Request ID as identified by the `id` field in the response")
    y.write_line("    when the request was initially created or in the response of")
    y.write_line('    "View a collection of requests".')
    y.write_line('  in: "path"')
    y.write_line('  name: "request-id"')
    y.write_line("  required: true")
    y.write_line("  schema:")
    y.write_line('    type: "string"')
    return y.pop()


def add_security_requirement(y: YamlWriter) -> YamlWriter:
    """Write the operation-level OAuth requirement at the current indent."""
    y.write_line("security:")
    y.write_line("- oauth2: []")
    return y


def _add_states(y: YamlWriter) -> None:
    y.push()
    y.write_line("enum:")
    for state in REQUEST_STATES:
        y.write_line(f"- {quote(state)}")
    y.pop()


__all__ = [
    "ASYNC_ENDPOINTS",
    "ASYNC_TAG",
    "AsyncEndpoint",
    "REQUEST_STATES",
    "add_async_endpoints",
    "add_async_parameters",
    "add_async_schemas",
    "add_security_requirement",
]
