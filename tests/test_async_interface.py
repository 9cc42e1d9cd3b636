"""Tests for oasgen.async_interface."""

from __future__ import annotations

import pytest
import yaml

from oasgen.async_interface import (
    ASYNC_ENDPOINTS,
    REQUEST_STATES,
    add_async_endpoints,
    add_async_parameters,
    add_async_schemas,
)
from oasgen.config import OpenAPIVersion
from oasgen.yaml_writer import YamlWriter


def _endpoints(version: OpenAPIVersion, *, oauth: bool = False) -> dict:
    y = YamlWriter()
    y.write_line("paths:")
    add_async_endpoints(y, version, oauth=oauth)
    assert y.depth == 0
    return yaml.safe_load(y.to_string())["paths"]


def test_endpoints_cover_request_lifecycle() -> None:
    paths = _endpoints(OpenAPIVersion.V3_0_3)

    assert len(paths) == len(ASYNC_ENDPOINTS) == 5
    operation_ids = {
        endpoint.operation_id: paths[endpoint.path][endpoint.method]["operationId"]
        for endpoint in ASYNC_ENDPOINTS
    }
    assert all(key == value for key, value in operation_ids.items())

    cancel = paths["/~{instance-uuid}/requests/{request-id}/cancel"]["post"]
    assert list(cancel["responses"]) == ["204", "410", "400", "404"]
    assert cancel["tags"] == ["Asynchronous API"]
    assert cancel["parameters"] == [
        {"$ref": "#/components/parameters/InstanceUUID"},
        {"$ref": "#/components/parameters/RequestID"},
    ]
    assert "security" not in cancel


def test_collection_endpoint_takes_query_parameters() -> None:
    collection = _endpoints(OpenAPIVersion.V3_0_3)["/~{instance-uuid}/requests"]["get"]
    names = [parameter.get("name") for parameter in collection["parameters"][1:]]
    assert names == ["since", "clients", "ids"]
    assert collection["parameters"][1]["required"] is True
    data = collection["responses"]["200"]["content"]["application/json"]["schema"]["properties"]["data"]
    assert data["items"] == {"$ref": "#/components/schemas/AsyncRequestInfo"}


def test_info_endpoint_lists_states() -> None:
    info = _endpoints(OpenAPIVersion.V3_1_0)["/~{instance-uuid}/requests/{request-id}/info"]["get"]
    properties = info["responses"]["200"]["content"]["application/json"]["schema"]["properties"]
    assert properties["state"]["enum"] == list(REQUEST_STATES)
    assert properties["lastModifiedSeq"]["examples"] == [42]


def test_oauth_requirement_on_every_endpoint() -> None:
    paths = _endpoints(OpenAPIVersion.V3_0_3, oauth=True)
    for endpoint in ASYNC_ENDPOINTS:
        assert paths[endpoint.path][endpoint.method]["security"] == [{"oauth2": []}]


@pytest.mark.parametrize(
    ("version", "key", "value"),
    [
        (OpenAPIVersion.V3_0_3, "example", "myClientID"),
        (OpenAPIVersion.V3_1_0, "examples", ["myClientID"]),
    ],
)
def test_request_info_schema(version: OpenAPIVersion, key: str, value: object) -> None:
    y = YamlWriter()
    y.write_line("components:")
    y.write_line("  schemas:")
    add_async_schemas(y, version)
    schema = yaml.safe_load(y.to_string())["components"]["schemas"]["AsyncRequestInfo"]

    assert list(schema["properties"]) == ["id", "self", "up", "lastModifiedSeq", "state", "client"]
    assert schema["properties"]["client"][key] == value
    assert schema["properties"]["state"]["enum"] == list(REQUEST_STATES)


def test_shared_parameters() -> None:
    y = YamlWriter()
    y.write_line("components:")
    y.write_line("  parameters:")
    add_async_parameters(y)
    parameters = yaml.safe_load(y.to_string())["components"]["parameters"]

    assert parameters["ModeParameter"]["schema"]["enum"] == ["async"]
    assert parameters["ClientParameter"]["in"] == "query"
    assert parameters["InstanceUUID"]["in"] == "path"
    assert parameters["RequestID"]["name"] == "request-id"
    assert "`~{instance-uuid}/requests/{request-id}`" in parameters["InstanceUUID"]["description"]
