# SPDX-License-Identifier: MIT
"""Tests for the saved request entity and its migration chain."""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from request_versions.constants import DEFAULT_ENDPOINT
from request_versions.core.versioning import ErrorKind, SchemaMismatchError
from request_versions.models import to_wire
from request_versions.requests import (
    REST_REQ_SCHEMA_VERSION,
    RestRequest,
    detect_request_version,
    ensure_ref_id,
    get_default_rest_request,
    is_rest_request,
    make_rest_request,
    rest_requests,
    translate_to_new_request,
)
from request_versions.versions import LATEST_VERSION, VERSION_MODULES
from request_versions.versions.content_types import BINARY, FORM_DATA, TEXT_CONTENT_TYPES
from request_versions.versions.v5 import RestAuthAWSSignature, RestAuthOAuth2
from request_versions.versions.v6 import RestReqBodyBinary, RestReqBodyFormDataV6


def _v1_record(**overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "v": "1",
        "name": "Login",
        "method": "POST",
        "endpoint": "https://api.example.com/login",
        "headers": [],
        "params": [],
        "preRequestScript": "",
        "testScript": "",
        "auth": {"authType": "none", "authActive": True},
        "body": {"contentType": None, "body": None},
    }
    record.update(overrides)
    return record


def test_schema_version_constant() -> None:
    assert REST_REQ_SCHEMA_VERSION == "7"
    assert LATEST_VERSION == 7
    assert sorted(VERSION_MODULES) == list(range(8))


def test_legacy_record_reaches_latest(make_legacy) -> None:
    """An untagged record is detected as v0 and upgraded through every step."""
    result = rest_requests.parse(make_legacy())
    assert isinstance(result, RestRequest)
    assert result.v == "7"
    assert result.endpoint == "https://api.example.com/users"
    assert result.auth.auth_type == "none"
    assert result.body.content_type == "application/json"
    assert result.body.body == '{"q": 1}'
    assert result.request_variables == []
    assert result.ref_id is None
    assert "_ref_id" not in to_wire(result)


def test_legacy_body_falls_back_to_body_field(make_legacy) -> None:
    result = rest_requests.parse(make_legacy(rawParams=None, body="plain text"))
    assert result.body.body == "plain text"


def test_legacy_form_data_becomes_empty_form(make_legacy) -> None:
    result = rest_requests.parse(make_legacy(contentType="multipart/form-data"))
    assert isinstance(result.body, RestReqBodyFormDataV6)
    assert result.body.body == []


def test_legacy_unknown_content_type_drops_body(make_legacy) -> None:
    result = rest_requests.parse(make_legacy(contentType="image/png", body="xx"))
    assert result.body.content_type is None
    assert result.body.body is None


@pytest.mark.parametrize(
    ("overrides", "expected"),
    [
        (
            {"auth": "Basic Auth", "httpUser": "alice", "httpPassword": "s3cret"},
            {"authType": "basic", "authActive": True, "username": "alice", "password": "s3cret"},
        ),
        (
            {"auth": "Bearer Token", "bearerToken": "abc"},
            {"authType": "bearer", "authActive": True, "token": "abc"},
        ),
        ({"auth": "Basic Auth"}, {"authType": "basic", "authActive": True, "username": "", "password": ""}),
        ({"auth": "Digest"}, {"authType": "none", "authActive": True}),
    ],
)
def test_legacy_auth_labels(make_legacy, overrides: dict[str, Any], expected: dict[str, Any]) -> None:
    result = rest_requests.parse(make_legacy(**overrides))
    assert to_wire(result)["auth"] == expected


def test_legacy_id_is_preserved(make_legacy) -> None:
    assert rest_requests.parse(make_legacy(id="abc")).id == "abc"
    assert "id" not in to_wire(rest_requests.parse(make_legacy()))


def test_oauth_from_version_one_becomes_authorization_code() -> None:
    raw = _v1_record(
        auth={
            "authType": "oauth-2",
            "authActive": True,
            "token": "tok",
            "oidcDiscoveryURL": "",
            "authURL": "https://auth.example.com",
            "accessTokenURL": "https://token.example.com",
            "clientID": "client",
            "scope": "openid",
        }
    )
    result = rest_requests.parse(raw)
    assert isinstance(result.auth, RestAuthOAuth2)
    info = result.auth.grant_type_info
    assert info.grant_type == "AUTHORIZATION_CODE"
    assert info.auth_endpoint == "https://auth.example.com"
    assert info.token_endpoint == "https://token.example.com"
    assert info.client_id == "client"
    assert info.client_secret == ""
    assert info.scopes == "openid"
    assert info.is_pkce is False
    assert info.token == "tok"
    assert result.auth.add_to == "HEADERS"


@pytest.mark.parametrize(
    ("add_to", "expected"),
    [
        ("Headers", "HEADERS"),
        ("Query params", "QUERY_PARAMS"),
        ("QUERY_PARAMS", "QUERY_PARAMS"),
        ("Cookie", "HEADERS"),
    ],
)
def test_api_key_placement_is_normalised(add_to: str, expected: str) -> None:
    raw = _v1_record(
        v="3",
        requestVariables=[],
        auth={
            "authType": "api-key",
            "authActive": True,
            "key": "X-Api-Key",
            "value": "secret",
            "addTo": add_to,
        },
    )
    result = rest_requests.parse(raw)
    assert result.auth.add_to == expected
    assert result.auth.key == "X-Api-Key"


def test_aws_signature_auth_from_version_five() -> None:
    raw = _v1_record(
        v="5",
        requestVariables=[],
        auth={
            "authType": "aws-signature",
            "authActive": True,
            "accessKey": "AKIA",
            "secretKey": "shh",
            "region": "eu-west-1",
            "serviceName": "s3",
            "addTo": "HEADERS",
        },
    )
    result = rest_requests.parse(raw)
    assert isinstance(result.auth, RestAuthAWSSignature)
    assert result.auth.service_token is None


def test_pkce_without_client_secret_is_valid_from_version_five() -> None:
    auth = {
        "authType": "oauth-2",
        "authActive": True,
        "grantTypeInfo": {
            "grantType": "AUTHORIZATION_CODE",
            "authEndpoint": "https://auth",
            "tokenEndpoint": "https://token",
            "clientID": "client",
            "isPKCE": True,
            "codeVerifierMethod": "S256",
            "token": "",
        },
    }
    raw = _v1_record(v="5", requestVariables=[], auth=auth)
    assert rest_requests.parse(raw).auth.grant_type_info.client_secret is None
    older = _v1_record(v="4", requestVariables=[], auth=auth)
    result = rest_requests.safe_parse(older)
    assert result.ok is False
    assert result.kind is ErrorKind.SCHEMA_MISMATCH


def test_binary_body_from_version_six() -> None:
    raw = _v1_record(
        v="6",
        requestVariables=[],
        body={"contentType": "application/octet-stream", "body": None},
    )
    result = rest_requests.parse(raw)
    assert isinstance(result.body, RestReqBodyBinary)
    assert result.body.body is None


def test_form_data_rows_survive_upgrades() -> None:
    rows = [
        {"key": "name", "active": True, "isFile": False, "value": "x"},
        {"key": "upload", "active": False, "isFile": True, "value": []},
    ]
    raw = _v1_record(body={"contentType": "multipart/form-data", "body": rows})
    result = rest_requests.parse(raw)
    assert to_wire(result)["body"] == {"contentType": "multipart/form-data", "body": rows}


def test_current_record_round_trips(make_current) -> None:
    """Parsing a current record returns the same data."""
    raw = make_current()
    result = rest_requests.parse(raw)
    assert to_wire(result) == raw


def test_migrated_record_is_latest(make_legacy) -> None:
    migrated = to_wire(rest_requests.parse(make_legacy()))
    assert rest_requests.is_latest(migrated)
    assert not rest_requests.is_latest(make_legacy())


def test_upgrade_chain_step_by_step(make_legacy) -> None:
    """Each upgrade yields an instance of its own version's schema."""
    value = VERSION_MODULES[0].validate(make_legacy())
    for version in range(1, LATEST_VERSION + 1):
        module = VERSION_MODULES[version]
        value = module.upgrade(value)
        assert isinstance(value, module.schema)
        assert value.v == str(version)


def test_upgrades_do_not_mutate_input(make_current) -> None:
    raw = make_current(v="6")
    del raw["_ref_id"]
    old = VERSION_MODULES[6].validate(raw)
    before = old.model_dump()
    VERSION_MODULES[7].upgrade(old)
    assert old.model_dump() == before


TEXT = st.text(max_size=8)
ADD_TO = st.sampled_from(["HEADERS", "QUERY_PARAMS"])
key_values = st.fixed_dictionaries(
    {"key": TEXT, "value": TEXT, "active": st.booleans()}
)


@st.composite
def legacy_records(draw) -> dict[str, Any]:
    """Untagged records across auth labels, content types and row shapes."""
    record: dict[str, Any] = {
        "url": draw(TEXT),
        "path": draw(TEXT),
        "headers": draw(st.lists(key_values, max_size=3)),
        "params": draw(st.lists(key_values, max_size=3)),
        "name": draw(TEXT),
        "method": draw(st.sampled_from(["GET", "POST", "PUT", "DELETE"])),
        "preRequestScript": draw(TEXT),
        "testScript": draw(TEXT),
        "contentType": draw(
            st.sampled_from(
                sorted(TEXT_CONTENT_TYPES) + [FORM_DATA, BINARY, "image/png", ""]
            )
        ),
        "body": draw(TEXT),
    }
    optional = {
        "id": TEXT,
        "rawParams": TEXT,
        "auth": st.sampled_from(["None", "Basic Auth", "Bearer Token", "Digest"]),
        "httpUser": TEXT,
        "httpPassword": TEXT,
        "bearerToken": TEXT,
    }
    for name, strategy in optional.items():
        if draw(st.booleans()):
            record[name] = draw(strategy)
    return record


current_auth = st.one_of(
    st.fixed_dictionaries(
        {"authType": st.sampled_from(["none", "inherit"]), "authActive": st.booleans()}
    ),
    st.fixed_dictionaries(
        {
            "authType": st.just("basic"),
            "authActive": st.booleans(),
            "username": TEXT,
            "password": TEXT,
        }
    ),
    st.fixed_dictionaries(
        {"authType": st.just("bearer"), "authActive": st.booleans(), "token": TEXT}
    ),
    st.fixed_dictionaries(
        {
            "authType": st.just("api-key"),
            "authActive": st.booleans(),
            "key": TEXT,
            "value": TEXT,
            "addTo": ADD_TO,
        }
    ),
    st.fixed_dictionaries(
        {
            "authType": st.just("oauth-2"),
            "authActive": st.booleans(),
            "grantTypeInfo": st.fixed_dictionaries(
                {
                    "grantType": st.just("CLIENT_CREDENTIALS"),
                    "authEndpoint": TEXT,
                    "clientID": TEXT,
                    "clientSecret": TEXT,
                    "token": TEXT,
                },
                optional={"scopes": TEXT},
            ),
            "addTo": ADD_TO,
        }
    ),
    st.fixed_dictionaries(
        {
            "authType": st.just("aws-signature"),
            "authActive": st.booleans(),
            "accessKey": TEXT,
            "secretKey": TEXT,
            "region": TEXT,
            "serviceName": TEXT,
            "addTo": ADD_TO,
        },
        optional={"serviceToken": TEXT},
    ),
)

form_rows = st.one_of(
    st.fixed_dictionaries(
        {"key": TEXT, "active": st.booleans(), "isFile": st.just(False), "value": TEXT},
        optional={"contentType": TEXT},
    ),
    st.fixed_dictionaries(
        {
            "key": TEXT,
            "active": st.booleans(),
            "isFile": st.just(True),
            "value": st.lists(TEXT, max_size=2),
        },
        optional={"contentType": TEXT},
    ),
)

current_bodies = st.one_of(
    st.fixed_dictionaries({"contentType": st.none(), "body": st.none()}),
    st.fixed_dictionaries(
        {"contentType": st.sampled_from(sorted(TEXT_CONTENT_TYPES)), "body": TEXT}
    ),
    st.fixed_dictionaries(
        {"contentType": st.just(FORM_DATA), "body": st.lists(form_rows, max_size=3)}
    ),
    st.fixed_dictionaries(
        {"contentType": st.just(BINARY), "body": st.none() | TEXT}
    ),
)

current_records = st.fixed_dictionaries(
    {
        "v": st.just(str(LATEST_VERSION)),
        "name": TEXT,
        "method": TEXT,
        "endpoint": TEXT,
        "headers": st.lists(key_values, max_size=3),
        "params": st.lists(key_values, max_size=3),
        "preRequestScript": TEXT,
        "testScript": TEXT,
        "auth": current_auth,
        "body": current_bodies,
        "requestVariables": st.lists(key_values, max_size=3),
    },
    optional={"id": TEXT, "_ref_id": TEXT},
)


@given(legacy_records())
def test_every_upgrade_output_validates_at_its_version(raw: dict[str, Any]) -> None:
    value = VERSION_MODULES[0].validate(raw)
    for version in range(1, LATEST_VERSION + 1):
        module = VERSION_MODULES[version]
        value = module.upgrade(value)
        assert type(value) is module.schema
        assert module.matches(to_wire(value))
    assert rest_requests.is_latest(to_wire(value))


@given(current_records)
def test_current_records_migrate_unchanged(raw: dict[str, Any]) -> None:
    assert to_wire(rest_requests.migrate(raw, LATEST_VERSION)) == raw


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ({"v": "3"}, 3),
        ({"v": "07"}, 7),
        ({"v": "99"}, 99),
        ({"v": 7}, None),
        ({"v": "7a"}, None),
        ({"v": "-1"}, None),
        ({"v": ""}, None),
        ("GET /", None),
        (None, None),
    ],
)
def test_detect_request_version(raw: Any, expected: int | None) -> None:
    assert detect_request_version(raw) == expected


def test_detect_untagged_legacy(make_legacy) -> None:
    assert detect_request_version(make_legacy()) == 0
    broken = make_legacy()
    del broken["url"]
    assert detect_request_version(broken) is None


def test_detect_model_instance() -> None:
    assert detect_request_version(get_default_rest_request()) == 7


@given(st.integers(min_value=0, max_value=10**6))
def test_detect_trusts_any_decimal_tag(number: int) -> None:
    assert detect_request_version({"v": str(number)}) == number


def test_safe_parse_reports_unknown_version() -> None:
    result = rest_requests.safe_parse({"v": "99"})
    assert result.ok is False
    assert result.kind is ErrorKind.UNKNOWN_VERSION
    assert result.version == 99


def test_safe_parse_reports_undetected() -> None:
    result = rest_requests.safe_parse({"name": "orphan"})
    assert result.ok is False
    assert result.kind is ErrorKind.UNDETECTED
    assert result.version is None


def test_parse_raises_on_schema_mismatch(make_current) -> None:
    with pytest.raises(SchemaMismatchError):
        rest_requests.parse(make_current(method=None))


def test_safe_parse_accepts_model_instance() -> None:
    default = get_default_rest_request()
    result = rest_requests.safe_parse(default)
    assert result.ok is True
    assert result.value == default


def test_default_request_is_current_and_unique() -> None:
    first = get_default_rest_request()
    second = get_default_rest_request()
    assert first.endpoint == DEFAULT_ENDPOINT
    assert first.auth.auth_type == "inherit"
    assert first.ref_id and second.ref_id
    assert first.ref_id != second.ref_id
    assert rest_requests.is_latest(to_wire(first))


def test_make_rest_request_fills_version(make_current) -> None:
    fields = make_current()
    del fields["v"]
    record = make_rest_request(**fields)
    assert record.v == REST_REQ_SCHEMA_VERSION


def test_make_rest_request_rejects_incomplete_fields() -> None:
    with pytest.raises(ValidationError):
        make_rest_request(name="only a name")


def test_ensure_ref_id(make_current) -> None:
    keeps = rest_requests.parse(make_current())
    assert ensure_ref_id(keeps) is keeps

    raw = make_current()
    del raw["_ref_id"]
    missing = rest_requests.parse(raw)
    assigned = ensure_ref_id(missing)
    assert missing.ref_id is None
    assert assigned.ref_id
    assert to_wire(assigned)["_ref_id"] == assigned.ref_id


def test_is_rest_request_is_deprecated(make_current, make_legacy) -> None:
    with pytest.deprecated_call():
        assert is_rest_request(make_current()) is True
    with pytest.deprecated_call():
        assert is_rest_request(make_legacy()) is False


def test_translate_to_new_request_is_deprecated(make_legacy) -> None:
    with pytest.deprecated_call():
        migrated = translate_to_new_request(make_legacy())
    assert migrated.endpoint == "https://api.example.com/users"
    with pytest.deprecated_call():
        fallback = translate_to_new_request({"v": "99"})
    assert fallback.endpoint == DEFAULT_ENDPOINT
    assert fallback.ref_id
