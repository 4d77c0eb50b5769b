"""Create, update and retrieval steps for every question type.

The working payload lives on `context.payload`. It is loaded from a fixture,
adjusted field by field (dotted paths reach into nested objects such as
`content_details`), then sent by a When step.
"""

from __future__ import annotations

import json

from behave import given, when  # type: ignore

from content_e2e.fixtures import fixture_entry, load_fixture, merge_payload
from content_e2e.scenario import interpolate, remove_path, set_path

from common_steps import _record, _remember_reference, _text, _value, _vars


def _fixtures_dir(context):
    return context.client.fixtures_dir


def _payload(context) -> dict:
    assert context.payload is not None, "No payload loaded in this scenario"
    return context.payload


# ------------------
# Authentication state
# ------------------

@given("I am logged in")
def step_logged_in(context):
    if context.session.get("logged_in") and context.client.access_token:
        return
    resp = context.client.login_and_store_tokens()
    _record(context, resp)
    assert resp.status_code == 200, f"Login failed with {resp.status_code}: {resp.text[:200]}"
    assert context.client.access_token, f"Login returned 200 without jwt.accessToken: {resp.text[:200]}"
    context.session["logged_in"] = True


@given("I am not authenticated")
def step_not_authenticated(context):
    context.send_auth = False


@given('I use the access token "{token}"')
def step_use_token(context, token: str):
    _vars(context)["_token_before_override"] = context.client.access_token or ""
    context.client.access_token = _text(token, context)


# ------------------
# Payload construction
# ------------------

@given('the payload from fixture "{fixture}"')
def step_payload_fixture(context, fixture: str):
    context.payload = load_fixture(fixture, _fixtures_dir(context))


@given('the payload entry "{entry}" from fixture "{fixture}"')
def step_payload_entry(context, entry: str, fixture: str):
    context.payload = fixture_entry(fixture, entry, _fixtures_dir(context))


@given('the payload is overridden with entry "{entry}" from fixture "{fixture}"')
def step_payload_override_entry(context, entry: str, fixture: str):
    overrides = fixture_entry(fixture, entry, _fixtures_dir(context))
    context.payload = merge_payload(_payload(context), overrides)


@given("the payload is overridden with")
def step_payload_override_doc(context):
    overrides = json.loads(interpolate(context.text, _vars(context)))
    assert isinstance(overrides, dict), "Override document must be a JSON object"
    context.payload = merge_payload(_payload(context), overrides)


@given('the payload field "{path}" is removed')
def step_payload_remove(context, path: str):
    remove_path(_payload(context), path)


@given('the payload field "{path}" is a string of {length:d} characters')
def step_payload_long_string(context, path: str, length: int):
    seed = "Long text for boundary checks. "
    set_path(_payload(context), path, (seed * (length // len(seed) + 1))[:length])


@given('the payload field "{path}" is set to {value}')
def step_payload_set(context, path: str, value: str):
    set_path(_payload(context), path, _value(value, context))


@given("the payload is an empty object")
def step_payload_empty(context):
    context.payload = {}


# ------------------
# Create
# ------------------

def _create(context, qtype: str, payload: dict):
    resp = context.client.create_question(qtype, payload, authenticated=context.send_auth)
    _record(context, resp)
    if resp.status_code == 201:
        _remember_reference(context, "last")
    return resp


@when('I create a "{qtype}" question')
def step_create(context, qtype: str):
    _create(context, qtype, _payload(context))


@given('a "{qtype}" question created from fixture "{fixture}" as "{alias}"')
@when('I create a "{qtype}" question from fixture "{fixture}" as "{alias}"')
def step_create_alias(context, qtype: str, fixture: str, alias: str):
    resp = _create(context, qtype, load_fixture(fixture, _fixtures_dir(context)))
    assert resp.status_code == 201, f"Create failed with {resp.status_code}: {resp.text[:200]}"
    _remember_reference(context, alias)


@when('I create a "{qtype}" question from fixture "{fixture}"')
def step_create_fixture(context, qtype: str, fixture: str):
    _create(context, qtype, load_fixture(fixture, _fixtures_dir(context)))


@given('a "{qtype}" question created from the payload as "{alias}"')
def step_create_payload_alias(context, qtype: str, alias: str):
    resp = _create(context, qtype, _payload(context))
    assert resp.status_code == 201, f"Create failed with {resp.status_code}: {resp.text[:200]}"
    _remember_reference(context, alias)


# ------------------
# Update
# ------------------

def _update(context, qtype: str, content_id: str, payload: dict):
    cid = _text(content_id, context)
    resp = context.client.update_question(qtype, cid, payload, authenticated=context.send_auth)
    _record(context, resp)
    return resp


@when('I update "{qtype}" question "{content_id}" from fixture "{fixture}"')
def step_update_fixture(context, qtype: str, content_id: str, fixture: str):
    _update(context, qtype, content_id, load_fixture(fixture, _fixtures_dir(context)))


@when('I update "{qtype}" question "{content_id}"')
def step_update(context, qtype: str, content_id: str):
    _update(context, qtype, content_id, _payload(context))


@given('"{alias}" is updated as "{qtype}" from fixture "{fixture}"')
def step_given_updated(context, alias: str, qtype: str, fixture: str):
    resp = _update(context, qtype, "{" + alias + "}", load_fixture(fixture, _fixtures_dir(context)))
    assert resp.status_code == 200, f"Update failed with {resp.status_code}: {resp.text[:200]}"


# ------------------
# Retrieval
# ------------------

@when('I get content "{content_id}" with languages "{languages}"')
def step_get_content_languages(context, content_id: str, languages: str):
    resp = context.client.get_content_with_languages(_text(content_id, context), _text(languages, context))
    _record(context, resp)


@when('I get content "{content_id}" with encryption "{flag}"')
def step_get_content_encrypted(context, content_id: str, flag: str):
    resp = context.client.get_content_encrypted(_text(content_id, context), _text(flag, context))
    _record(context, resp)


@when('I get content "{content_id}"')
def step_get_content(context, content_id: str):
    _record(context, context.client.get_content(_text(content_id, context)))


@when('I get question "{content_id}" in language "{language}"')
def step_get_question_language(context, content_id: str, language: str):
    resp = context.client.get_question(_text(content_id, context), language=_text(language, context))
    _record(context, resp)


@when('I get question "{content_id}"')
def step_get_question(context, content_id: str):
    _record(context, context.client.get_question(_text(content_id, context)))
