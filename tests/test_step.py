"""
Tests for running the SIGNL4 provider over a sequence of items.
"""

import json

import pytest
import requests
import responses

from signl4step.providers.base.provider_exceptions import MissingBinaryPropertyException
from signl4step.step.step import Step


@responses.activate
def test_one_result_per_item_in_order(context_manager, signl4_provider, signl4_webhook):
    for event_id in ("evt-1", "evt-2", "evt-3"):
        responses.add(responses.POST, signl4_webhook, json={"eventId": event_id})

    step = Step(
        context_manager,
        "resolve-alerts",
        signl4_provider,
        {"operation": "resolve", "external_id": "{{ item.json.id }}"},
    )
    results = step.run([{"id": "a"}, {"id": "b"}, {"id": "c"}])

    assert results == [{"eventId": "evt-1"}, {"eventId": "evt-2"}, {"eventId": "evt-3"}]
    sent_ids = [json.loads(call.request.body)["X-S4-ExternalID"] for call in responses.calls]
    assert sent_ids == ["a", "b", "c"]
    assert context_manager.steps_context["resolve-alerts"]["results"] == results


@responses.activate
def test_list_responses_are_flattened(context_manager, signl4_provider, signl4_webhook):
    responses.add(responses.POST, signl4_webhook, json=[{"eventId": "1"}, {"eventId": "2"}])
    responses.add(responses.POST, signl4_webhook, json={"eventId": "3"})

    step = Step(context_manager, "send-alerts", signl4_provider, {"message": "hi"})
    results = step.run([{}, {}])

    assert results == [{"eventId": "1"}, {"eventId": "2"}, {"eventId": "3"}]


@responses.activate
def test_parameters_are_rendered_per_item(context_manager, signl4_provider, signl4_webhook):
    responses.add(responses.POST, signl4_webhook, json={"eventId": "evt"})

    step = Step(
        context_manager,
        "send-alerts",
        signl4_provider,
        {
            "message": "{{ item.json.host }} & {{ item.json.check }} failed",
            "additional_fields": {
                "title": "Check failed",
                "external_id": "{{ item.json.host }}",
            },
        },
    )
    step.run([{"json": {"host": "db-01", "check": "disk"}}])

    body = responses.calls[0].request.body.decode()
    assert 'name="message"\r\n\r\ndb-01 & disk failed\r\n' in body
    assert 'name="X-S4-ExternalID"\r\n\r\ndb-01\r\n' in body
    assert step.provider_parameters["additional_fields"]["external_id"] == (
        "{{ item.json.host }}"
    )


@responses.activate
def test_first_error_aborts_the_step(context_manager, signl4_provider, signl4_webhook):
    responses.add(responses.POST, signl4_webhook, status=500)
    responses.add(responses.POST, signl4_webhook, json={"eventId": "never"})

    step = Step(context_manager, "send-alerts", signl4_provider, {"message": "hi"})
    with pytest.raises(requests.exceptions.HTTPError):
        step.run([{}, {}])

    assert len(responses.calls) == 1


@responses.activate
def test_missing_binary_on_later_item_aborts(
    context_manager, signl4_provider, signl4_webhook, png_item
):
    responses.add(responses.POST, signl4_webhook, json={"eventId": "evt-1"})

    step = Step(
        context_manager,
        "send-alerts",
        signl4_provider,
        {"message": "hi", "additional_fields": {"attachment": {"property_name": "data"}}},
    )

    with pytest.raises(MissingBinaryPropertyException):
        step.run([png_item, {"json": {"id": "no-binary"}}])

    # the first item carries the binary, only the second one fails
    assert len(responses.calls) == 1


def test_empty_input(context_manager, signl4_provider):
    step = Step(context_manager, "send-alerts", signl4_provider, {"message": "hi"})

    assert step.run([]) == []
    assert step.name == "send-alerts"


@responses.activate
def test_resolve_renders_external_id_from_item_json(
    context_manager, signl4_provider, signl4_webhook
):
    responses.add(responses.POST, signl4_webhook, json={"eventId": "evt"})

    step = Step(
        context_manager,
        "resolve-alerts",
        signl4_provider,
        {"operation": "resolve", "external_id": "{{ item.json.id }}"},
    )
    step.run([{"json": {"id": "abc"}}])

    assert json.loads(responses.calls[0].request.body)["X-S4-ExternalID"] == "abc"


@responses.activate
def test_failed_step_log_hides_team_secret(
    context_manager, signl4_provider, signl4_webhook, caplog
):
    responses.add(responses.POST, signl4_webhook, status=401)

    step = Step(context_manager, "send-alerts", signl4_provider, {"message": "hi"})
    with pytest.raises(requests.exceptions.HTTPError):
        step.run([{}])

    assert "Failed to run step send-alerts" in caplog.text
    assert "test-team-secret" not in caplog.text
