import json

import pytest

from agrinova_contact.api.contact_handler import ContactHandler, build_subject, client_ip
from agrinova_contact.contact.validation import EMAIL_ERROR

FALLBACK = "Failed to send your message. Please email us directly at oselu@agrinovalabs.site"


async def post(handler, body, headers=None):
    raw = body if isinstance(body, str) else json.dumps(body)
    return await handler.handle("POST", headers or {"X-Forwarded-For": "10.0.0.1"}, raw)


@pytest.mark.asyncio
async def test_successful_submission_sends_both_emails(context, fake_zoho, make_submission):
    handler = ContactHandler(context)

    resp = await post(handler, make_submission())

    assert resp.status_code == 200
    assert resp.body["success"] is True
    assert "Thank you, Jane!" in resp.body["message"]
    assert resp.headers["Content-Type"] == "application/json"
    assert resp.headers["Access-Control-Allow-Origin"] == "https://agrinovaai.com"

    sent = [json.loads(r.content) for r in fake_zoho.send_requests]
    assert [m["toAddress"] for m in sent] == ["oselu@agrinovalabs.site", "jane@example.com"]
    assert sent[0]["subject"] == "AgriNova Inquiry — from Jane Doe"
    assert sent[0]["fromAddress"] == "AgriNova Labs Website <noreply@agrinovalabs.site>"
    assert sent[1]["fromAddress"] == "AgriNova Labs <noreply@agrinovalabs.site>"
    assert sent[1]["subject"] == "We received your message, Jane! — AgriNova Labs"
    # One token exchange serves both sends
    assert len(fake_zoho.token_requests) == 1


@pytest.mark.asyncio
async def test_invalid_email_returns_validation_errors(context, fake_zoho, make_submission):
    resp = await post(ContactHandler(context), make_submission(email="not-an-email"))

    assert resp.status_code == 400
    assert resp.body == {"success": False, "errors": [EMAIL_ERROR]}
    assert fake_zoho.send_requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", ["{not json", "[]", "null", '"text"'])
async def test_bad_json_body(context, raw):
    resp = await post(ContactHandler(context), raw)

    assert resp.status_code == 400
    assert resp.body == {"success": False, "error": "Invalid JSON body."}


@pytest.mark.asyncio
async def test_empty_body_defaults_fields_then_fails_validation(context):
    resp = await ContactHandler(context).handle("POST", {}, "")

    assert resp.status_code == 400
    assert len(resp.body["errors"]) == 3


@pytest.mark.asyncio
async def test_options_is_preflight(context):
    resp = await ContactHandler(context).handle("OPTIONS", {}, None)

    assert resp.status_code == 204
    assert resp.body is None
    assert resp.render_body() == ""
    assert resp.headers == {
        "Access-Control-Allow-Origin": "https://agrinovaai.com",
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "patch"])
async def test_other_methods_not_allowed(context, method):
    resp = await ContactHandler(context).handle(method, {}, None)

    assert resp.status_code == 405
    assert resp.body == {"success": False, "error": "Method Not Allowed"}
    assert resp.headers["Access-Control-Allow-Methods"] == "POST, OPTIONS"


@pytest.mark.asyncio
async def test_rate_limit_applies_per_forwarded_ip(context, make_submission):
    handler = ContactHandler(context)
    headers = {"x-forwarded-for": "203.0.113.9, 10.0.0.1"}

    for _ in range(10):
        resp = await post(handler, make_submission(), headers)
        assert resp.status_code == 200

    resp = await post(handler, make_submission(), headers)
    assert resp.status_code == 429
    assert resp.body == {
        "success": False,
        "error": "Too many submissions. Please wait 15 minutes and try again.",
    }

    other = await post(handler, make_submission(), {"X-Forwarded-For": "198.51.100.4"})
    assert other.status_code == 200


@pytest.mark.asyncio
async def test_rate_limit_counts_invalid_submissions(context):
    handler = ContactHandler(context)
    for _ in range(10):
        await post(handler, "{bad", {})
    resp = await post(handler, "{bad", {})
    assert resp.status_code == 429


@pytest.mark.asyncio
async def test_invalid_token_on_notification_skips_auto_reply(context, fake_zoho, make_submission, caplog):
    fake_zoho.send_replies = [(401, {"data": {"errorCode": "INVALID_OAUTHTOKEN", "moreInfo": "secret-detail"}})]

    resp = await post(ContactHandler(context), make_submission())

    assert resp.status_code == 500
    assert resp.body == {"success": False, "error": FALLBACK}
    assert len(fake_zoho.send_requests) == 1
    assert "AuthError" in caplog.text


@pytest.mark.asyncio
async def test_auto_reply_failure_is_generic_500(context, fake_zoho, make_submission):
    fake_zoho.send_replies = [
        (200, {"data": {"messageId": "m-1"}}),
        (400, {"data": {"errorCode": "QUOTA_EXCEEDED"}}),
    ]

    resp = await post(ContactHandler(context), make_submission())

    assert resp.status_code == 500
    assert resp.body["error"] == FALLBACK
    assert "QUOTA" not in json.dumps(resp.body)
    assert len(fake_zoho.send_requests) == 2


@pytest.mark.asyncio
async def test_missing_account_is_generic_500(context, make_submission):
    context.settings.account_id = ""

    resp = await post(ContactHandler(context), make_submission())

    assert resp.status_code == 500
    assert resp.body["error"] == FALLBACK


@pytest.mark.asyncio
async def test_user_fields_are_escaped_in_html(context, fake_zoho, make_submission):
    body = make_submission(
        firstName='<b>Jo</b>',
        lastName='"&"',
        interest="Drones",
        message="<script>alert('x')</script> long enough",
    )

    resp = await post(ContactHandler(context), body)

    assert resp.status_code == 200
    team, reply = [json.loads(r.content) for r in fake_zoho.send_requests]
    assert "<script>" not in team["content"]
    assert "&lt;script&gt;" in team["content"]
    assert "&lt;b&gt;Jo&lt;/b&gt; &quot;&amp;&quot;" in team["content"]
    assert "<b>Jo</b>" not in reply["content"]
    assert team["subject"] == 'AgriNova Inquiry: Drones — from <b>Jo</b> "&"'
    assert "<script>alert('x')</script>" in team["altText"]


def test_build_subject():
    assert build_subject("Precision Farming", "Jane Doe") == "AgriNova Inquiry: Precision Farming — from Jane Doe"
    assert build_subject("   ", "Jane") == "AgriNova Inquiry — from Jane"


def test_client_ip():
    assert client_ip({"X-Forwarded-For": " 1.1.1.1 , 2.2.2.2"}) == "1.1.1.1"
    assert client_ip({"x-forwarded-for": ""}) == "unknown"
    assert client_ip({}) == "unknown"


@pytest.mark.asyncio
async def test_default_origin_is_wildcard(context):
    context.settings.allowed_origin = "*"
    resp = await ContactHandler(context).handle("OPTIONS", {}, None)
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
