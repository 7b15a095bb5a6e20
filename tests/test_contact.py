from controllers import contact_controller
from tests.payloads import CONTACT


def test_contact_end_to_end(client, admin_client):
    resp = client.post("/api/contact", json=CONTACT)
    assert resp.status_code == 201
    message = resp.get_json()
    assert message["isRead"] is False
    assert message["createdAt"]
    assert message["email"] == "a@b.com"

    listed = admin_client.get("/api/contact-messages").get_json()
    assert [m["id"] for m in listed] == [message["id"]]

    resp = admin_client.put(f"/api/contact-messages/{message['id']}/read")
    assert resp.status_code == 200
    assert resp.get_json()["isRead"] is True
    assert admin_client.get("/api/contact-messages").get_json()[0]["isRead"] is True

    resp = admin_client.delete(f"/api/contact-messages/{message['id']}")
    assert resp.status_code == 204
    assert admin_client.get("/api/contact-messages").get_json() == []


def test_client_cannot_preset_read_flag(client, storage):
    resp = client.post("/api/contact", json=dict(CONTACT, isRead=True))
    assert resp.get_json()["isRead"] is False


def test_invalid_contact_rejected(client, storage):
    resp = client.post("/api/contact", json=dict(CONTACT, email="nope"))
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Invalid contact message data"
    assert storage.get_all_contact_messages() == []


def test_message_admin_endpoints_gated(client, user_client):
    client.post("/api/contact", json=CONTACT)
    for c in (client, user_client):
        assert c.get("/api/contact-messages").status_code == 401
        assert c.put("/api/contact-messages/1/read").status_code == 401
        assert c.delete("/api/contact-messages/1").status_code == 401


def test_unknown_message_is_404(admin_client):
    assert admin_client.put("/api/contact-messages/42/read").status_code == 404
    assert admin_client.delete("/api/contact-messages/42").status_code == 404


def test_admin_notified_when_configured(app, client, monkeypatch):
    sent = []

    def fake_send(subject, recipients, html_body, text_body=None, sender=None, reply_to=None):
        sent.append((subject, recipients, reply_to, text_body))

    monkeypatch.setattr(contact_controller, "send_email_async", fake_send)
    app.config["ADMIN_EMAIL"] = "owner@example.com"

    assert client.post("/api/contact", json=CONTACT).status_code == 201
    assert len(sent) == 1
    subject, recipients, reply_to, text_body = sent[0]
    assert recipients == ["owner@example.com"]
    assert reply_to == "a@b.com"
    assert "Hi" in subject
    assert "test" in text_body


def test_mail_failure_does_not_fail_request(app, client, monkeypatch):
    def broken_send(*args, **kwargs):
        raise RuntimeError("smtp down")

    monkeypatch.setattr(contact_controller, "send_email_async", broken_send)
    app.config["ADMIN_EMAIL"] = "owner@example.com"

    assert client.post("/api/contact", json=CONTACT).status_code == 201


def test_no_notification_without_admin_email(client, monkeypatch):
    sent = []
    monkeypatch.setattr(contact_controller, "send_email_async", lambda *a, **k: sent.append(a))
    assert client.post("/api/contact", json=CONTACT).status_code == 201
    assert sent == []
