"""
Smoke test against a real Postal server.

Runs only when the relay is given on the command line (see conftest.py);
skipped otherwise.
"""

from pathlib import Path

from ezpostal import APIClient, Message

FIXTURES = Path(__file__).parent / "fixtures"


def test_send(live_settings):
    client = APIClient.from_config(live_settings.config)

    msg = Message(
        from_addr=live_settings.from_addr,
        to=[live_settings.to_addr],
        subject="Test Email",
        plain_body="Test Email from ezpostal",
    )
    msg.attach_file(FIXTURES / "hello.txt")

    resp = client.send_message(msg)

    assert resp.message_id
    assert resp.messages
