"""Inbound Twilio webhook.

Twilio posts each incoming WhatsApp message as a form to
`/api/webhook/twilio`. The reply is sent back through the messenger rather
than as TwiML, so the endpoint always answers 200 with an empty body.
"""
import logging
from typing import Callable

from flask import Flask, jsonify, request

from commands import CommandInterpreter
from hetzner import HetznerClient
from messaging import TwilioMessenger, strip_whatsapp_prefix
from settings import Settings


logger = logging.getLogger(__name__)

WEBHOOK_PATH = "/api/webhook/twilio"
ERROR_REPLY = "An error occurred. Please try again later."

ClientFactory = Callable[[], HetznerClient]


def create_app(
    settings: Settings,
    messenger: TwilioMessenger,
    client_factory: ClientFactory,
) -> Flask:
    """Build the Flask app.

    `client_factory` is called once per message; the client is closed when
    the message has been handled.
    """
    app = Flask(__name__)
    allowed = {strip_whatsapp_prefix(number) for number in settings.allowed_phone_numbers}

    @app.get("/health")
    def health():
        return jsonify({"status": "ok"})

    @app.get(WEBHOOK_PATH)
    def verify():
        return "Webhook is active"

    @app.post(WEBHOOK_PATH)
    def receive():
        sender = request.form.get("From") or ""
        body = request.form.get("Body") or "help"
        logger.info(f"Received WhatsApp message from {sender}: {body}")

        if not sender:
            logger.warning("Webhook call without a From field; ignoring")
            return "", 200

        if allowed and strip_whatsapp_prefix(sender) not in allowed:
            logger.warning(f"Unauthorized access attempt from {sender}")
            return "", 200

        try:
            with client_factory() as client:
                reply = CommandInterpreter(client).interpret(body)
        except Exception:
            logger.exception("Error processing webhook")
            reply = ERROR_REPLY

        messenger.send(sender, reply)
        return "", 200

    return app


__all__ = ["create_app", "WEBHOOK_PATH"]
