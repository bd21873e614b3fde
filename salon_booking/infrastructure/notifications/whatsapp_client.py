from __future__ import annotations

import logging

import httpx


class TwilioWhatsAppClient:
    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        base_url: str = "https://api.twilio.com/2010-04-01",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._account_sid = account_sid
        self._from_number = from_number
        self._endpoint = f"{base_url.rstrip('/')}/Accounts/{account_sid}/Messages.json"
        self._client = httpx.Client(timeout=timeout, auth=(account_sid, auth_token), transport=transport)
        self._logger = logging.getLogger(__name__)

    def send_text(self, to_number: str, body: str) -> str:
        """Send a WhatsApp message and return the Twilio message SID."""
        payload = {
            "From": f"whatsapp:{self._from_number}",
            "To": f"whatsapp:{to_number}",
            "Body": body,
        }
        resp = self._client.post(self._endpoint, data=payload)
        if resp.status_code >= 400:
            try:
                error_json = resp.json()
                error_code = error_json.get("code")
                error_message = error_json.get("message")
            except Exception:
                error_code = None
                error_message = resp.text

            self._logger.error(
                "WhatsApp send failed",
                extra={
                    "status": resp.status_code,
                    "error_code": error_code,
                    "error_message": error_message,
                    "text_length": len(body),
                },
            )
            resp.raise_for_status()
        return str(resp.json().get("sid", ""))
