"""Microsoft Graph mail transport for form notifications."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import httpx

from app.schemas.emailSchema import OutboundMessage
from app.services.MailTransport import MailTransportError

logger = logging.getLogger(__name__)


class GraphMailTransport:
    """
    Sends emails through the Graph sendMail endpoint of a single mailbox.

    Uses app-only (client credentials) authentication. The access token is
    cached on the instance and refreshed five minutes before it expires.
    """

    name = "graph"

    BASE_URL = "https://graph.microsoft.com/v1.0"
    TOKEN_URL = "https://login.microsoftonline.com/{tenant_id}/oauth2/v2.0/token"

    def __init__(
        self,
        tenant_id: str,
        client_id: str,
        client_secret: str,
        default_sender: str,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0
    ):
        self.tenant_id = tenant_id
        self.client_id = client_id
        self.client_secret = client_secret
        self.default_sender = default_sender
        self.timeout = timeout
        self._http_transport = http_transport
        self._access_token = None
        self._token_expiry = None

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._http_transport, timeout=self.timeout)

    async def _get_access_token(self, force_refresh: bool = False) -> str:
        """Get access token for application (not user-delegated)."""
        if not force_refresh and self._access_token and self._token_expiry:
            if datetime.now(timezone.utc) < self._token_expiry - timedelta(minutes=5):
                return self._access_token

        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "scope": "https://graph.microsoft.com/.default",
            "grant_type": "client_credentials"
        }

        try:
            async with self._client() as client:
                response = await client.post(self.TOKEN_URL.format(tenant_id=self.tenant_id), data=data)
        except httpx.HTTPError as e:
            raise MailTransportError(f"Token request failed: {e}") from e

        if response.status_code != 200:
            raise MailTransportError(f"Failed to get access token: {response.status_code} - {response.text}")

        token_data = response.json()
        self._access_token = token_data["access_token"]
        expires_in = token_data.get("expires_in", 3600)
        self._token_expiry = datetime.now(timezone.utc) + timedelta(seconds=expires_in)

        logger.info(f"✅ [Graph] New access token obtained, expires in {expires_in}s")
        return self._access_token

    def clear_token_cache(self):
        """Force clear the token cache to get fresh permissions."""
        self._access_token = None
        self._token_expiry = None
        logger.info("🔄 [Graph] Token cache cleared")

    def build_payload(self, message: OutboundMessage) -> dict:
        payload = {
            "message": {
                "subject": message.subject,
                "body": {
                    "contentType": "Text",
                    "content": message.body
                },
                "toRecipients": [{"emailAddress": {"address": message.to}}]
            },
            "saveToSentItems": "true"
        }
        if message.reply_to:
            payload["message"]["replyTo"] = [
                {"emailAddress": {"address": message.reply_to}}
            ]
        return payload

    async def send_mail(self, message: OutboundMessage, retry_with_refresh: bool = True) -> dict:
        """
        Send one email from the configured sender mailbox.

        A 403 response means the cached token lost its permissions and nothing
        was sent, so it is answered once with a fresh token.

        Returns:
            dict with status information

        Raises:
            MailTransportError: token, network or non-2xx Graph failures.
        """
        token = await self._get_access_token()
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json"
        }
        url = f"{self.BASE_URL}/users/{self.default_sender}/sendMail"

        try:
            async with self._client() as client:
                response = await client.post(url, headers=headers, json=self.build_payload(message))
        except httpx.HTTPError as e:
            logger.error(f"❌ [Graph] Request to sendMail failed: {e}")
            raise MailTransportError(f"Graph request failed: {e}") from e

        # A 403 means Graph refused the request and nothing was delivered, so the message is still sent at most once.
        if response.status_code == 403 and retry_with_refresh:
            logger.warning("⚠️ [Graph] Email send got 403, refreshing token and retrying...")
            self.clear_token_cache()
            return await self.send_mail(message, retry_with_refresh=False)

        if response.status_code not in (200, 202):
            logger.error(f"❌ [Graph] Failed to send email: {response.status_code} - {response.text}")
            if response.status_code == 403:
                raise MailTransportError(
                    "Access denied when sending email. Please ensure the app has 'Mail.Send' "
                    f"application permission and the sender mailbox '{self.default_sender}' exists."
                )
            raise MailTransportError(f"Failed to send email: {response.status_code} - {response.text}")

        logger.info(f"✅ [Graph] Email sent to {message.to} (reply-to: {message.reply_to or 'none'})")
        return {
            "status": "sent",
            "from": self.default_sender,
            "to": [message.to],
            "reply_to": message.reply_to,
            "subject": message.subject
        }
