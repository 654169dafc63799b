# backend/app/services/providers/client.py
from datetime import datetime
from urllib.parse import urlsplit

import requests
import tenacity

from backend.app.core import config

# --- Tenacity Retry Strategy ---
# PROVIDER_MAX_ATTEMPTS defaults to 1, so a failing provider fails the request
# straight away; operators can raise it to retry network and HTTP errors.
# A 2xx body that is not JSON is never refetched.
RETRYABLE_ERRORS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
    requests.exceptions.HTTPError,
)

retry_strategy = tenacity.retry(
    stop=tenacity.stop_after_attempt(config.PROVIDER_MAX_ATTEMPTS),
    wait=tenacity.wait_fixed(config.PROVIDER_RETRY_WAIT_SECONDS),
    retry=tenacity.retry_if_exception_type(RETRYABLE_ERRORS),
    reraise=True # Surface the provider's own exception, not tenacity.RetryError
)


@retry_strategy
def fetch_provider_json(url: str, headers: dict | None = None) -> dict:
    """
    GET a provider endpoint and return its decoded JSON body.
    Raises requests.exceptions.RequestException on network/HTTP/JSON errors.
    """
    # Only the host is printed: keys travel in the path or query string
    host = urlsplit(url).netloc
    print(f"[{datetime.now()}] Fetching provider data from {host}...")
    response = requests.get(url, headers=headers, timeout=config.PROVIDER_TIMEOUT_SECONDS)
    response.raise_for_status() # This will raise an HTTPError for 4xx/5xx responses
    print(f"[{datetime.now()}] Successfully received provider data from {host}.")
    return response.json()
