import requests
from requests.adapters import HTTPAdapter
from urllib3.util import Retry

from json_assert.config import Settings


def get_session_with_retries(
    retries: int = 3,
    backoff_factor: float = 0.3,
    status_forcelist=(500, 502, 503, 504),
    allowed_methods=frozenset(["GET", "HEAD"]),
) -> requests.Session:
    """
    Return a requests.Session configured with retry/backoff semantics.
    Remote schema documents are fetched through this session.
    """
    session = requests.Session()
    retry = Retry(
        total=retries,
        read=retries,
        connect=retries,
        backoff_factor=backoff_factor,
        status_forcelist=status_forcelist,
        allowed_methods=allowed_methods,
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({"Accept": "application/schema+json, application/json"})
    return session


def session_from_settings(settings: Settings) -> requests.Session:
    session = get_session_with_retries(retries=settings.http_retries)
    # controls TLS cert verification (useful for local self-signed certs)
    session.verify = settings.verify_ssl
    return session
