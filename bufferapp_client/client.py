"""
Client implementation for the Buffer REST API.

This module defines the :class:`BufferClient` class which walks a user
through the OAuth2 authorization code grant, stores the resulting
access token and calls Buffer API endpoints with it.

Usage
-----

.. code-block:: python

    from bufferapp_client import BufferClient

    client = BufferClient(
        client_id="abc123",
        client_secret="shhsecret",
        callback_url="https://example.com/buffer/callback",
    )

    # Send the user to Buffer to authorize the application
    redirect_to = client.build_login_url()

    # Back on the callback, trade the ``code`` query parameter for a token
    token = client.exchange_code(request.args["code"])
    if "error" in token:
        ...

    profiles = client.call("/profiles")
    client.call(
        "/updates/create",
        {"text": "Hello", "profile_ids": [profiles[0]["id"]], "now": True},
    )

Errors are returned, not raised: every failed call, including one that
never reached Buffer because of a network failure, yields a mapping with
an ``error`` key.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode

import requests

from .endpoints import GET, EndpointResolver
from .errors import INVALID_ENDPOINT, normalize_error
from .params import flatten_params
from .result import ApiResult

logger = logging.getLogger(__name__)


class BufferClient:
    """A client for the Buffer v1 REST API.

    Parameters
    ----------
    client_id : str
        The OAuth client identifier of your Buffer application.
    client_secret : str
        The OAuth client secret of your Buffer application.
    callback_url : str
        The redirect URI registered for your application.  Buffer sends
        the user back here with a ``code`` query parameter.
    code : str, optional
        An authorization code already received on the callback.  It is
        used by :meth:`exchange_code` when no code is passed explicitly.
    access_token : str, optional
        A previously obtained access token.  Supplying one skips the
        OAuth flow entirely.
    secure : bool, optional
        Verify TLS certificates and host names.  Defaults to ``True``.
        Setting it to ``False`` disables verification for every request
        and is logged as a warning each time.
    timeout : float, optional
        Timeout in seconds for every HTTP request.  Defaults to 30.
    authorize_url : str, optional
        Override the OAuth authorization page URL.
    token_url : str, optional
        Override the OAuth token exchange URL.
    base_url : str, optional
        Override the API base URL.
    resolver : EndpointResolver, optional
        Resolver used by :meth:`call`.  Defaults to the built-in table.
    session : requests.Session, optional
        Session used for all HTTP traffic.  A new one is created when
        not supplied.

    Notes
    -----
    :meth:`is_ok` and :attr:`last_result` describe only the most recent
    request made through this instance.  When one client is shared
    between threads use the ``*_result`` methods, which return the
    outcome of each call directly.
    """

    AUTHORIZE_URL = "https://bufferapp.com/oauth2/authorize"
    TOKEN_URL = "https://api.bufferapp.com/1/oauth2/token.json"
    BASE_URL = "https://api.bufferapp.com/1"
    USER_AGENT = "bufferapp-client/1.0"

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        callback_url: Optional[str] = None,
        *,
        code: Optional[str] = None,
        access_token: Optional[str] = None,
        secure: bool = True,
        timeout: Optional[float] = 30.0,
        authorize_url: Optional[str] = None,
        token_url: Optional[str] = None,
        base_url: Optional[str] = None,
        resolver: Optional[EndpointResolver] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.client_id: Optional[str] = None
        self.client_secret: Optional[str] = None
        self.callback_url: Optional[str] = None
        if client_id:
            self.set_client_id(client_id)
        if client_secret:
            self.set_client_secret(client_secret)
        if callback_url:
            self.set_callback_url(callback_url)

        self.code = code
        self.access_token = access_token

        self.secure = secure
        self.timeout = timeout
        self.authorize_url = authorize_url or self.AUTHORIZE_URL
        self.token_url = token_url or self.TOKEN_URL
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.resolver = resolver or EndpointResolver()

        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": self.USER_AGENT})
        self.session = session

        self._last_result = ApiResult(ok=True)

    def __enter__(self) -> "BufferClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------
    def set_client_id(self, client_id: str) -> None:
        self.client_id = client_id

    def set_client_secret(self, client_secret: str) -> None:
        self.client_secret = client_secret

    def set_callback_url(self, callback_url: str) -> None:
        self.callback_url = callback_url

    def set_access_token(self, access_token: Optional[str]) -> None:
        """Use ``access_token`` for every following request."""
        self.access_token = access_token

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def build_login_url(self, extra_params: Optional[Mapping[str, Any]] = None) -> str:
        """Return the Buffer URL to redirect the user to for authorization.

        Parameters
        ----------
        extra_params : mapping, optional
            Additional query parameters.  They are merged over the
            defaults, so they may also replace ``redirect_uri`` and the
            like.

        Returns
        -------
        str
            ``authorize_url`` with ``client_id``, ``redirect_uri``,
            ``response_type=code`` and ``extra_params`` in the query.
        """
        query: Dict[str, Any] = {
            "client_id": self.client_id,
            "redirect_uri": self.callback_url,
            "response_type": "code",
        }
        if extra_params:
            query.update(extra_params)
        return f"{self.authorize_url}?{urlencode(flatten_params(query))}"

    def exchange_code(self, code: Optional[str] = None) -> Any:
        """Trade an authorization code for an access token.

        If ``code`` is given it replaces the stored authorization code.
        On success the ``access_token`` from the response is stored and
        used for all later requests.

        Returns
        -------
        dict
            The full token response.  When the exchange fails the
            normalized error response is returned unchanged, so callers
            should check for an ``error`` key.
        """
        if code is not None:
            self.code = code

        payload = {
            "code": self.code,
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.callback_url,
        }
        response = self.post(self.token_url, payload)

        if not isinstance(response, dict) or response.get("access_token") is None:
            logger.warning("Buffer token exchange did not return an access token")
            return response

        self.set_access_token(response["access_token"])
        logger.info("Stored Buffer access token")
        return response

    # ------------------------------------------------------------------
    # Endpoint dispatch
    # ------------------------------------------------------------------
    def call_result(self, path: str, data: Optional[Mapping[str, Any]] = None) -> ApiResult:
        """Call the API endpoint ``path`` and return the :class:`ApiResult`.

        ``path`` is a concrete endpoint path such as
        ``/profiles/4eb854340acb04e870000010/updates/pending``.  Paths
        that match no known endpoint produce an ``invalid-endpoint``
        error without touching the network.
        """
        endpoint = self.resolver.resolve(path)
        if endpoint is None:
            logger.warning("No Buffer endpoint matches %r", path)
            result = ApiResult(ok=False, data=normalize_error(INVALID_ENDPOINT))
            self._last_result = result
            return result

        params: Dict[str, Any] = dict(data) if isinstance(data, Mapping) else {}
        params["access_token"] = self.access_token

        url = f"{self.base_url}{path}.json"
        return self.request_result(url, params, post=endpoint.verb != GET)

    def call(self, path: str, data: Optional[Mapping[str, Any]] = None) -> Any:
        """Call the API endpoint ``path`` and return the decoded response.

        See :meth:`call_result` for details.
        """
        return self.call_result(path, data).data

    # ------------------------------------------------------------------
    # HTTP request helpers
    # ------------------------------------------------------------------
    def request_result(
        self,
        url: str,
        data: Optional[Mapping[str, Any]] = None,
        post: bool = True,
    ) -> ApiResult:
        """Perform a single HTTP request and return its :class:`ApiResult`.

        Parameters
        ----------
        url : str
            The absolute URL to request.  An empty URL fails immediately
            with a result whose ``ok`` is false and ``data`` is ``None``.
        data : mapping, optional
            Request parameters.  They are sent form-encoded in the body
            for POST and as the query string for GET.  Nested mappings and
            lists are flattened with :func:`flatten_params`.
        post : bool, optional
            Send a POST when true (the default), otherwise a GET.

        Returns
        -------
        ApiResult
            ``ok`` is false for HTTP statuses of 400 and above and for
            network failures (DNS, TLS, timeout).  A network failure has
            no ``status_code`` and ``data`` is
            ``{"error": "Failed to connect to <url>: <reason>"}``.
        """
        self._last_result = ApiResult(ok=True)

        if not url:
            self._last_result = ApiResult(ok=False)
            return self._last_result

        method = "POST" if post else "GET"
        payload = flatten_params(data) if isinstance(data, Mapping) else []
        options: Dict[str, Any] = {"timeout": self.timeout, "verify": self.secure}
        if post:
            options["data"] = payload
        else:
            options["params"] = payload

        if not self.secure:
            logger.warning(
                "TLS verification is disabled for %s %s (secure=False)", method, url
            )
        logger.debug("%s %s", method, url)

        try:
            response = self.session.request(method, url, **options)
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            self._last_result = ApiResult(
                ok=False, data={"error": f"Failed to connect to {url}: {exc}"}
            )
            return self._last_result

        if response.status_code >= 400:
            logger.warning("%s %s returned HTTP %s", method, url, response.status_code)
            self._last_result = ApiResult(
                ok=False,
                status_code=response.status_code,
                data=normalize_error(response.status_code, response.text),
            )
            return self._last_result

        try:
            content = response.json()
        except ValueError:
            content = None
            if response.text:
                logger.warning("%s %s returned a body that is not JSON", method, url)
        self._last_result = ApiResult(
            ok=True, status_code=response.status_code, data=content
        )
        return self._last_result

    def request(
        self,
        url: str,
        data: Optional[Mapping[str, Any]] = None,
        post: bool = True,
    ) -> Any:
        """Perform an HTTP request and return the decoded response.

        See :meth:`request_result` for full parameter documentation.
        """
        return self.request_result(url, data, post).data

    def get(self, url: str, data: Optional[Mapping[str, Any]] = None) -> Any:
        """Perform a GET request with ``data`` as the query string."""
        return self.request(url, data, post=False)

    def post(self, url: str, data: Optional[Mapping[str, Any]] = None) -> Any:
        """Perform a POST request with ``data`` as a form-encoded body."""
        return self.request(url, data, post=True)

    # ------------------------------------------------------------------
    # Last request status
    # ------------------------------------------------------------------
    @property
    def last_result(self) -> ApiResult:
        return self._last_result

    def is_ok(self) -> bool:
        """Return whether the most recent request succeeded."""
        return self._last_result.ok
