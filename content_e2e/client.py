"""HTTP client for the content-authoring API.

Wraps a single `httpx.Client` and mirrors the operations scenarios need:
login, create/update per question type, and content retrieval. Non-2xx
responses are returned, never raised, so negative scenarios can assert on them.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union
from urllib.parse import quote

import httpx

from content_e2e.config import E2EConfig
from content_e2e.fixtures import load_fixture, merge_payload
from content_e2e.question_types import (
    QuestionType,
    create_path,
    items_path,
    question_path,
    resolve,
    update_path,
)
from content_e2e.tasks import TaskRegistry

logger = logging.getLogger(__name__)

LOGIN_PATH = "/api/authX/login"

QType = Union[str, QuestionType]


def _qt(qtype: QType) -> QuestionType:
    return qtype if isinstance(qtype, QuestionType) else resolve(qtype)


def _segment(value: Any) -> str:
    return quote(str(value), safe="")


def _access_token(resp: httpx.Response) -> Optional[str]:
    """`jwt.accessToken` from a login response, or None when the body lacks it."""
    try:
        body = resp.json()
    except ValueError:
        return None
    jwt = body.get("jwt") if isinstance(body, dict) else None
    token = jwt.get("accessToken") if isinstance(jwt, dict) else None
    return token if isinstance(token, str) and token else None


def encryption_header(encrypt: Union[bool, str]) -> str:
    if isinstance(encrypt, bool):
        return "true" if encrypt else "false"
    return str(encrypt)


class ContentApiClient:
    def __init__(
        self,
        config: E2EConfig,
        *,
        tasks: Optional[TaskRegistry] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.config = config
        self.tasks = tasks
        self.fixtures_dir = Path(config.runner.fixtures_dir)
        self.access_token: Optional[str] = config.auth.access_token
        self.last_created: Optional[Tuple[str, str]] = None
        self._http = httpx.Client(
            base_url=config.runner.base_url,
            timeout=httpx.Timeout(config.runner.request_timeout),
            transport=transport,
        )

    # ------------------
    # Plumbing
    # ------------------

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ContentApiClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def auth_headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> httpx.Response:
        resp = self._http.request(
            method.upper(),
            path,
            json=json,
            headers=dict(headers or {}),
            params=dict(params) if params else None,
        )
        ctype = resp.headers.get("content-type", "-")
        ts = datetime.now(timezone.utc).isoformat()
        logger.info("[HTTP] %s %s %s -> %s ct=%s", ts, method.upper(), resp.request.url.raw_path.decode("ascii", "replace"), resp.status_code, ctype)
        return resp

    # ------------------
    # Authentication
    # ------------------

    def login(
        self,
        username: Optional[str],
        password: Optional[str],
        product_id: Optional[str] = None,
        device_id: Optional[str] = None,
    ) -> httpx.Response:
        body: Dict[str, Any] = {"username": username, "password": password}
        if product_id is not None:
            body["product_id"] = product_id
        if device_id is not None:
            body["device_id"] = device_id
        return self.login_raw(body)

    def login_raw(self, body: Mapping[str, Any]) -> httpx.Response:
        return self.request("POST", LOGIN_PATH, json=dict(body), headers={"Content-Type": "application/json"})

    def login_with_env(self) -> httpx.Response:
        auth = self.config.auth
        return self.login(auth.username, auth.password, auth.product_id, auth.device_id)

    def login_and_store_tokens(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        product_id: Optional[str] = None,
        device_id: Optional[str] = None,
    ) -> httpx.Response:
        """Log in and keep the access token for subsequent requests.

        Credentials default to the configured ones. On success the token is
        also persisted through the `updateEnvFile` task when a registry is
        attached.
        """
        auth = self.config.auth
        resp = self.login(
            username if username is not None else auth.username,
            password if password is not None else auth.password,
            product_id,
            device_id,
        )
        if resp.status_code == 200:
            token = _access_token(resp)
            if token:
                self.access_token = token
                if self.tasks is not None:
                    self.tasks.run("updateEnvFile", {"key": "ACCESS_TOKEN", "value": token})
        return resp

    # ------------------
    # Create / update
    # ------------------

    def _headers(self, authenticated: bool) -> Dict[str, str]:
        return self.auth_headers() if authenticated else {"Content-Type": "application/json"}

    def create_question(
        self,
        qtype: QType,
        payload: Mapping[str, Any],
        overrides: Optional[Mapping[str, Any]] = None,
        *,
        authenticated: bool = True,
    ) -> httpx.Response:
        body = merge_payload(payload, overrides)
        return self.request("POST", create_path(_qt(qtype)), json=body, headers=self._headers(authenticated))

    def create_question_from_fixture(
        self,
        qtype: QType,
        fixture_path: str,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> httpx.Response:
        return self.create_question(qtype, load_fixture(fixture_path, self.fixtures_dir), overrides)

    def create_question_and_store(
        self,
        qtype: QType,
        payload: Mapping[str, Any],
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> httpx.Response:
        resp = self.create_question(qtype, payload, overrides)
        if resp.status_code == 201:
            body = resp.json()
            self.last_created = (body["content_id"], body["content_row_id"])
        return resp

    def update_question(
        self,
        qtype: QType,
        content_id: str,
        payload: Mapping[str, Any],
        overrides: Optional[Mapping[str, Any]] = None,
        *,
        authenticated: bool = True,
    ) -> httpx.Response:
        body = merge_payload(payload, overrides)
        path = update_path(_qt(qtype), _segment(content_id))
        return self.request("PUT", path, json=body, headers=self._headers(authenticated))

    def update_question_from_fixture(
        self,
        qtype: QType,
        content_id: str,
        fixture_path: str,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> httpx.Response:
        return self.update_question(qtype, content_id, load_fixture(fixture_path, self.fixtures_dir), overrides)

    def update_question_details(
        self,
        qtype: QType,
        content_id: str,
        content_details: Mapping[str, Any],
        create_new_version: bool = False,
    ) -> httpx.Response:
        body = {"create_new_version": create_new_version, "content_details": dict(content_details)}
        return self.update_question(qtype, content_id, body)

    # ------------------
    # Retrieval
    # ------------------

    def get_content(
        self,
        content_id: str,
        languages: Optional[str] = None,
        encrypt: Optional[Union[bool, str]] = None,
        extra_params: Optional[Mapping[str, Any]] = None,
    ) -> httpx.Response:
        params: Dict[str, Any] = dict(extra_params or {})
        if languages is not None:
            params["languages"] = languages
        headers = self.auth_headers()
        if encrypt is not None:
            headers["x-encryption"] = encryption_header(encrypt)
        return self.request("GET", items_path(_segment(content_id)), headers=headers, params=params)

    def get_content_with_languages(self, content_id: str, languages: str) -> httpx.Response:
        return self.get_content(content_id, languages=languages)

    def get_content_encrypted(self, content_id: str, encrypt: Union[bool, str]) -> httpx.Response:
        return self.get_content(content_id, encrypt=encrypt)

    def get_question(
        self,
        content_id: str,
        language: Optional[str] = None,
        encrypt: Optional[Union[bool, str]] = None,
    ) -> httpx.Response:
        params = {"language": language} if language is not None else None
        headers = self.auth_headers()
        if encrypt is not None:
            headers["x-encryption"] = encryption_header(encrypt)
        return self.request("GET", question_path(_segment(content_id)), headers=headers, params=params)


__all__ = ["ContentApiClient", "LOGIN_PATH", "encryption_header"]
