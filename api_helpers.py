import codecs
import json
import logging
import typing
import uuid
from typing import Any, Iterable, Optional
from urllib.parse import quote

import httpx

from config import ClientConfig


HEADER_RQ_ID = "X-Request-ID"

# RFC 3986 pchar minus "/" (segments may never introduce path levels)
_SEGMENT_SAFE = "-._~!$&'()*+,;=:@"

_JSON_SCALARS = (dict, list, int, float, bool)

logger = logging.getLogger("petstore.rest_client")


class RequestFailed(Exception):
    """
    Raised for any unsuccessful call: non-2xx status, transport error, timeout,
    oversized body, or a body that cannot be turned into the requested shape.

    status_code and body are None when no response was received.
    """

    def __init__(self, message, *, method, url, request_id,
                 status_code=None, body=None, cause=None):
        super().__init__(message)
        self.method = method
        self.url = str(url)
        self.request_id = request_id
        self.status_code = status_code
        self.body = body
        self.cause = cause

    def __str__(self):
        base = super().__str__()
        if self.status_code is not None:
            return f"{base} [{self.method} {self.url} -> {self.status_code}] {self.body or ''}".rstrip()
        return f"{base} [{self.method} {self.url}]"


class MalformedQueryParameter(ValueError):
    """Raised in strict mode for a query string that is not exactly 'key=value'."""


def sanitize_segment(value: Any) -> str:
    """Textual form of a path segment with every '/' removed, percent-escaped."""
    text = str(value).replace("/", "")
    if text in (".", ".."):
        # URL normalization would otherwise collapse a bare dot segment
        return text.replace(".", "%2E")
    return quote(text, safe=_SEGMENT_SAFE)


def build_path(base_url: str, path_segments: Iterable[Any]) -> str:
    parts = [sanitize_segment(segment) for segment in path_segments]
    # a segment made only of slashes disappears instead of creating "//"
    parts = [p for p in parts if p]
    if not parts:
        return base_url
    return base_url.rstrip("/") + "/" + "/".join(parts)


def parse_query_params(query_params: Optional[Iterable[str]], strict: bool = False) -> list[tuple[str, str]]:
    """
    Turns ["status=available", ...] into [("status", "available"), ...].

    A parameter must contain exactly one '='; either side may be empty. Anything
    else is dropped, or raises MalformedQueryParameter when strict is set.
    """
    parsed = []
    for param in query_params or ():
        text = str(param)
        key, sep, value = text.partition("=")
        if not sep or "=" in value:
            if strict:
                raise MalformedQueryParameter(f"Query parameter must look like key=value, got {text!r}")
            continue
        parsed.append((key, value))
    return parsed


def _encode_body(body: Any) -> Any:
    if hasattr(body, "to_dict"):
        return body.to_dict()
    if isinstance(body, (list, tuple)):
        return [_encode_body(item) for item in body]
    return body


def _known_encoding(charset: Optional[str]) -> str:
    # an unknown charset in Content-Type falls back to utf-8
    if not charset:
        return "utf-8"
    try:
        codecs.lookup(charset)
    except LookupError:
        return "utf-8"
    return charset


def _coerce(shape: Any, data: Any) -> Any:
    if shape is Any:
        return data

    origin = typing.get_origin(shape)
    if origin is list:
        args = typing.get_args(shape)
        if not isinstance(data, list):
            raise TypeError(f"Expected a JSON array, got {type(data).__name__}")
        item_shape = args[0] if args else Any
        return [_coerce(item_shape, item) for item in data]
    if origin is dict:
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
        args = typing.get_args(shape)
        value_shape = args[1] if len(args) == 2 else Any
        return {key: _coerce(value_shape, value) for key, value in data.items()}

    if shape is float:
        # JSON has one number type; 3 is a valid float, true is not
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            raise TypeError(f"Expected float, got {type(data).__name__}")
        return float(data)
    if shape is int and isinstance(data, bool):
        raise TypeError("Expected int, got bool")
    if shape in _JSON_SCALARS:
        if not isinstance(data, shape):
            raise TypeError(f"Expected {shape.__name__}, got {type(data).__name__}")
        return data

    from_dict = getattr(shape, "from_dict", None)
    if callable(from_dict):
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object for {shape.__name__}, got {type(data).__name__}")
        return from_dict(data)

    raise TypeError(f"Unsupported result shape: {shape!r}")


class RestClient:
    """
    Generic request builder for typed API clients.

    Every call is one blocking round trip: build the URL from ordered path
    segments (plus optional "key=value" query strings), send a fresh
    X-Request-ID, then decode the body into result_shape.

    result_shape vocabulary:
      None                  -> no content, returns None
      str / bytes           -> raw body
      dict, list, int, ...  -> decoded JSON, type checked
      Model (has from_dict) -> Model.from_dict(json)
      list[Model]           -> [Model.from_dict(item), ...]

    Failures are never retried or logged here; they surface as RequestFailed.
    """

    def __init__(self, config: Optional[ClientConfig] = None, transport: Optional[httpx.BaseTransport] = None):
        self.config = config or ClientConfig()
        self._client = httpx.Client(
            timeout=self.config.to_httpx_timeout(),
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self._client.close()

    # ----------------------------
    # Public verbs
    # ----------------------------
    def get(self, result_shape, *path_segments, query_params=None):
        return self._exchange("GET", result_shape, path_segments, query_params=query_params)

    def post(self, body, result_shape, *path_segments, query_params=None):
        return self._exchange("POST", result_shape, path_segments, body=body, query_params=query_params)

    def put(self, body, result_shape, *path_segments, query_params=None):
        return self._exchange("PUT", result_shape, path_segments, body=body, query_params=query_params)

    def delete(self, result_shape, *path_segments, body=None, query_params=None):
        return self._exchange("DELETE", result_shape, path_segments, body=body, query_params=query_params)

    def build_url(self, *path_segments, query_params=None) -> httpx.URL:
        url = httpx.URL(build_path(self.config.base_url, path_segments))
        params = parse_query_params(query_params, strict=self.config.strict_query_params)
        if params:
            url = url.copy_merge_params(params)
        return url

    # ----------------------------
    # Internals
    # ----------------------------
    def _exchange(self, method, result_shape, path_segments, body=None, query_params=None):
        request_id = str(uuid.uuid4())
        url = self.build_url(*path_segments, query_params=query_params)

        request = self._client.build_request(
            method,
            url,
            headers={HEADER_RQ_ID: request_id},
            json=_encode_body(body) if body is not None else None,
        )
        logger.debug("%s %s (%s=%s)", method, url, HEADER_RQ_ID, request_id)

        def failed(message, **extra):
            return RequestFailed(message, method=method, url=url, request_id=request_id, **extra)

        try:
            response = self._client.send(request, stream=True)
        except httpx.TimeoutException as exc:
            raise failed("Request timed out", cause=exc) from exc
        except httpx.RequestError as exc:
            raise failed("Transport error", cause=exc) from exc

        try:
            content = self._read_limited(response)
        except httpx.RequestError as exc:
            # covers broken Content-Encoding (DecodingError) as well as dropped connections
            raise failed("Error while reading response", status_code=response.status_code, cause=exc) from exc
        finally:
            response.close()

        text = content.decode(_known_encoding(response.charset_encoding), errors="replace")
        if not response.is_success:
            raise failed(f"Unexpected HTTP status {response.status_code}",
                         status_code=response.status_code, body=text)
        if len(content) > self.config.max_in_memory_size:
            raise failed(f"Response body exceeds {self.config.max_in_memory_size} bytes",
                         status_code=response.status_code)

        try:
            return self._decode(result_shape, content, text)
        except (ValueError, TypeError, KeyError) as exc:
            raise failed(f"Could not decode response as {result_shape!r}",
                         status_code=response.status_code, body=text, cause=exc) from exc

    def _read_limited(self, response: httpx.Response) -> bytes:
        # stops one chunk past the limit; the caller reports the overflow
        limit = self.config.max_in_memory_size
        chunks = []
        total = 0
        for chunk in response.iter_bytes():
            chunks.append(chunk)
            total += len(chunk)
            if total > limit:
                break
        return b"".join(chunks)

    @staticmethod
    def _decode(result_shape, content: bytes, text: str):
        if result_shape is None:
            return None
        if result_shape is bytes:
            return content
        if result_shape is str:
            return text
        return _coerce(result_shape, json.loads(text))
