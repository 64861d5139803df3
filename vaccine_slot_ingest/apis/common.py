"""Common API tooling"""
import asyncio
from typing import Any, Mapping, Optional, Type, TypeVar

import aiohttp
import orjson
import pydantic

from ..errors import DecodeError, FetchError, HTTPStatusError

# Amount of an error response body to keep for logging
ERROR_BODY_PREVIEW = 200

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def encode_body(model: pydantic.BaseModel) -> bytes:
    """Serialize a request model using its wire (camelCase) names"""
    return orjson.dumps(model.model_dump(by_alias=True))


async def request_json(
    session: aiohttp.ClientSession,
    method: str,
    url: str,
    body: Optional[bytes] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> Any:
    """Send a request and return the decoded json body.

    Raises FetchError for network failures, HTTPStatusError for non 2xx
    responses and DecodeError when the body isn't json.
    """
    try:
        async with session.request(
            method, url, data=body, headers=headers
        ) as response:
            content = await response.read()
            status = response.status
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise FetchError(f"{method} failed: {e!r}", url) from e

    if not 200 <= status < 300:
        preview = content[:ERROR_BODY_PREVIEW].decode("utf-8", errors="replace")
        raise HTTPStatusError(status, url, preview)

    try:
        return orjson.loads(content)
    except orjson.JSONDecodeError as e:
        raise DecodeError(f"Response is not valid json: {e}", url) from e


def parse_model(model: Type[ModelT], data: Any, url: Optional[str] = None) -> ModelT:
    """Validate decoded json against a model, raising DecodeError on mismatch"""
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise DecodeError(f"Unexpected {model.__name__} shape: {e}", url) from e
