"""
Send

The single entry point: build a request from options, run it through the
HTTP client, then hand the response to the configured handlers.
"""

from __future__ import annotations

from typing import Union

from httpc import reqid
from httpc.context import Context
from httpc.http.client import default_client, new_request
from httpc.http.header import Header
from httpc.log import from_context
from httpc.options import Option, SendConfig, apply_options
from httpc.url import RawURL


def send(ctx: Context, url: Union[str, RawURL], *options: Option) -> None:
    """
    Send a request to url configured by options.

    A request id is taken from the X-Req-Id header when the caller set one;
    otherwise a fresh id is generated. The id in any incoming request that
    created ctx is never forwarded implicitly.

    Raises:
        The first failing option's error (nothing is sent), then request
        construction, transport, cancellation, status and decoding errors,
        and anything raised by caller-supplied handlers, unchanged.
    """
    url = str(url)
    logger = from_context(ctx)

    config = SendConfig()
    err = apply_options(config, options)
    if err is not None:
        logger.error(f"send to url({url}): option failed: {err}")
        raise err

    rid = config.header.get(reqid.HEADER_KEY)
    if not rid:
        rid = reqid.random_id()
        config.header.set(reqid.HEADER_KEY, rid)

    with logger.prefixed(f"send reqid:{rid} to url({url}). "):
        logger.debug("Start")

        try:
            request = new_request(ctx, config.method, url, config.body)
        except Exception as e:
            logger.error(e)
            raise

        request.header = config.header

        client = ctx.http or default_client()
        try:
            response = client.do(request)
        except Exception as e:
            logger.error(e)
            raise

        # Body first; headers are only inspected once the body handler passed
        try:
            config.response_handler.handle(response)
        except Exception as e:
            logger.error(e)
            raise

        try:
            config.header_handler.handle(Header.from_response(response))
        except Exception as e:
            logger.error(e)
            raise

        logger.info("End")
