import logging
from typing import Any, Optional

import requests

from shared.core.config import settings

logger = logging.getLogger(__name__)

# pooled connections to the stock service, shared by all request threads
_session = requests.Session()


def stock_url(path: str) -> str:
    return f"{settings.STOCK_SERVICE_URL.rstrip('/')}/{path.lstrip('/')}"


def create_product_in_stock(
        payload: dict,
        token: str,
        session: Optional[requests.Session] = None) -> Optional[Any]:
    """Create the inventory record of a product on the stock service.

    Exactly one POST per call: no retry and no idempotency key, so calling it
    twice for the same product leaves two stock records behind. A non-2xx
    answer raises ``requests.HTTPError``; transport failures raise the
    matching ``requests.RequestException``.
    """
    http = session or _session
    url = stock_url("/stock")

    logger.info(
        f"Provisioning stock for product {payload.get('relationId')} at {url}")
    try:
        response = http.post(
            url,
            json=payload,
            headers={"Authorization": f"Bearer {token}"},
            timeout=settings.STOCK_SERVICE_TIMEOUT,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error(
            f"Stock provisioning failed for product {payload.get('relationId')}: {e}")
        raise

    if not response.content:
        return None
    return response.json()
