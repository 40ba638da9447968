"""
Reference datasets the build creator reads over HTTP (read-only).

  attribute weights       pageProps.attributeCalculatedWeights
  badge requirements      pageProps.badgeUnlocks or pageProps.badgeRequirements
  official build names    pageProps.buildNames
  badge max level/height  pageProps.badgeTiers

The four GETs run concurrently and the request proceeds only when all of them
succeed. Any failure or missing path is an UpstreamDataError.
"""
from __future__ import annotations

import concurrent.futures
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

import httpx

from buildlab.config import Settings, get_settings
from buildlab.errors import UpstreamDataError
from buildlab.height import height_to_inches

logger = logging.getLogger(__name__)

# dataset name -> (file under the data base URL, accepted pageProps keys in order)
DATASETS: dict[str, tuple[str, tuple[str, ...]]] = {
    "attribute_weights": ("nba2k-attribute-calculated-weights-heat.json", ("attributeCalculatedWeights",)),
    "badge_requirements": ("badge-requirements.json", ("badgeUnlocks", "badgeRequirements")),
    "build_names": ("build-names.json", ("buildNames",)),
    "badge_tiers": ("badge-max-level-by-height.json", ("badgeTiers",)),
}

ATTRIBUTE_WEIGHT_SAMPLE_SIZE = 10
BADGE_REQUIREMENT_SAMPLE_SIZE = 5


@dataclass(frozen=True)
class ReferenceData:
    """The four datasets, unwrapped from their pageProps envelopes."""
    attribute_weights: list[dict[str, Any]] = field(default_factory=list)
    badge_requirements: list[dict[str, Any]] = field(default_factory=list)
    build_names: list[dict[str, Any]] = field(default_factory=list)
    badge_tiers: list[dict[str, Any]] = field(default_factory=list)

    def attribute_weights_for_height(self, inches: int | None, limit: int = ATTRIBUTE_WEIGHT_SAMPLE_SIZE) -> list[dict[str, Any]]:
        """Attribute-weight rows whose Height matches, first `limit` of them."""
        if inches is None or not isinstance(self.attribute_weights, list):
            return []
        rows = [
            w for w in self.attribute_weights
            if isinstance(w, dict) and height_to_inches(w.get("Height")) == inches
        ]
        return rows[:limit]

    def badge_requirement_sample(self, limit: int = BADGE_REQUIREMENT_SAMPLE_SIZE) -> list[dict[str, Any]]:
        if not isinstance(self.badge_requirements, list):
            return []
        return self.badge_requirements[:limit]


ReferenceFetcher = Callable[[], ReferenceData]


def fetch_json(client: httpx.Client, url: str) -> Any:
    """GET a JSON body. Non-2xx, transport errors and timeouts become UpstreamDataError."""
    try:
        response = client.get(url)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPError as e:
        raise UpstreamDataError(f"{url}: {e!s}") from e
    except ValueError as e:
        raise UpstreamDataError(f"{url}: response is not JSON ({e!s})") from e


def extract_dataset(payload: Any, name: str, keys: tuple[str, ...]) -> Any:
    """
    Unwrap pageProps.<key>, trying each accepted key in order. An empty list is a
    valid dataset; only an absent or null path is an error.
    """
    page_props = payload.get("pageProps") if isinstance(payload, dict) else None
    if not isinstance(page_props, dict):
        raise UpstreamDataError(f"{name}: missing pageProps")
    for key in keys:
        if page_props.get(key) is not None:
            return page_props[key]
    raise UpstreamDataError(f"{name}: missing pageProps.{' / pageProps.'.join(keys)}")


def fetch_reference_data(
    settings: Settings | None = None,
    client: httpx.Client | None = None,
) -> ReferenceData:
    """Fetch and unwrap all four datasets concurrently. All-or-nothing."""
    settings = settings or get_settings()
    own_client = client is None
    if client is None:
        client = httpx.Client(timeout=settings.http_timeout, follow_redirects=True)
    try:
        with concurrent.futures.ThreadPoolExecutor(max_workers=len(DATASETS)) as ex:
            futures = {
                name: ex.submit(fetch_json, client, f"{settings.data_base_url}/{filename}")
                for name, (filename, _keys) in DATASETS.items()
            }
            payloads = {name: future.result() for name, future in futures.items()}
    finally:
        if own_client:
            client.close()

    data = {name: extract_dataset(payloads[name], name, keys) for name, (_f, keys) in DATASETS.items()}
    logger.info(
        "Reference data loaded: %d weight rows, %d badge rows, %d build names, %d badge tiers",
        *(len(v) if isinstance(v, list) else 0 for v in data.values()),
    )
    return ReferenceData(**data)
