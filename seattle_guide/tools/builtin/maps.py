"""Google Maps tools — place search, geocoding and directions."""
import json
import logging
from typing import Any, Dict, Optional, Union

import httpx
from pydantic import BaseModel, Field

from ...config import DEFAULT_SEATTLE_COORDINATES
from ...errors import MapsApiError
from ..registry import ToolContext, ToolName, register_tool

logger = logging.getLogger(__name__)

MAPS_API = "https://maps.googleapis.com/maps/api"
PLACE_SEARCH_URL = f"{MAPS_API}/place/textsearch/json"
GEOCODE_URL = f"{MAPS_API}/geocode/json"
DIRECTIONS_URL = f"{MAPS_API}/directions/json"

# Appended to every place name sent to the directions API
REGION_SUFFIX = ", WA"


def ensure_place_is_descriptive_enough(place: str) -> str:
    """Disambiguate a place name for the directions API.

    The API rejects bare neighborhood names like "Ballard" but accepts
    "Ballard, WA", and tolerates a doubled ", WA" suffix, so the suffix is
    appended unconditionally. Known limitation: wrong for places outside
    Washington state.
    """
    return f"{place}{REGION_SUFFIX}"


def _without_key(params: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in params.items() if k != "key"}


async def _maps_get(ctx: ToolContext, url: str, params: Dict[str, Any], api_label: str) -> str:
    """One GET against a Maps web service; returns the JSON body re-serialized as text.

    Non-2xx responses and transport failures are logged (without the key) and raised
    as MapsApiError.
    """
    query = dict(params, key=ctx.config.google_maps_api_key)
    try:
        resp = await ctx.http.get(url, params=query)
        resp.raise_for_status()
        body = resp.json()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.error(f"Got error calling google maps {api_label} API: HTTP {status} args={_without_key(query)}")
        # httpx messages embed the request URL, which carries the key
        raise MapsApiError(api_label, f"HTTP {status}", status_code=status) from None
    except (httpx.HTTPError, ValueError) as e:
        reason = type(e).__name__
        logger.error(f"Got error calling google maps {api_label} API: {reason} args={_without_key(query)}")
        raise MapsApiError(api_label, reason) from None
    logger.info(f"Got response from google maps {api_label} API: args={_without_key(query)} "
                f"response={json.dumps(body)}")
    return json.dumps(body)


class SearchForPlacesArgs(BaseModel):
    query: str = Field(
        description='The search query, e.g. "brunch" or "parks" or "tattoo parlor"',
    )
    location: Optional[str] = Field(
        None,
        description=(
            "The location to search around, given as lat/long coords. "
            f"If omitted, it defaults to downtown Seattle ({DEFAULT_SEATTLE_COORDINATES})"
        ),
    )
    searchRadius: Optional[Union[int, float]] = Field(
        None,
        description="The radius to search around, in meters. If omitted, it defaults to 1000 meters",
    )


@register_tool(
    ToolName.SEARCH_FOR_PLACES,
    description="Search for places (restaurants, businesses, etc) in a given area",
    args_model=SearchForPlacesArgs,
)
async def search_for_places(args: SearchForPlacesArgs, ctx: ToolContext) -> str:
    params = {
        "query": args.query,
        "location": args.location or ctx.config.default_location,
        "radius": ctx.config.default_search_radius if args.searchRadius is None else args.searchRadius,
    }
    return await _maps_get(ctx, PLACE_SEARCH_URL, params, "place search")


class GetLatLongArgs(BaseModel):
    location: str = Field(
        description=(
            'The location to get the lat/long coordinates of, '
            'e.g. "Seattle, WA" or "123 My Street, Bellevue WA"'
        ),
    )


@register_tool(
    ToolName.GET_LAT_LONG_OF_LOCATION,
    description="Get the lat/long coordinates of a location.",
    args_model=GetLatLongArgs,
)
async def get_lat_long_of_location(args: GetLatLongArgs, ctx: ToolContext) -> str:
    return await _maps_get(ctx, GEOCODE_URL, {"address": args.location}, "geocode")


_PLACE_HINT = (
    "or a Google Maps place ID, or lat/long coords. If you give a location name, "
    "you need to include the city and state. Do not just give the name of a neighborhood."
)


class GetDirectionsArgs(BaseModel):
    origin: str = Field(
        description=f'The starting location, e.g. "South Lake Union, Seattle, WA" or "123 My Street, Bellevue WA", {_PLACE_HINT}',
    )
    destination: str = Field(
        description=f'The ending location, e.g. "Fremont, Seattle, WA" or "123 My Street, Bellevue WA", {_PLACE_HINT}',
    )


@register_tool(
    ToolName.GET_DIRECTIONS,
    description="Get directions between two locations via a variety of ways (walking, driving, public transit, etc.)",
    args_model=GetDirectionsArgs,
)
async def get_directions(args: GetDirectionsArgs, ctx: ToolContext) -> str:
    params = {
        "destination": ensure_place_is_descriptive_enough(args.destination),
        "origin": ensure_place_is_descriptive_enough(args.origin),
    }
    return await _maps_get(ctx, DIRECTIONS_URL, params, "directions")
