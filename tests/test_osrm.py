import logging
import pytest
from unittest.mock import patch, AsyncMock, MagicMock
import httpx

from walkpath.models import Coordinate

A = Coordinate(latitude=52.52, longitude=13.405)
B = Coordinate(latitude=52.516, longitude=13.377)

OSRM_OK = {
    "code": "Ok",
    "routes": [{
        "distance": 2500.0,
        "duration": 1800.0,
        "geometry": {"type": "LineString", "coordinates": [[13.405, 52.52], [13.39, 52.518], [13.377, 52.516]]},
        "legs": [{"distance": 2500.0, "duration": 1800.0}],
    }],
}


def _mock_client(get):
    mock_client = AsyncMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    mock_client.get = get
    return mock_client


def _json_response(payload):
    # raise_for_status() and json() are sync on httpx.Response
    mock_resp = MagicMock()
    mock_resp.raise_for_status = MagicMock()
    mock_resp.json = MagicMock(return_value=payload)
    return mock_resp


def test_osrm_module_has_logger():
    import walkpath.core.osrm as osrm_mod
    assert hasattr(osrm_mod, 'logger')


def test_route_url_is_lon_lat():
    from walkpath.core.osrm import OsrmRouteProvider
    provider = OsrmRouteProvider("http://osrm.local:5000/", profile="foot")
    url = provider._route_url([A, B])
    assert url == "http://osrm.local:5000/route/v1/foot/13.405,52.52;13.377,52.516"


@pytest.mark.anyio
async def test_route_parses_geometry_and_legs():
    from walkpath.core.osrm import OsrmRouteProvider

    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_client = _mock_client(AsyncMock(return_value=_json_response(OSRM_OK)))
        mock_client_cls.return_value = mock_client

        route = await OsrmRouteProvider().route([A, B])

    assert route.type == "LineString"
    assert route.coordinates[0] == [13.405, 52.52]
    assert route.distance_km == pytest.approx(2.5)
    assert route.duration_minutes == pytest.approx(30.0)
    assert len(route.legs) == 1
    assert route.legs[0].distance_km == pytest.approx(2.5)

    _, kwargs = mock_client_cls.call_args
    assert kwargs["headers"]["User-Agent"].startswith("walkpath")
    get_kwargs = mock_client.get.await_args.kwargs
    assert get_kwargs["params"]["geometries"] == "geojson"


@pytest.mark.anyio
async def test_distance_km_uses_route():
    from walkpath.core.osrm import OsrmRouteProvider

    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_client_cls.return_value = _mock_client(AsyncMock(return_value=_json_response(OSRM_OK)))
        distance = await OsrmRouteProvider().distance_km(A, B)

    assert distance == pytest.approx(2.5)


@pytest.mark.anyio
async def test_single_coordinate_rejected():
    from walkpath.core.osrm import OsrmRouteProvider
    with pytest.raises(ValueError):
        await OsrmRouteProvider().route([A])


@pytest.mark.anyio
async def test_timeout_logs_warning_and_raises(caplog):
    from walkpath.core.osrm import OsrmRouteProvider
    from walkpath.errors import RoutingServiceError

    with caplog.at_level(logging.WARNING, logger="walkpath.core.osrm"):
        with patch("httpx.AsyncClient") as mock_client_cls:
            mock_client_cls.return_value = _mock_client(
                AsyncMock(side_effect=httpx.TimeoutException("timeout"))
            )
            with pytest.raises(RoutingServiceError, match="timed out"):
                await OsrmRouteProvider().route([A, B])

    assert any(
        r.name == "walkpath.core.osrm" and r.levelno == logging.WARNING
        and "timed out" in r.message.lower()
        for r in caplog.records
    )


@pytest.mark.anyio
async def test_http_status_error_logs_status(caplog):
    from walkpath.core.osrm import OsrmRouteProvider
    from walkpath.errors import RoutingServiceError

    mock_request = MagicMock()
    mock_response_obj = MagicMock()
    mock_response_obj.status_code = 503

    def raise_status():
        raise httpx.HTTPStatusError("503", request=mock_request, response=mock_response_obj)

    mock_resp = MagicMock()
    mock_resp.raise_for_status = raise_status

    with caplog.at_level(logging.WARNING, logger="walkpath.core.osrm"):
        with patch("httpx.AsyncClient") as mock_client_cls:
            mock_client_cls.return_value = _mock_client(AsyncMock(return_value=mock_resp))
            with pytest.raises(RoutingServiceError, match="503"):
                await OsrmRouteProvider().route([A, B])

    assert any("503" in r.message for r in caplog.records)


@pytest.mark.anyio
async def test_connection_error_raises():
    from walkpath.core.osrm import OsrmRouteProvider
    from walkpath.errors import RoutingServiceError

    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_client_cls.return_value = _mock_client(
            AsyncMock(side_effect=httpx.ConnectError("refused"))
        )
        with pytest.raises(RoutingServiceError, match="starting up"):
            await OsrmRouteProvider().route([A, B])


@pytest.mark.anyio
async def test_no_route_found(caplog):
    from walkpath.core.osrm import OsrmRouteProvider
    from walkpath.errors import RoutingServiceError

    with caplog.at_level(logging.WARNING, logger="walkpath.core.osrm"):
        with patch("httpx.AsyncClient") as mock_client_cls:
            mock_client_cls.return_value = _mock_client(
                AsyncMock(return_value=_json_response({"code": "NoRoute", "routes": []}))
            )
            with pytest.raises(RoutingServiceError, match="No route"):
                await OsrmRouteProvider().route([A, B])

    assert any("NoRoute" in r.message for r in caplog.records)


@pytest.mark.anyio
async def test_health_check():
    from walkpath.core.osrm import OsrmRouteProvider

    ok = MagicMock()
    ok.status_code = 200
    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_client_cls.return_value = _mock_client(AsyncMock(return_value=ok))
        assert await OsrmRouteProvider().health_check() is True

    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_client_cls.return_value = _mock_client(
            AsyncMock(side_effect=httpx.ConnectError("refused"))
        )
        assert await OsrmRouteProvider().health_check() is False
